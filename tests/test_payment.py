"""Tests for the upfront/delivery payment split and the upfront method resolver."""

import pytest

from checkout_engine.application.payment_method import get_upfront_payment_method
from checkout_engine.application.payment_split import (
    calculate_payment_breakdown,
    get_payment_breakdown_message,
    requires_upfront_payment,
    resolve_effective_product_fields,
)
from checkout_engine.domain.cart import CartItem, PaymentBreakdown, ProductData, ProductType

METHODS = ["bkash", "nagad", "stripe"]


def _make_item(item_id: str = "1", **kwargs) -> CartItem:
    defaults = dict(id=item_id, product_id=f"p{item_id}", quantity=1, price=100)
    return CartItem(**{**defaults, **kwargs})


def _digital(item_id: str = "d", price: float = 500) -> CartItem:
    return _make_item(item_id, price=price, product_type="digital")


def _cod(item_id: str = "c", price: float = 1000, **kwargs) -> CartItem:
    return _make_item(item_id, price=price, product_type="physical", **kwargs)


# ---------------------------------------------------------------------------
# Effective product fields
# ---------------------------------------------------------------------------


def test_catalog_entry_overrides_cached_item_fields() -> None:
    item = _cod(collect_shipping_upfront=False, upfront_shipping_payment_method="nagad")
    entry = ProductData(
        id="pc",
        product_type="digital",
        collect_shipping_upfront=True,
        upfront_shipping_payment_method="bkash",
    )

    fields = resolve_effective_product_fields(item, entry)

    assert fields.product_type == ProductType.digital
    assert fields.collect_shipping_upfront is True
    assert fields.upfront_shipping_payment_method == "bkash"


def test_missing_values_fall_back_to_item_then_defaults() -> None:
    """Unset catalog columns fall back to the item copy, then physical / no upfront."""
    entry = ProductData(id="p1")

    from_item = resolve_effective_product_fields(
        _make_item(collect_shipping_upfront=True), entry
    )
    from_defaults = resolve_effective_product_fields(_make_item(), None)

    assert from_item.product_type == ProductType.physical
    assert from_item.collect_shipping_upfront is True
    assert from_defaults.product_type == ProductType.physical
    assert from_defaults.collect_shipping_upfront is False
    assert from_defaults.upfront_shipping_payment_method is None


# ---------------------------------------------------------------------------
# Payment split
# ---------------------------------------------------------------------------


def test_mixed_cart_pays_digital_and_shipping_upfront() -> None:
    """Digital price and the whole shipping fee go upfront; physical price on delivery."""
    items = [_digital(price=500), _cod(price=1000, collect_shipping_upfront=True)]

    breakdown = calculate_payment_breakdown(items, 100)

    assert breakdown.upfront_amount == 600
    assert breakdown.delivery_amount == 1000
    assert breakdown.upfront_shipping_fee == 100
    assert breakdown.delivery_shipping_fee == 0
    assert breakdown.digital_products_total == 500
    assert breakdown.cod_products_total == 1000
    assert breakdown.cod_products_with_upfront_shipping == 1000
    assert breakdown.has_upfront_payment is True
    assert breakdown.has_delivery_payment is True


def test_no_upfront_shipping_puts_everything_on_delivery() -> None:
    items = [_cod("1", price=300), _cod("2", price=200, quantity=2)]

    breakdown = calculate_payment_breakdown(items, 100)

    assert breakdown.upfront_amount == 0
    assert breakdown.delivery_amount == 300 + 400 + 100
    assert breakdown.delivery_shipping_fee == 100
    assert breakdown.cod_products_without_upfront_shipping == 700
    assert breakdown.has_upfront_payment is False
    assert breakdown.has_delivery_payment is True


def test_one_opt_in_moves_the_whole_shipping_fee_upfront() -> None:
    """Shipping is not split per item: one opted-in product pulls all of it."""
    items = [_cod("1", price=300), _cod("2", price=200, collect_shipping_upfront=True)]

    breakdown = calculate_payment_breakdown(items, 90)

    assert breakdown.upfront_amount == 90
    assert breakdown.upfront_shipping_fee == 90
    assert breakdown.delivery_amount == 500
    assert breakdown.cod_products_with_upfront_shipping == 200
    assert breakdown.cod_products_without_upfront_shipping == 300


def test_digital_only_cart_has_no_delivery_payment() -> None:
    breakdown = calculate_payment_breakdown([_digital(price=250)], 0)
    assert breakdown.upfront_amount == 250
    assert breakdown.has_delivery_payment is False


def test_catalog_map_decides_upfront_shipping() -> None:
    items = [_make_item("1", price=400)]
    catalog = {"p1": ProductData(id="p1", product_type="physical", collect_shipping_upfront=True)}

    breakdown = calculate_payment_breakdown(items, 60, catalog)

    assert breakdown.upfront_amount == 60
    assert breakdown.delivery_amount == 400


def test_empty_cart_breakdown() -> None:
    assert calculate_payment_breakdown([], 0) == PaymentBreakdown()
    assert calculate_payment_breakdown([], 50).delivery_amount == 50


def test_breakdown_is_idempotent() -> None:
    items = [_digital(), _cod(collect_shipping_upfront=True)]
    assert calculate_payment_breakdown(items, 75) == calculate_payment_breakdown(items, 75)


def test_requires_upfront_payment() -> None:
    assert requires_upfront_payment([_cod()]) is False
    assert requires_upfront_payment([_cod(), _digital()]) is True
    assert requires_upfront_payment([_cod(collect_shipping_upfront=True)]) is True
    assert requires_upfront_payment([]) is False


# ---------------------------------------------------------------------------
# Breakdown message
# ---------------------------------------------------------------------------


def test_message_for_shipping_only_upfront() -> None:
    breakdown = calculate_payment_breakdown([_cod(collect_shipping_upfront=True)], 100)

    message = get_payment_breakdown_message(breakdown, "BDT")

    assert message == (
        "To place your order, you need to pay shipping fee ৳100.00 and product "
        "price ৳1000.00 upon delivery. You will pay product price ৳1000.00 upon delivery."
    )


def test_message_for_digital_and_upfront_shipping() -> None:
    breakdown = calculate_payment_breakdown(
        [_digital(price=500), _cod(price=1000, collect_shipping_upfront=True)], 100
    )

    message = get_payment_breakdown_message(breakdown, "USD")

    assert message.startswith(
        "To place your order, you need to pay shipping fee $100.00 for COD product "
        "and digital product $500.00, total $600.00 to complete the order."
    )
    assert message.endswith("You will pay product price $1000.00 upon delivery.")


@pytest.mark.parametrize(
    "items",
    [[_cod()], [_digital()], [_digital(), _cod()]],
)
def test_no_message_without_upfront_shipping(items: list[CartItem]) -> None:
    """No message when nothing is due upfront, or only digital goods are."""
    breakdown = calculate_payment_breakdown(items, 100)
    assert get_payment_breakdown_message(breakdown) is None


# ---------------------------------------------------------------------------
# Upfront payment method
# ---------------------------------------------------------------------------


def test_customer_choice_wins_when_cart_has_digital_product() -> None:
    """Digital carts use the customer's method even over a product-required one."""
    items = [
        _digital(),
        _cod(collect_shipping_upfront=True, upfront_shipping_payment_method="nagad"),
    ]
    assert get_upfront_payment_method(items, {}, "bkash", METHODS) == "bkash"


def test_product_required_method_beats_customer_choice() -> None:
    items = [_cod(collect_shipping_upfront=True, upfront_shipping_payment_method="nagad")]
    assert get_upfront_payment_method(items, {}, "bkash", METHODS) == "nagad"


def test_first_product_method_wins() -> None:
    items = [
        _cod("1", collect_shipping_upfront=True, upfront_shipping_payment_method="stripe"),
        _cod("2", collect_shipping_upfront=True, upfront_shipping_payment_method="nagad"),
    ]
    assert get_upfront_payment_method(items, None, None, METHODS) == "stripe"


def test_product_method_from_catalog_map() -> None:
    items = [_make_item("1")]
    catalog = {
        "p1": ProductData(
            id="p1",
            product_type="physical",
            collect_shipping_upfront=True,
            upfront_shipping_payment_method="nagad",
        )
    }
    assert get_upfront_payment_method(items, catalog, "bkash", METHODS) == "nagad"


def test_unavailable_product_method_falls_back_to_customer_choice() -> None:
    items = [_cod(collect_shipping_upfront=True, upfront_shipping_payment_method="eps")]
    assert get_upfront_payment_method(items, {}, "stripe", METHODS) == "stripe"
    assert get_upfront_payment_method(items, {}, None, METHODS) == "bkash"


def test_method_without_upfront_flag_is_ignored() -> None:
    items = [_cod(upfront_shipping_payment_method="nagad")]
    assert get_upfront_payment_method(items, {}, None, METHODS) == "bkash"


def test_invalid_customer_choice_is_ignored() -> None:
    assert get_upfront_payment_method([_digital()], {}, "paypal", METHODS) == "bkash"


def test_no_available_methods_yields_none() -> None:
    assert get_upfront_payment_method([], {}, None, []) is None
    assert get_upfront_payment_method([_digital()], None, "bkash", []) is None
