"""Split an order between the upfront charge and cash on delivery.

Digital goods are always paid upfront. Physical goods are always paid on
delivery; only the shipping fee can be pulled upfront, and it moves as a
whole as soon as one physical product asks for it.
"""

from collections.abc import Mapping

from loguru import logger

from checkout_engine.domain.cart import (
    CartItem,
    EffectiveProductFields,
    PaymentBreakdown,
    ProductData,
    ProductType,
)
from checkout_engine.shared.money import format_money


def resolve_effective_product_fields(
    item: CartItem, catalog_entry: ProductData | None
) -> EffectiveProductFields:
    """Merge the catalog row over the item's cached copies."""
    product_type = (catalog_entry and catalog_entry.product_type) or item.product_type
    collect_upfront = None
    upfront_method = None
    if catalog_entry is not None:
        collect_upfront = catalog_entry.collect_shipping_upfront
        upfront_method = catalog_entry.upfront_shipping_payment_method
    if collect_upfront is None:
        collect_upfront = item.collect_shipping_upfront
    if upfront_method is None:
        upfront_method = item.upfront_shipping_payment_method

    return EffectiveProductFields(
        product_type=product_type or ProductType.physical,
        collect_shipping_upfront=bool(collect_upfront),
        upfront_shipping_payment_method=upfront_method,
    )


def _lookup(
    product_data_map: Mapping[str, ProductData] | None, product_id: str
) -> ProductData | None:
    return product_data_map.get(product_id) if product_data_map else None


def calculate_payment_breakdown(
    items: list[CartItem],
    shipping_cost: float,
    product_data_map: Mapping[str, ProductData] | None = None,
) -> PaymentBreakdown:
    upfront_amount = 0.0
    delivery_amount = 0.0
    digital_total = 0.0
    cod_total = 0.0
    cod_with_upfront = 0.0
    cod_without_upfront = 0.0
    upfront_shipping_requested = False

    for item in items:
        fields = resolve_effective_product_fields(
            item, _lookup(product_data_map, item.product_id)
        )
        line_total = item.line_total

        if fields.product_type == ProductType.digital:
            digital_total += line_total
            upfront_amount += line_total
            continue

        cod_total += line_total
        delivery_amount += line_total
        if fields.collect_shipping_upfront:
            upfront_shipping_requested = True
            cod_with_upfront += line_total
        else:
            cod_without_upfront += line_total

    if upfront_shipping_requested:
        upfront_shipping_fee, delivery_shipping_fee = shipping_cost, 0.0
        upfront_amount += shipping_cost
    else:
        upfront_shipping_fee, delivery_shipping_fee = 0.0, shipping_cost
        delivery_amount += shipping_cost

    logger.debug(
        f"Payment split: upfront={upfront_amount} delivery={delivery_amount} "
        f"| shipping {'upfront' if upfront_shipping_requested else 'on delivery'}"
    )

    return PaymentBreakdown(
        upfront_amount=upfront_amount,
        delivery_amount=delivery_amount,
        upfront_shipping_fee=upfront_shipping_fee,
        delivery_shipping_fee=delivery_shipping_fee,
        digital_products_total=digital_total,
        cod_products_total=cod_total,
        cod_products_with_upfront_shipping=cod_with_upfront,
        cod_products_without_upfront_shipping=cod_without_upfront,
        has_upfront_payment=upfront_amount > 0,
        has_delivery_payment=delivery_amount > 0,
    )


def requires_upfront_payment(
    items: list[CartItem],
    product_data_map: Mapping[str, ProductData] | None = None,
) -> bool:
    """True if any item is digital or collects its shipping fee upfront."""
    for item in items:
        fields = resolve_effective_product_fields(
            item, _lookup(product_data_map, item.product_id)
        )
        if fields.product_type == ProductType.digital or fields.collect_shipping_upfront:
            return True
    return False


def get_payment_breakdown_message(
    breakdown: PaymentBreakdown,
    currency_code: str = "BDT",
    precision: int = 2,
) -> str | None:
    """Customer-facing summary of what is paid now and what on delivery.

    Returns ``None`` when nothing is due upfront, or when only digital goods
    are, since the regular checkout flow already covers that case.
    """
    if not breakdown.has_upfront_payment:
        return None

    def money(amount: float) -> str:
        return format_money(amount, currency_code, precision)

    parts: list[str] = []
    if breakdown.upfront_shipping_fee > 0 and breakdown.digital_products_total > 0:
        upfront = []
        if breakdown.cod_products_with_upfront_shipping > 0:
            upfront.append(
                f"shipping fee {money(breakdown.upfront_shipping_fee)} for COD product"
            )
        upfront.append(f"digital product {money(breakdown.digital_products_total)}")
        parts.append(
            f"To place your order, you need to pay {' and '.join(upfront)}, "
            f"total {money(breakdown.upfront_amount)} to complete the order"
        )
    elif breakdown.upfront_shipping_fee > 0:
        parts.append(
            f"To place your order, you need to pay shipping fee "
            f"{money(breakdown.upfront_shipping_fee)} and product price "
            f"{money(breakdown.cod_products_total)} upon delivery"
        )
    else:
        return None

    if breakdown.has_delivery_payment:
        due = []
        if breakdown.cod_products_total > 0:
            due.append(f"product price {money(breakdown.cod_products_total)}")
        if breakdown.delivery_shipping_fee > 0:
            due.append(f"shipping fee {money(breakdown.delivery_shipping_fee)}")
        if due:
            parts.append(f"You will pay {' and '.join(due)} upon delivery")

    return ". ".join(parts) + "."
