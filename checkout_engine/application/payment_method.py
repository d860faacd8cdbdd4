from collections.abc import Mapping

from loguru import logger

from checkout_engine.application.payment_split import resolve_effective_product_fields
from checkout_engine.domain.cart import CartItem, ProductData, ProductType


def get_upfront_payment_method(
    items: list[CartItem],
    product_data_map: Mapping[str, ProductData] | None,
    customer_selected_method: str | None,
    available_methods: list[str],
) -> str | None:
    """Pick the gateway that charges the upfront amount.

    Priority:
    1. the customer's (available) choice when the cart holds a digital product;
    2. the method required by the first COD product that collects shipping
       upfront, if that method is available;
    3. the customer's (available) choice;
    4. the first available method, or ``None``.
    """
    product_data_map = product_data_map or {}
    customer_choice = (
        customer_selected_method
        if customer_selected_method and customer_selected_method in available_methods
        else None
    )

    resolved = [
        resolve_effective_product_fields(item, product_data_map.get(item.product_id))
        for item in items
    ]

    if customer_choice and any(f.product_type == ProductType.digital for f in resolved):
        return customer_choice

    required = [
        f.upfront_shipping_payment_method
        for f in resolved
        if f.product_type == ProductType.physical
        and f.collect_shipping_upfront
        and f.upfront_shipping_payment_method
    ]
    if required:
        # Several products may disagree; the first one in cart order wins
        if required[0] in available_methods:
            return required[0]
        logger.warning(
            f"Upfront method {required[0]!r} required by product is not enabled "
            f"— falling back to {customer_choice or 'first available'}"
        )

    if customer_choice:
        return customer_choice

    return available_methods[0] if available_methods else None
