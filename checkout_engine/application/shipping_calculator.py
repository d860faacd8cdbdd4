"""Order shipping cost: location fee, weight tiers, product overrides and free-shipping rules."""

from loguru import logger

from checkout_engine.domain.cart import CartItem
from checkout_engine.domain.shipping import (
    ShippingAddress,
    ShippingBreakdown,
    ShippingConfigType,
    ShippingQuote,
    ShippingSettings,
)


def normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def calculate_base_shipping_fee(
    settings: ShippingSettings, address: ShippingAddress
) -> float:
    """Return the location fee for ``address``.

    Priority: area rule > exact city rule > rule city contained in the
    area or free-text address > rest of country.
    """
    city = normalize(address.city)
    area = normalize(address.area)
    address_text = normalize(address.address)

    if area:
        for rule in settings.area_rules:
            if normalize(rule.area) == area:
                return rule.fee

    if city:
        for rule in settings.city_rules:
            if normalize(rule.city) == city:
                return rule.fee

    haystacks = [h for h in (area, address_text) if h]
    if haystacks:
        for rule in settings.city_rules:
            rule_city = normalize(rule.city)
            if rule_city and any(rule_city in h for h in haystacks):
                return rule.fee

    return settings.rest_of_country_fee


def calculate_weight_based_fee(settings: ShippingSettings, total_weight: float) -> float:
    """Return the fee of the first tier (ascending) that covers ``total_weight``.

    A weight above every tier uses the heaviest tier's fee.
    """
    if not settings.weight_tiers or total_weight <= 0:
        return 0.0

    tiers = sorted(settings.weight_tiers, key=lambda t: t.max_weight_grams)
    for tier in tiers:
        if total_weight <= tier.max_weight_grams:
            return tier.fee
    return tiers[-1].fee


def _product_specific_fee(item: CartItem) -> float:
    config = item.shipping_config
    if config is None:
        return 0.0

    match config.type:
        case ShippingConfigType.fixed:
            return config.fixed_fee * item.quantity
        case ShippingConfigType.weight_surcharge:
            return (item.weight_grams or 0.0) * item.quantity * config.weight_surcharge
        case _:
            # default, free and custom_options add nothing here
            return 0.0


def _has_free_shipping(item: CartItem) -> bool:
    config = item.shipping_config
    return config is not None and (
        config.free_shipping_enabled or config.type == ShippingConfigType.free
    )


def compute_order_shipping(
    settings: ShippingSettings | None,
    items: list[CartItem],
    address: ShippingAddress,
    subtotal: float = 0.0,
) -> ShippingQuote:
    """Calculate the shipping cost for an entire order.

    Disabled or missing settings mean free shipping. The returned breakdown
    keeps every intermediate fee for display.
    """
    if settings is None or not settings.enabled:
        return ShippingQuote(shipping_cost=0.0, is_free_shipping=True)

    total_weight = sum((item.weight_grams or 0.0) * item.quantity for item in items)
    has_free_shipping_product = any(_has_free_shipping(item) for item in items)

    base_fee = calculate_base_shipping_fee(settings, address)
    weight_fee = calculate_weight_based_fee(settings, total_weight)
    product_specific_fees = sum(_product_specific_fee(item) for item in items)
    total_before_discount = base_fee + weight_fee + product_specific_fees

    # First matching rule wins; each waives the whole fee
    if has_free_shipping_product:
        reason = "product"
    elif settings.free_shipping_threshold and subtotal >= settings.free_shipping_threshold:
        reason = "order threshold"
    elif (
        settings.free_shipping_min_weight_grams
        and total_weight >= settings.free_shipping_min_weight_grams
    ):
        reason = "weight threshold"
    else:
        reason = None

    discount = total_before_discount if reason else 0.0
    shipping_cost = max(0.0, total_before_discount - discount)

    logger.debug(
        f"Shipping: base={base_fee} weight={weight_fee} ({total_weight}g) "
        f"product={product_specific_fees} discount={discount} | free: {reason or 'no'}"
    )

    return ShippingQuote(
        shipping_cost=shipping_cost,
        is_free_shipping=reason is not None,
        breakdown=ShippingBreakdown(
            base_fee=base_fee,
            weight_fee=weight_fee,
            product_specific_fees=product_specific_fees,
            total_before_discount=total_before_discount,
            discount=discount,
        ),
    )


def compute_shipping_for_address(
    settings: ShippingSettings | None, address: ShippingAddress
) -> float | None:
    """Location fee only, or ``None`` when shipping is not configured."""
    if settings is None or not settings.enabled:
        return None
    return calculate_base_shipping_fee(settings, address)
