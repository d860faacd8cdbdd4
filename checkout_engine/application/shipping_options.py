from checkout_engine.domain.shipping import (
    ShippingAddress,
    ShippingOption,
    ShippingOptionType,
    ShippingSettings,
)
from checkout_engine.shared.money import format_money

REST_OF_COUNTRY_ID = "rest_of_country"


def _label(name: str, fee: float, label: str | None, currency_code: str, precision: int) -> str:
    if label:
        return label
    # Whole fees are shown without decimals
    digits = 0 if fee == int(fee) else precision
    return f"{name} ({format_money(fee, currency_code, digits)})"


def get_available_shipping_options(
    settings: ShippingSettings | None,
    currency_code: str = "BDT",
    precision: int = 2,
) -> list[ShippingOption]:
    """Return the shipping choices to present at checkout.

    Area rules come first, then city rules, then a single rest-of-country
    option. Empty unless shipping is enabled and options are shown at checkout.
    """
    if settings is None or not (settings.enabled and settings.show_options_at_checkout):
        return []

    options = [
        ShippingOption(
            id=f"area_{index}",
            type=ShippingOptionType.area,
            name=rule.area,
            label=_label(rule.area, rule.fee, rule.label, currency_code, precision),
            fee=rule.fee,
        )
        for index, rule in enumerate(settings.area_rules)
    ]
    options.extend(
        ShippingOption(
            id=f"city_{index}",
            type=ShippingOptionType.city,
            name=rule.city,
            label=_label(rule.city, rule.fee, rule.label, currency_code, precision),
            fee=rule.fee,
        )
        for index, rule in enumerate(settings.city_rules)
    )

    name = settings.country or "Rest of country"
    options.append(
        ShippingOption(
            id=REST_OF_COUNTRY_ID,
            type=ShippingOptionType.rest_of_country,
            name=name,
            label=_label(
                name,
                settings.rest_of_country_fee,
                settings.rest_of_country_label,
                currency_code,
                precision,
            ),
            fee=settings.rest_of_country_fee,
        )
    )
    return options


def get_default_shipping_option(options: list[ShippingOption]) -> ShippingOption | None:
    """Preselect rest of country, falling back to the first option."""
    for option in options:
        if option.type == ShippingOptionType.rest_of_country:
            return option
    return options[0] if options else None


def apply_shipping_option_to_address(
    option: ShippingOption, address: ShippingAddress
) -> ShippingAddress:
    """Return ``address`` with the option's field set and the competing one cleared."""
    match option.type:
        case ShippingOptionType.area:
            return address.model_copy(update={"area": option.name, "city": None})
        case ShippingOptionType.city:
            return address.model_copy(update={"city": option.name, "area": None})
        case _:
            return address.model_copy(update={"city": None, "area": None})
