from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from checkout_engine.shared.money import Money, OptionalMoney


class ShippingCityRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str
    fee: Money = 0.0
    label: str | None = None


class ShippingAreaRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    area: str
    fee: Money = 0.0
    label: str | None = None


class ShippingWeightTier(BaseModel):
    """Fee applied to orders weighing up to and including ``max_weight_grams``."""

    model_config = ConfigDict(frozen=True)

    max_weight_grams: Money
    fee: Money = 0.0
    label: str | None = None


class ShippingSettings(BaseModel):
    """Per-storefront shipping configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    country: str | None = None
    rest_of_country_fee: Money = 0.0
    rest_of_country_label: str | None = None
    city_rules: list[ShippingCityRule] = Field(default_factory=list)
    area_rules: list[ShippingAreaRule] = Field(default_factory=list)
    weight_tiers: list[ShippingWeightTier] = Field(default_factory=list)
    free_shipping_threshold: OptionalMoney = None  # minimum order subtotal
    free_shipping_min_weight_grams: OptionalMoney = None
    show_options_at_checkout: bool = False


class ShippingConfigType(StrEnum):
    default = "default"
    fixed = "fixed"
    weight_surcharge = "weight_surcharge"
    free = "free"
    custom_options = "custom_options"


class CustomShippingOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    fee: Money = 0.0
    description: str | None = None
    is_default: bool = False


class ProductShippingConfig(BaseModel):
    """Per-product override of the storefront shipping rules."""

    model_config = ConfigDict(frozen=True)

    type: ShippingConfigType = ShippingConfigType.default
    fixed_fee: Money = 0.0
    weight_surcharge: Money = 0.0  # per gram
    free_shipping_enabled: bool = False
    custom_options: list[CustomShippingOption] = Field(default_factory=list)


class ShippingAddress(BaseModel):
    model_config = ConfigDict(frozen=True)

    city: str | None = None
    area: str | None = None
    address: str | None = None
    postal: str | None = None


class ShippingBreakdown(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_fee: float = 0.0
    weight_fee: float = 0.0
    product_specific_fees: float = 0.0
    total_before_discount: float = 0.0
    discount: float = 0.0


class ShippingQuote(BaseModel):
    """Result of a shipping calculation for a whole order."""

    model_config = ConfigDict(frozen=True)

    shipping_cost: float
    is_free_shipping: bool
    breakdown: ShippingBreakdown = Field(default_factory=ShippingBreakdown)


class ShippingOptionType(StrEnum):
    area = "area"
    city = "city"
    rest_of_country = "rest_of_country"


class ShippingOption(BaseModel):
    """A selectable shipping choice shown at checkout."""

    model_config = ConfigDict(frozen=True)

    id: str  # e.g. "area_0", "city_1", "rest_of_country"
    type: ShippingOptionType
    name: str
    label: str
    fee: float
