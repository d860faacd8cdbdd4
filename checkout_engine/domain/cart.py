from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from checkout_engine.domain.shipping import ProductShippingConfig
from checkout_engine.shared.money import Money, OptionalMoney


class ProductType(StrEnum):
    physical = "physical"
    digital = "digital"


class CartItem(BaseModel):
    """A cart line as held by the checkout form.

    ``product_type``, ``collect_shipping_upfront`` and
    ``upfront_shipping_payment_method`` are cached copies of product data;
    a catalog snapshot, when supplied, takes precedence over them.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    product_id: str
    quantity: int = Field(default=1, ge=1)
    price: Money = 0.0  # per unit
    weight_grams: OptionalMoney = None  # per unit
    product_type: ProductType | None = None
    collect_shipping_upfront: bool | None = None
    upfront_shipping_payment_method: str | None = None
    shipping_config: ProductShippingConfig | None = None

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class ProductData(BaseModel):
    """Authoritative product row fetched from the catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    product_type: ProductType | None = None
    collect_shipping_upfront: bool | None = None
    upfront_shipping_payment_method: str | None = None


class EffectiveProductFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    product_type: ProductType
    collect_shipping_upfront: bool
    upfront_shipping_payment_method: str | None = None


class PaymentBreakdown(BaseModel):
    """How the order total splits between checkout and cash-on-delivery."""

    model_config = ConfigDict(frozen=True)

    upfront_amount: float = 0.0
    delivery_amount: float = 0.0
    upfront_shipping_fee: float = 0.0
    delivery_shipping_fee: float = 0.0
    digital_products_total: float = 0.0
    cod_products_total: float = 0.0
    cod_products_with_upfront_shipping: float = 0.0
    cod_products_without_upfront_shipping: float = 0.0
    has_upfront_payment: bool = False
    has_delivery_payment: bool = False
