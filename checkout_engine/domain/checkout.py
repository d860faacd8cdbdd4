from pydantic import BaseModel, ConfigDict, Field

from checkout_engine.domain.cart import CartItem, PaymentBreakdown
from checkout_engine.domain.shipping import ShippingAddress, ShippingQuote


class CheckoutRequest(BaseModel):
    """Everything the checkout form knows when it asks for a quote."""

    model_config = ConfigDict(frozen=True)

    items: list[CartItem] = Field(default_factory=list)
    address: ShippingAddress = Field(default_factory=ShippingAddress)
    subtotal: float | None = None  # defaults to the sum of line totals
    customer_selected_method: str | None = None
    available_methods: list[str] = Field(default_factory=list)


class CheckoutSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    shipping: ShippingQuote
    payment: PaymentBreakdown
    upfront_payment_method: str | None = None
    message: str | None = None
    total: float
