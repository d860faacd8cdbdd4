from loguru import logger

from checkout_engine.application.payment_method import get_upfront_payment_method
from checkout_engine.application.payment_split import (
    calculate_payment_breakdown,
    get_payment_breakdown_message,
    resolve_effective_product_fields,
)
from checkout_engine.application.shipping_calculator import compute_order_shipping
from checkout_engine.domain.cart import CartItem, ProductData, ProductType
from checkout_engine.domain.checkout import CheckoutRequest, CheckoutSummary
from checkout_engine.domain.interfaces import IProductCatalog
from checkout_engine.domain.shipping import ShippingQuote, ShippingSettings


def _is_digital_only(items: list[CartItem], products: dict[str, ProductData]) -> bool:
    return bool(items) and all(
        resolve_effective_product_fields(item, products.get(item.product_id)).product_type
        == ProductType.digital
        for item in items
    )


class CheckoutService:
    """Quotes a cart: shipping cost, upfront/delivery split and upfront gateway."""

    def __init__(
        self,
        catalog: IProductCatalog,
        currency_code: str = "BDT",
        precision: int = 2,
    ) -> None:
        self._catalog = catalog
        self._currency_code = currency_code
        self._precision = precision

    def quote(
        self, request: CheckoutRequest, settings: ShippingSettings | None
    ) -> CheckoutSummary:
        product_ids = list(dict.fromkeys(item.product_id for item in request.items))
        products = self._catalog.fetch_products(product_ids) if product_ids else {}

        subtotal = (
            request.subtotal
            if request.subtotal is not None
            else sum(item.line_total for item in request.items)
        )

        # Nothing ships for a digital-only cart
        if _is_digital_only(request.items, products):
            shipping = ShippingQuote(shipping_cost=0.0, is_free_shipping=True)
        else:
            shipping = compute_order_shipping(
                settings, request.items, request.address, subtotal
            )

        payment = calculate_payment_breakdown(
            request.items, shipping.shipping_cost, products
        )
        method = (
            get_upfront_payment_method(
                request.items,
                products,
                request.customer_selected_method,
                request.available_methods,
            )
            if payment.has_upfront_payment
            else None
        )

        logger.info(
            f"Quoted {len(request.items)} item(s): shipping {shipping.shipping_cost} "
            f"| upfront {payment.upfront_amount} via {method} "
            f"| on delivery {payment.delivery_amount}"
        )

        return CheckoutSummary(
            shipping=shipping,
            payment=payment,
            upfront_payment_method=method,
            message=get_payment_breakdown_message(
                payment, self._currency_code, self._precision
            ),
            total=subtotal + shipping.shipping_cost,
        )
