from typing import Protocol

from .cart import ProductData
from .checkout import CheckoutRequest, CheckoutSummary
from .shipping import ShippingSettings


class IProductCatalog(Protocol):
    def fetch_products(self, product_ids: list[str]) -> dict[str, ProductData]: ...


class IShippingSettingsSource(Protocol):
    def fetch_settings(self, website_id: str) -> ShippingSettings | None: ...


class ICheckoutService(Protocol):
    def quote(
        self,
        request: CheckoutRequest,
        settings: ShippingSettings | None,
    ) -> CheckoutSummary:
        """Compute shipping, payment split and upfront method for ``request``."""
        ...
