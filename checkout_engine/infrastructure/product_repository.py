from loguru import logger

from checkout_engine.domain.cart import ProductData, ProductType
from checkout_engine.infrastructure.supabase_client import SupabaseRestClient


class ProductRepository:
    """Fetches the checkout-relevant columns of catalog products."""

    TABLE = "products"
    COLUMNS = "id,product_type,collect_shipping_upfront,upfront_shipping_payment_method"

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def fetch_products(self, product_ids: list[str]) -> dict[str, ProductData]:
        """Return a ``{product_id: ProductData}`` snapshot for ``product_ids``.

        Ids missing from the catalog are simply absent from the result.
        """
        if not product_ids:
            return {}

        rows = self._client.select(
            self.TABLE,
            {"select": self.COLUMNS, "id": self._in_filter(product_ids)},
        )
        products = {row["id"]: self._map(row) for row in rows}

        if missing := set(product_ids) - products.keys():
            logger.warning(f"Products not found in catalog: {sorted(missing)}")

        logger.debug(f"Fetched {len(products)} product(s) from catalog")
        return products

    @staticmethod
    def _in_filter(values: list[str]) -> str:
        """PostgREST ``in.(...)`` filter with each value double-quoted."""
        quoted = (
            '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
            for value in values
        )
        return f"in.({','.join(quoted)})"

    @staticmethod
    def _map(row: dict) -> ProductData:
        raw_type = row.get("product_type")
        product_type = (
            ProductType(raw_type) if raw_type in ProductType.__members__ else None
        )
        return ProductData(
            id=row["id"],
            product_type=product_type,
            collect_shipping_upfront=row.get("collect_shipping_upfront"),
            upfront_shipping_payment_method=row.get("upfront_shipping_payment_method")
            or None,
        )
