from loguru import logger

from checkout_engine.domain.shipping import (
    ShippingAreaRule,
    ShippingCityRule,
    ShippingSettings,
    ShippingWeightTier,
)
from checkout_engine.infrastructure.supabase_client import SupabaseRestClient


class ShippingSettingsRepository:
    """Reads a storefront's shipping configuration from ``websites.settings``."""

    TABLE = "websites"

    def __init__(self, client: SupabaseRestClient) -> None:
        self._client = client

    def fetch_settings(self, website_id: str) -> ShippingSettings | None:
        """Return the website's shipping settings, or ``None`` if none are stored."""
        rows = self._client.select(
            self.TABLE, {"select": "id,settings", "id": f"eq.{website_id}"}
        )
        if not rows:
            logger.warning(f"Website {website_id} not found")
            return None

        raw = (rows[0].get("settings") or {}).get("shipping")
        if not raw:
            logger.info(f"Website {website_id} has no shipping configuration")
            return None

        return self._map(raw)

    @staticmethod
    def _map(raw: dict) -> ShippingSettings:
        """Map the stored camelCase JSON onto ``ShippingSettings``."""
        return ShippingSettings(
            enabled=bool(raw.get("enabled")),
            country=raw.get("country"),
            rest_of_country_fee=raw.get("restOfCountryFee"),
            rest_of_country_label=raw.get("restOfCountryLabel"),
            city_rules=[
                ShippingCityRule(
                    city=r.get("city") or "", fee=r.get("fee"), label=r.get("label")
                )
                for r in raw.get("cityRules") or []
            ],
            area_rules=[
                ShippingAreaRule(
                    area=r.get("area") or "", fee=r.get("fee"), label=r.get("label")
                )
                for r in raw.get("areaRules") or []
            ],
            weight_tiers=[
                ShippingWeightTier(
                    max_weight_grams=t.get("maxWeight"),
                    fee=t.get("fee"),
                    label=t.get("label"),
                )
                for t in raw.get("weightTiers") or []
            ],
            free_shipping_threshold=raw.get("freeShippingThreshold"),
            free_shipping_min_weight_grams=raw.get("freeShippingMinWeight"),
            show_options_at_checkout=bool(raw.get("showOptionsAtCheckout")),
        )
