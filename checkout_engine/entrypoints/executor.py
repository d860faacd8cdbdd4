import json
from pathlib import Path

from loguru import logger

from checkout_engine.domain.checkout import CheckoutRequest, CheckoutSummary
from checkout_engine.domain.interfaces import ICheckoutService, IShippingSettingsSource


class Executor:
    """Loads a checkout request from disk and quotes it against the live store settings."""

    def __init__(
        self,
        checkout_service: ICheckoutService,
        settings_source: IShippingSettingsSource,
        website_id: str,
        default_methods: list[str],
    ) -> None:
        self._checkout_service = checkout_service
        self._settings_source = settings_source
        self._website_id = website_id
        self._default_methods = default_methods

    def run(self, request_path: str) -> CheckoutSummary:
        logger.info(f"Loading checkout request from {request_path}…")
        request = CheckoutRequest.model_validate(
            json.loads(Path(request_path).read_text(encoding="utf-8"))
        )
        if not request.available_methods:
            request = request.model_copy(
                update={"available_methods": self._default_methods}
            )

        settings = self._settings_source.fetch_settings(self._website_id)
        logger.info(
            f"Shipping for website {self._website_id}: "
            f"{'enabled' if settings and settings.enabled else 'disabled'}"
        )

        summary = self._checkout_service.quote(request, settings)
        logger.info(f"Summary:\n{summary.model_dump_json(indent=2)}")
        if summary.message:
            logger.info(summary.message)
        return summary
