import sys

import httpx

from checkout_engine.application.checkout_service import CheckoutService
from checkout_engine.entrypoints.executor import Executor
from checkout_engine.entrypoints.settings import load_config
from checkout_engine.infrastructure.product_repository import ProductRepository
from checkout_engine.infrastructure.shipping_settings_repository import (
    ShippingSettingsRepository,
)
from checkout_engine.infrastructure.supabase_client import SupabaseRestClient

DEFAULT_REQUEST_PATH = "checkout_request.json"


def main() -> None:
    config = load_config()

    # --- Supabase layer ---
    with httpx.Client(timeout=10.0) as http_client:
        supabase = SupabaseRestClient(
            client=http_client,
            base_url=config.SUPABASE_URL,
            api_key=config.SUPABASE_API_KEY,
        )

        # --- Checkout layer ---
        checkout_service = CheckoutService(
            catalog=ProductRepository(supabase),
            currency_code=config.CURRENCY_CODE,
            precision=config.CURRENCY_PRECISION,
        )

        executor = Executor(
            checkout_service=checkout_service,
            settings_source=ShippingSettingsRepository(supabase),
            website_id=config.WEBSITE_ID,
            default_methods=config.AVAILABLE_PAYMENT_METHODS,
        )
        executor.run(sys.argv[1] if len(sys.argv) > 1 else DEFAULT_REQUEST_PATH)


if __name__ == "__main__":
    main()
