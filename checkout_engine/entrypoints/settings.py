from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    SUPABASE_URL: str
    SUPABASE_API_KEY: str
    WEBSITE_ID: str

    CURRENCY_CODE: str = "BDT"
    CURRENCY_PRECISION: int = 2
    AVAILABLE_PAYMENT_METHODS: list[str] = ["bkash", "nagad", "cod"]


def load_config() -> Config:
    return Config()  # type: ignore[call-arg]
