from pydantic_settings import BaseSettings
from functools import lru_cache

from freightdesk.models.enums import Currency, RateType


class Settings(BaseSettings):
    api_key: str = "dev-api-key-change-me"
    app_name: str = "FreightDesk Settlement API"
    database_path: str = "data/freightdesk.db"
    seed_demo_data: bool = False
    default_currency: Currency = Currency.USD
    default_rate_type: RateType = RateType.FLAT_RATE
    contract_term_years: int = 1
    log_level: str = "INFO"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "FREIGHTDESK_",
    }


@lru_cache
def get_settings() -> Settings:
    return Settings()
