from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "FinanceFlow"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    database_url: str = "postgresql+asyncpg://postgres:postgres@db:5432/financeflow"
    seed_demo: bool = False
    demo_user_id: str | None = None
    default_currency: str = "IDR"
    subscription_poll_interval: float = 5.0
    notifications_limit: int = 50
    trend_months: int = 6
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
