from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ==============================
    # Application
    # ==============================
    APP_NAME: str = "MediStock Pro"
    ENVIRONMENT: str = "local"

    # ==============================
    # Storage
    # ==============================
    DATABASE_URL: str = "sqlite:///./medistock.db"
    STORAGE_KEY: str = "medistock-pro-v1"

    # ==============================
    # Logging
    # ==============================
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False

    # ==============================
    # Billing
    # ==============================
    SALE_TAX_PERCENT: float = 5.0
    PURCHASE_TAX_PERCENT: float = 5.0

    # ==============================
    # Stock & Expiry Warnings
    # ==============================
    LOW_STOCK_THRESHOLD: int = 10
    EXPIRY_WARNING_DAYS: int = 30


@lru_cache
def get_settings() -> Settings:
    """Cached settings loader (once per process)."""
    return Settings()


__all__ = ["Settings", "get_settings"]
