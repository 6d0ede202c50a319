from decimal import Decimal
from typing import Literal, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

class AppConfig(BaseSettings):
    """Application configuration using Pydantic BaseSettings.

    Loads configuration from environment variables and .env file (if present).
    Fields are type-checked and validated. Defaults are provided where appropriate.
    """
    # Application
    app_env: str = "local"
    log_level: str = "INFO"

    # Data paths
    data_dir: str = "sample_data"

    # Analysis
    analysis_period_days: int = 30
    include_promotions: bool = True
    promotion_match_strategy: Literal["first", "best"] = "first"
    max_workers: int = 4

    # Recommendation fallbacks
    default_unit_cost: Decimal = Decimal("10")
    default_supplier_id: Optional[str] = None
    minimum_restock_quantity: int = 5
    default_confidence: float = 0.85

    # Seed data settings
    default_seed_stores: int = 3
    default_seed_products: int = 40
    default_seed_value: int = 42

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

_config: Optional[AppConfig] = None

def get_config() -> AppConfig:
    """Return the AppConfig instance (singleton pattern)."""
    global _config
    if _config is None:
        _config = AppConfig()
    return _config

def set_config_for_test(**kwargs):
    """For testing only: override the AppConfig instance with new values."""
    global _config
    _config = AppConfig(**kwargs)

def reset_config():
    """Drop the cached AppConfig so the next get_config() reloads it."""
    global _config
    _config = None
