"""Application configuration."""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Binance public endpoints
    spot_base_url: str = "https://data-api.binance.vision"
    futures_base_url: str = "https://fapi.binance.com"
    request_timeout: float = 30.0
    calls_per_minute: int = 1200

    # Instrument selection
    quote_asset: str = "USDT"
    top_n: int = 30

    # Kline history per instrument
    kline_interval: str = "1h"
    kline_limit: int = 500
    max_concurrent_requests: int = 5

    # Order book depth
    depth_symbol: str = "BTCUSDT"
    depth_limit: int = 100
    depth_levels: int = 50

    # YAML file with indicator periods (defaults used when unset or missing)
    indicator_config_path: str | None = None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
