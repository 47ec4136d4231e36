"""Application configuration."""

import os
from datetime import time

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    menu_feed_base_url: str
    timezone: str = "America/Sao_Paulo"
    exchange_cutoff_hour: int = 16
    menu_cache_ttl_seconds: int = 900
    store_max_attempts: int = 3
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cutoff(hour: int) -> time:
    """Return the daily exchange cutoff as a wall-clock time."""
    if not 0 <= hour <= 23:  # noqa: PLR2004
        raise ValueError(f"Invalid cutoff hour: {hour}")
    return time(hour=hour)
