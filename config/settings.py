"""Configuration management using pydantic-settings."""
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Cache tiers (seconds)
    cache_enabled: bool = True
    cache_ttl_all_news: int = 300
    cache_ttl_article: int = 1800
    cache_ttl_popular: int = 600
    cache_ttl_category: int = 300

    # Background sweep of expired entries
    cache_sweep_interval_seconds: float = 60.0

    # Remote Wan Phra source, e.g. https://example.org/api/wanphra
    calendar_remote_url: Optional[str] = None
    calendar_remote_timeout_seconds: float = 5.0
    # Treat a valid empty remote answer as authoritative
    calendar_trust_empty_remote: bool = False

    # Local lunar arithmetic (needs the optional "ephem" package)
    calendar_lunar_enabled: bool = True

    # Static fallback table keyed "YYYY-MM"
    calendar_fallback_path: Optional[Path] = None

    # Resolved months served by the HTTP layer
    calendar_month_cache_ttl: int = 3600

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
