"""
Application settings.

Values come from environment variables prefixed with ``REGION_SCOUT_`` or a
local ``.env`` file, e.g. ``REGION_SCOUT_OVERPASS_URL=http://localhost/api/interpreter``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI and flows."""

    model_config = SettingsConfigDict(
        env_prefix="REGION_SCOUT_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "region-scout"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    overpass_url: str = "https://overpass-api.de/api/interpreter"
    nominatim_url: str = "https://nominatim.openstreetmap.org"
    open_meteo_archive_url: str = "https://archive-api.open-meteo.com/v1/archive"

    http_timeout: float = Field(default=180.0, gt=0)
    user_agent: str = "region-scout/0.1"
    accept_language: str = "en"

    max_bbox_span_km: float = Field(default=2000.0, gt=0)


@lru_cache
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()
