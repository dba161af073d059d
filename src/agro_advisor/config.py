"""Application settings loaded from the environment.

Every field can be overridden with an ``AGRO_``-prefixed environment variable
(e.g. ``AGRO_LAT=-26.5``) or a ``.env`` file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path  # noqa: TC003

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the CLI and flows."""

    model_config = SettingsConfigDict(env_prefix="AGRO_", env_file=".env", extra="ignore")

    app_name: str = "agro-advisor"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Default location: Yandina, Sunshine Coast QLD
    lat: float = Field(default=-26.5, ge=-90, le=90)
    lon: float = Field(default=152.9, ge=-180, le=180)
    timezone: str = "Australia/Brisbane"

    data_dir: Path = Path("data")
    default_pest: str = "ascospore"
    weather_ttl_hours: int = Field(default=6, ge=0)
    pest_config_path: Path | None = None


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
