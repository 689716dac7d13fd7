"""Runtime configuration using Pydantic Settings.

Values can be overridden via environment variables prefixed with
TRAINS_, for example:
- TRAINS_NETWORK_FILE=/path/to/routes.txt
- TRAINS_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TrainsConfig(BaseSettings):
    """Configuration shared by the command line and the web app."""

    model_config = SettingsConfigDict(env_prefix="TRAINS_")

    network_file: Path | None = None
    log_level: str = "WARNING"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    max_trip_results: int = Field(default=10000, ge=1)


@lru_cache(maxsize=1)
def get_config() -> TrainsConfig:
    """Get the cached configuration, loaded from the environment once."""
    return TrainsConfig()


def reset_config() -> None:
    """Reset the configuration cache (used by tests)."""
    get_config.cache_clear()


def configure_logging(level: str | None = None) -> None:
    """Set up root logging from the configuration."""
    config = get_config()
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format=config.log_format,
    )
