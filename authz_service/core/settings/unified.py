"""Unified settings composition for convenient access.

Usage:
    from authz_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.port)
    print(settings.resolution.conflict_strategy)

Each nested settings class still respects its own env prefix. Code that
only needs one domain should prefer the individual get_*_settings() loaders.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .loader import (
    get_app_settings,
    get_auth_settings,
    get_db_settings,
    get_logging_settings,
    get_resolution_settings,
)
from .logs import LoggingSettings
from .resolution import ResolutionSettings


@dataclass(frozen=True)
class Settings:
    """All settings domains in one object."""

    app: AppSettings
    db: DatabaseSettings
    logging: LoggingSettings
    auth: AuthSettings
    resolution: ResolutionSettings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the cached unified settings."""
    return Settings(
        app=get_app_settings(),
        db=get_db_settings(),
        logging=get_logging_settings(),
        auth=get_auth_settings(),
        resolution=get_resolution_settings(),
    )


def clear_all_settings_caches() -> None:
    """Drop every cached settings instance (tests and CLI overrides)."""
    for loader in (
        get_app_settings,
        get_db_settings,
        get_logging_settings,
        get_auth_settings,
        get_resolution_settings,
        get_settings,
    ):
        loader.cache_clear()
