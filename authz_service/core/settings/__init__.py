"""Modular Pydantic Settings v2 configuration.

One frozen settings model per domain, each reading its own env prefix:

    APP_    application / HTTP surface
    DB_     permission database
    LOG_    logging
    AUTH_   identity provider
    AUTHZ_  resolution engine

Import settings via cached loaders:
    from authz_service.core.settings import get_resolution_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

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
from .unified import Settings, clear_all_settings_caches, get_settings

__all__ = [
    "AppSettings",
    "AuthSettings",
    "DatabaseSettings",
    "LoggingSettings",
    "ResolutionSettings",
    "Settings",
    "clear_all_settings_caches",
    "get_app_settings",
    "get_auth_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_resolution_settings",
    "get_settings",
]
