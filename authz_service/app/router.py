"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from authz_service.core.settings import get_app_settings
from authz_service.features.authorization.router import router as authorization_router
from authz_service.features.health.router import router as health_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from authz_service.core.settings import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    The health check is always served at the root; the authorization endpoint
    honours APP_API_PREFIX.
    """
    settings = app_settings or get_app_settings()
    app.include_router(health_router)
    app.include_router(authorization_router, prefix=settings.api_prefix)
    logger.debug("Routers registered", extra={"api_prefix": settings.api_prefix or "/"})
