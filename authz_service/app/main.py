"""FastAPI application factory."""

from __future__ import annotations

from fastapi import FastAPI

from authz_service.app.exception_handlers import configure_exception_handlers
from authz_service.app.lifespan import lifespan
from authz_service.app.router import setup_routers
from authz_service.core.settings import get_settings


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()
    app_settings = settings.app

    app = FastAPI(
        title=app_settings.title,
        version=app_settings.version,
        docs_url=app_settings.docs_url,
        redoc_url=None,
        openapi_url=None if app_settings.disable_docs else "/openapi.json",
        debug=app_settings.debug,
        lifespan=lifespan,
    )

    # Exception handlers before routers
    configure_exception_handlers(app)
    setup_routers(app, app_settings)
    return app
