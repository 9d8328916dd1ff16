"""Application lifespan: logging, database and identity resolver setup/teardown."""

from __future__ import annotations

from contextlib import asynccontextmanager
import logging
from typing import TYPE_CHECKING

from authz_service.core.settings import get_settings
from authz_service.infra.auth import close_identity_resolver, get_identity_resolver
from authz_service.infra.database import close_database, init_database
from authz_service.infra.logging import setup_logging, shutdown

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Startup:
        1. Configure logging
        2. Verify database connectivity (and create tables when enabled)
        3. Build the identity resolver (and its shared HTTP client)

    Shutdown:
        1. Close the identity provider HTTP client
        2. Dispose of the database engine
        3. Flush and stop the logging queue listener
    """
    settings = get_settings()
    setup_logging(settings.logging)

    logger.info(
        "Starting application",
        extra={
            "service": settings.app.service_name,
            "version": settings.app.version,
            "environment": settings.app.environment,
            "conflict_strategy": settings.resolution.conflict_strategy,
            "max_resource_depth": settings.resolution.max_resource_depth,
        },
    )

    await init_database()
    get_identity_resolver()

    logger.info("Application startup complete", extra={"service": settings.app.service_name})
    try:
        yield
    finally:
        logger.info("Shutting down application", extra={"service": settings.app.service_name})
        await close_identity_resolver()
        await close_database()
        logger.info("Application shutdown complete")
        shutdown()
