"""Health check endpoint.

GET /health runs ``SELECT 1`` against the permission database:

    200 {"status": "healthy", "database": "connected", "timestamp": "..."}
    503 {"status": "unhealthy", "error": "Service unavailable", "timestamp": "..."}
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import UTC, datetime
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from authz_service.infra.database import check_database

router = APIRouter(tags=["health"])
logger = logging.getLogger(__name__)

DatabaseProbe = Callable[[], Awaitable[bool]]


def get_database_probe() -> DatabaseProbe:
    """Dependency returning the connectivity probe (overridable in tests)."""
    return check_database


@router.get(
    "/health",
    summary="Health check",
    description="Report whether the service can reach its permission database.",
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"description": "Database unreachable"}},
)
async def health_check(probe: Annotated[DatabaseProbe, Depends(get_database_probe)]) -> JSONResponse:
    timestamp = datetime.now(UTC).isoformat()
    try:
        healthy = await probe()
    except Exception:
        logger.exception("Health check failed")
        healthy = False

    if not healthy:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "timestamp": timestamp, "error": "Service unavailable"},
        )
    return JSONResponse(
        status_code=status.HTTP_200_OK,
        content={"status": "healthy", "timestamp": timestamp, "database": "connected"},
    )
