"""FastAPI dependencies shared across features."""

from authz_service.core.dependencies.database import get_db_session

__all__ = ["get_db_session"]
