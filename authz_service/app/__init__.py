"""FastAPI application package."""

from authz_service.app.main import create_app

__all__ = ["create_app"]
