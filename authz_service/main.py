"""ASGI entry point: ``uvicorn authz_service.main:app``."""

from authz_service.app import create_app

app = create_app()
