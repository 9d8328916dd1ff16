"""Tests for application startup and shutdown."""

from __future__ import annotations

from collections.abc import Iterator
import logging

import pytest
from sqlalchemy import inspect

from authz_service.app import create_app
from authz_service.core.settings import clear_all_settings_caches
from authz_service.infra.auth import UserInfoIdentityResolver, get_http_client, get_identity_resolver
from authz_service.infra.database import get_engine, get_sessionmaker

pytestmark = pytest.mark.integration


@pytest.fixture
def file_database(tmp_path, monkeypatch) -> Iterator[str]:
    path = tmp_path / "permissions.db"
    monkeypatch.setenv("DB_DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    monkeypatch.setenv("DB_CREATE_TABLES", "true")
    monkeypatch.setenv("LOG_CONSOLE_ENABLED", "false")
    clear_all_settings_caches()
    get_sessionmaker.cache_clear()
    get_engine.cache_clear()

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield str(path)
    root.handlers[:] = handlers
    root.setLevel(level)


async def test_startup_creates_tables_and_shutdown_disposes(file_database: str) -> None:
    app = create_app()

    async with app.router.lifespan_context(app):
        async with get_engine().connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        assert "user_permissions" in tables

    assert get_engine.cache_info().currsize == 0


async def test_identity_provider_client_lives_with_the_app(file_database: str, monkeypatch) -> None:
    monkeypatch.setenv("AUTH_USERINFO_URL", "https://idp.example.test/userinfo")
    clear_all_settings_caches()
    app = create_app()

    async with app.router.lifespan_context(app):
        resolver = get_identity_resolver()
        client = get_http_client()
        assert isinstance(resolver, UserInfoIdentityResolver)
        assert resolver is get_identity_resolver()
        assert not client.is_closed

    assert client.is_closed
    assert get_http_client.cache_info().currsize == 0
