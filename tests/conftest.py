"""Pytest configuration and shared fixtures.

Organization:
    - Settings Fixtures: environment isolation and cache resets
    - Permission Fixtures: in-memory stores and engines
    - Database Fixtures: in-memory SQLite engine and session
    - Application Fixtures: FastAPI app with overridden collaborators, HTTP client
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Iterator
import os
from typing import TYPE_CHECKING

from httpx import ASGITransport, AsyncClient
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from authz_service.core.resolution import ConflictStrategy, PermissionResolutionEngine
from authz_service.core.settings import ResolutionSettings, clear_all_settings_caches
from authz_service.features.permissions import SAMPLE_PERMISSIONS, InMemoryPermissionStore
from authz_service.infra.auth import StaticIdentityResolver, get_http_client, get_identity_resolver
from authz_service.infra.database import create_tables

if TYPE_CHECKING:
    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

# Ensure tests never read a developer's .env-driven identity provider or database
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("AUTH_USERINFO_URL", "")
os.environ.setdefault("AUTH_STATIC_TOKENS", "{}")
os.environ.setdefault("AUTHZ_CONFLICT_STRATEGY", "deny_first")


# ============================================================================
# Settings Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def _reset_caches() -> Iterator[None]:
    """Drop cached settings and singletons around every test."""
    clear_all_settings_caches()
    get_identity_resolver.cache_clear()
    get_http_client.cache_clear()
    yield
    clear_all_settings_caches()
    get_identity_resolver.cache_clear()
    get_http_client.cache_clear()


@pytest.fixture
def resolution_settings() -> ResolutionSettings:
    return ResolutionSettings(conflict_strategy="deny_first", max_resource_depth=16)


# ============================================================================
# Permission Fixtures
# ============================================================================


@pytest.fixture
def sample_store() -> InMemoryPermissionStore:
    """In-memory store holding the sample permission data set."""
    return InMemoryPermissionStore(SAMPLE_PERMISSIONS)


@pytest.fixture
def empty_store() -> InMemoryPermissionStore:
    return InMemoryPermissionStore()


@pytest.fixture
def engine_factory(resolution_settings: ResolutionSettings):
    """Build an engine over any store, optionally with an explicit strategy.

    Example:
        async def test_x(engine_factory, empty_store):
            engine = engine_factory(empty_store, ConflictStrategy.SPECIFICITY_FIRST)
    """

    def _build(
        store: InMemoryPermissionStore,
        strategy: ConflictStrategy | None = None,
    ) -> PermissionResolutionEngine:
        return PermissionResolutionEngine(store, resolution_settings, strategy=strategy)

    return _build


@pytest.fixture
def identity_resolver() -> StaticIdentityResolver:
    """Token map covering every user in the sample data."""
    return StaticIdentityResolver(
        {
            "token-user123": "user123",
            "token-user456": "user456",
            "token-user789": "user789",
            "token-admin789": "admin789",
            "token-nobody": "nobody",
        }
    )


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine on a private in-memory SQLite database with the schema created.

    StaticPool keeps a single connection so every session sees the same database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await create_tables(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session bound to the in-memory database."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
def app(sample_store: InMemoryPermissionStore, identity_resolver: StaticIdentityResolver) -> FastAPI:
    """FastAPI app wired to the in-memory sample store and static identity resolver."""
    from authz_service.app import create_app
    from authz_service.features.authorization.dependencies import get_permission_store

    application = create_app()
    application.dependency_overrides[get_permission_store] = lambda: sample_store
    application.dependency_overrides[get_identity_resolver] = lambda: identity_resolver
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client for the app (lifespan is not run)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
