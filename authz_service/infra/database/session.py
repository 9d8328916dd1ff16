"""Database session management for the permission store.

The engine and session factory are created on first use from DatabaseSettings,
so importing this module never opens a connection and tests can point
DB_DATABASE_URL at a scratch database before anything is built.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from functools import lru_cache
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from authz_service.core.database import Base
from authz_service.core.settings import get_db_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from authz_service.core.settings import DatabaseSettings

logger = logging.getLogger(__name__)


def build_engine(db_settings: DatabaseSettings) -> AsyncEngine:
    """Create an async engine for the configured database URL.

    For file-backed SQLite the parent directory is created first.
    """
    if db_settings.is_sqlite:
        database = make_url(db_settings.database_url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_async_engine(
        db_settings.database_url,
        echo=db_settings.echo,
        pool_pre_ping=db_settings.pool_pre_ping,
    )


@lru_cache(maxsize=1)
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine."""
    return build_engine(get_db_settings())


@lru_cache(maxsize=1)
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory."""
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Yields:
        Database session that is automatically closed.

    Example:
        async with get_async_session() as session:
            store = SqlPermissionStore(session)
            records = await store.query_permissions("alice", "read", ["*"])
    """
    async with get_sessionmaker()() as session:
        yield session


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create the permission tables if they do not exist yet."""
    # Importing the models registers their tables on Base.metadata
    import authz_service.features.permissions.models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.debug("Permission tables ensured")


async def check_database(engine: AsyncEngine | None = None) -> bool:
    """Run ``SELECT 1`` and report whether the database answered.

    Raises whatever the driver raises when the database is unreachable.
    """
    engine = engine or get_engine()
    async with engine.connect() as conn:
        result = await conn.execute(text("SELECT 1"))
        return result.scalar_one() == 1


async def init_database() -> None:
    """Verify connectivity and, when configured, create missing tables.

    Raises:
        sqlalchemy.exc.SQLAlchemyError: If the database cannot be reached.
    """
    db_settings = get_db_settings()
    url = make_url(db_settings.database_url).render_as_string(hide_password=True)
    logger.info("Initializing database connection", extra={"url": url})

    try:
        await check_database()
        if db_settings.create_tables:
            await create_tables()
    except Exception as e:
        logger.error("Failed to connect to database", extra={"url": url, "error": str(e)})
        raise

    logger.info("Database connection established successfully", extra={"url": url})


async def close_database() -> None:
    """Close database connection and forget the cached engine.

    This should be called during application shutdown.
    """
    if get_engine.cache_info().currsize:
        logger.info("Closing database connection")
        await get_engine().dispose()
    get_sessionmaker.cache_clear()
    get_engine.cache_clear()
