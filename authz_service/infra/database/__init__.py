"""Database infrastructure: async engine, session factory and schema helpers.

Example:
    from authz_service.infra.database import get_async_session

    async with get_async_session() as session:
        result = await session.execute(...)
"""

from authz_service.infra.database.session import (
    build_engine,
    check_database,
    close_database,
    create_tables,
    get_async_session,
    get_engine,
    get_sessionmaker,
    init_database,
)

__all__ = [
    "build_engine",
    "check_database",
    "close_database",
    "create_tables",
    "get_async_session",
    "get_engine",
    "get_sessionmaker",
    "init_database",
]
