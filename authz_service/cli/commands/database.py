"""Permission database commands.

Example:
    # Create the permission table and verify connectivity
    authz-service db init

    # Replace every permission with the sample data set
    authz-service db seed
"""

import sys

import click
from sqlalchemy.engine import make_url

from authz_service.cli.utils import coro, error, info, success
from authz_service.core.settings import get_db_settings


@click.group(name="db")
def db() -> None:
    """Permission database management commands."""


@db.command()
@coro
async def init() -> None:
    """Create the permission table (if missing) and verify connectivity."""
    from authz_service.features.permissions import SqlPermissionStore
    from authz_service.infra.database import check_database, create_tables, get_async_session

    url = make_url(get_db_settings().database_url).render_as_string(hide_password=True)
    info(f"Connecting to: {url}")
    try:
        await check_database()
        await create_tables()
        async with get_async_session() as session:
            count = await SqlPermissionStore(session).count()
    except Exception as e:
        error(f"Failed to initialize database: {e}")
        sys.exit(1)

    success("Database initialized")
    info(f"Permissions in database: {count}")


@db.command()
@coro
async def seed() -> None:
    """Replace all permissions with the sample data set."""
    from authz_service.features.permissions import SAMPLE_PERMISSIONS, SqlPermissionStore
    from authz_service.infra.database import create_tables, get_async_session

    try:
        await create_tables()
        async with get_async_session() as session:
            store = SqlPermissionStore(session)
            inserted = await store.replace_all(SAMPLE_PERMISSIONS)
            await session.commit()
            total = await store.count()
    except Exception as e:
        error(f"Failed to seed database: {e}")
        sys.exit(1)

    success(f"Inserted {inserted} sample permissions")
    info(f"Total permissions in database: {total}")
