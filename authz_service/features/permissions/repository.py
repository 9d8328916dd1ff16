"""SQL-backed permission store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError

from authz_service.core.exceptions import StoreUnavailableError
from authz_service.core.resolution import Action, Effect, PermissionRecord
from authz_service.features.permissions.models import UserPermission
from authz_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)


class SqlPermissionStore:
    """PermissionStore over the ``user_permissions`` table.

    Every lookup is a single ``SELECT`` filtered on user, action and
    ``resource IN (patterns)``, served by the composite index. Database errors
    are raised as StoreUnavailableError; an empty result always means "no
    matching records".

    Example:
        async with get_async_session() as session:
            store = SqlPermissionStore(session)
            records = await store.query_permissions("user456", Action.READ, ["wallets/*", "*"])
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def query_permissions(
        self,
        user_id: str,
        action: Action,
        patterns: Collection[str],
    ) -> Sequence[PermissionRecord]:
        if not patterns:
            return []

        stmt = select(UserPermission).where(
            UserPermission.user_id == user_id,
            UserPermission.action == Action(action).value,
            UserPermission.resource.in_(list(patterns)),
        )
        try:
            result = await self._session.execute(stmt)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error(
                "Permission query failed",
                extra={"user_id": user_id, "action": str(action), "error": str(e)},
            )
            raise StoreUnavailableError(extra={"operation": "query_permissions"}) from e

        lazy_logger.debug(lambda: f"store.query_permissions({user_id!r}, {action}) -> {len(rows)} rows")
        return [row.to_record() for row in rows]

    async def add_permission(
        self,
        user_id: str,
        action: Action | str,
        resource: str,
        effect: Effect | str,
    ) -> UserPermission:
        """Stage a new permission row and flush it. The caller commits."""
        permission = UserPermission(
            user_id=user_id,
            action=Action(action).value,
            resource=resource,
            effect=Effect(effect).value,
        )
        self._session.add(permission)
        await self._session.flush()
        return permission

    async def replace_all(self, records: Iterable[PermissionRecord]) -> int:
        """Delete every permission and insert ``records`` instead. The caller commits.

        Returns:
            Number of rows inserted.
        """
        await self._session.execute(delete(UserPermission))
        inserted = 0
        for record in records:
            await self.add_permission(record.user_id, record.action, record.resource, record.effect)
            inserted += 1
        logger.info("Permission table replaced", extra={"inserted": inserted})
        return inserted

    async def count(self) -> int:
        """Total number of permission rows."""
        result = await self._session.execute(select(func.count()).select_from(UserPermission))
        return result.scalar_one()
