"""Permission store protocol.

The engine's only dependency on persistence: "return every permission record
for (user, action) whose resource is textually one of these patterns".
Implementations:
    - SqlPermissionStore: SQLAlchemy async session (features.permissions.repository)
    - InMemoryPermissionStore: test double and demo store (features.permissions.testing)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from authz_service.core.resolution.types import Action, PermissionRecord


@runtime_checkable
class PermissionStore(Protocol):
    """Read-only query capability over permission records."""

    async def query_permissions(
        self,
        user_id: str,
        action: Action,
        patterns: Collection[str],
    ) -> Sequence[PermissionRecord]:
        """Return records for ``user_id``/``action`` whose resource is in ``patterns``.

        A single call must observe a consistent snapshot. Retries, timeouts
        and cancellation are the store's concern; failures are raised, never
        reported as an empty result.
        """
        ...
