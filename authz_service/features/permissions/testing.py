"""In-memory permission store.

A Protocol-based test double for PermissionStore, also handy for demos and
the CLI. Matching is textual equality between stored resource patterns and
the queried patterns, exactly as the SQL store does it.

Usage:
    from authz_service.features.permissions.testing import InMemoryPermissionStore

    store = InMemoryPermissionStore.from_rows([
        ("user456", "read", "wallets/*", "allow"),
        ("user456", "write", "wallets/wallet-789", "allow"),
    ])
    engine = PermissionResolutionEngine(store)

    # Simulate an outage
    store.fail_with(StoreUnavailableError())
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authz_service.core.resolution import Action, Effect, PermissionRecord

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable, Sequence
    from typing import Self


class InMemoryPermissionStore:
    """PermissionStore backed by a list of records.

    Attributes:
        queries: Every (user_id, action, patterns) the store was asked for,
            in call order. Lets tests assert the engine queried exactly once.
    """

    def __init__(self, records: Iterable[PermissionRecord] = ()) -> None:
        self._records: list[PermissionRecord] = list(records)
        self._failure: BaseException | None = None
        self.queries: list[tuple[str, Action, tuple[str, ...]]] = []

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[str, str, str, str]]) -> Self:
        """Build a store from ``(user_id, action, resource, effect)`` tuples."""
        return cls(
            PermissionRecord(user_id=u, action=Action(a), resource=r, effect=Effect(e))
            for u, a, r, e in rows
        )

    @property
    def records(self) -> tuple[PermissionRecord, ...]:
        return tuple(self._records)

    def add(
        self,
        user_id: str,
        action: Action | str,
        resource: str,
        effect: Effect | str = Effect.ALLOW,
    ) -> PermissionRecord:
        record = PermissionRecord(
            user_id=user_id,
            action=Action(action),
            resource=resource,
            effect=Effect(effect),
        )
        self._records.append(record)
        return record

    def extend(self, records: Iterable[PermissionRecord]) -> None:
        self._records.extend(records)

    def fail_with(self, error: BaseException | None) -> None:
        """Make every subsequent query raise ``error`` (``None`` to recover)."""
        self._failure = error

    async def query_permissions(
        self,
        user_id: str,
        action: Action,
        patterns: Collection[str],
    ) -> Sequence[PermissionRecord]:
        wanted = frozenset(patterns)
        self.queries.append((user_id, Action(action), tuple(patterns)))
        if self._failure is not None:
            raise self._failure
        return [
            record
            for record in self._records
            if record.user_id == user_id and record.action == action and record.resource in wanted
        ]
