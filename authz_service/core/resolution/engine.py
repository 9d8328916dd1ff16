"""Permission resolution engine.

Data flow for one call::

    resource ──> generate_patterns ──> store.query_permissions ──> score ──> resolve_candidates

The engine holds no mutable state: concurrent calls share only the injected
store. Nothing is cached here; callers that memoize decisions must key on
(user_id, action, resource) and invalidate on any permission change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from authz_service.core.resolution.patterns import generate_patterns
from authz_service.core.resolution.resolver import (
    ConflictStrategy,
    no_match_decision,
    resolve_candidates,
)
from authz_service.core.resolution.scoring import score
from authz_service.core.resolution.types import (
    Action,
    Decision,
    Outcome,
    ResolutionBasis,
    ScoredPermission,
)
from authz_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from authz_service.core.resolution.protocols import PermissionStore
    from authz_service.core.settings import ResolutionSettings

__all__ = ["SYSTEM_ERROR_REASON", "PermissionResolutionEngine", "system_error_decision"]

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

SYSTEM_ERROR_REASON = "system error"


def system_error_decision(user_id: str) -> Decision:
    """Fail-secure DENY for operational faults. Carries no error detail."""
    return Decision(
        outcome=Outcome.DENY,
        user_id=user_id,
        reason=SYSTEM_ERROR_REASON,
        matched_permissions=(),
        basis=ResolutionBasis.SYSTEM_ERROR,
    )


class PermissionResolutionEngine:
    """Decide ALLOW or DENY for (user, action, resource) against a permission store.

    Example:
        >>> engine = PermissionResolutionEngine(InMemoryPermissionStore.from_rows([
        ...     ("u1", "read", "wallets/*", "allow"),
        ... ]))
        >>> decision = await engine.resolve("u1", Action.READ, "wallets/wallet-9")
        >>> decision.reason
        'granted by pattern wallets/*'
    """

    def __init__(
        self,
        store: PermissionStore,
        settings: ResolutionSettings | None = None,
        *,
        strategy: ConflictStrategy | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            store: Permission store queried once per resolution.
            settings: Engine settings (loaded from the environment if omitted).
            strategy: Explicit ordering override, mostly for tests.
        """
        if settings is None:
            from authz_service.core.settings import get_resolution_settings

            settings = get_resolution_settings()
        self._store = store
        self._strategy = strategy or ConflictStrategy(settings.conflict_strategy)

    @property
    def strategy(self) -> ConflictStrategy:
        return self._strategy

    async def resolve(self, user_id: str, action: Action | str, resource: str) -> Decision:
        """Resolve one authorization request.

        Store failures and any unexpected error are logged and converted into
        a DENY whose reason is "system error"; ``user_id`` is preserved.
        """
        try:
            action = Action(action)
            patterns = generate_patterns(resource)
            lazy_logger.debug(
                lambda: f"Querying {len(patterns)} patterns for {user_id} {action} {resource}: "
                f"{', '.join(patterns)}"
            )

            records = await self._store.query_permissions(user_id, action, patterns)
            candidates = [
                ScoredPermission(permission=record, score=score(resource, record.resource))
                for record in records
            ]

            if not candidates:
                logger.info(
                    "No permissions found for user",
                    extra={"user_id": user_id, "action": str(action), "resource": resource},
                )
                return no_match_decision(user_id, action, resource)

            decision = resolve_candidates(user_id, action, resource, candidates, self._strategy)
        except Exception:
            logger.exception(
                "Permission check failed",
                extra={"user_id": user_id, "action": str(action), "resource": resource},
            )
            return system_error_decision(user_id)

        logger.info(
            "Permission check completed",
            extra={
                "user_id": user_id,
                "action": str(action),
                "resource": resource,
                "decision": decision.outcome.value,
                "basis": decision.basis.value,
                "matched_count": len(candidates),
            },
        )
        return decision
