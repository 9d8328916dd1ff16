"""Conflict resolution between candidate permissions.

Ordering (``deny_first``, the default): every deny record precedes every
allow record; within each effect, records are ordered by score, highest
first. A low-specificity deny such as ``wallets/*`` therefore outranks an
exact-match allow. ``specificity_first`` orders by score alone.

With either ordering the first record is the winner, except that a deny tied
at exactly the winner's score always takes precedence.
"""

from __future__ import annotations

from enum import Enum
from operator import attrgetter
from typing import TYPE_CHECKING

from authz_service.core.resolution.types import (
    GLOBAL_RESOURCE,
    Action,
    Decision,
    Effect,
    Outcome,
    ResolutionBasis,
    ScoredPermission,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = [
    "ConflictStrategy",
    "no_match_decision",
    "order_candidates",
    "resolve_candidates",
]


class ConflictStrategy(str, Enum):
    """How candidates are ordered before the winner is picked."""

    DENY_FIRST = "deny_first"
    SPECIFICITY_FIRST = "specificity_first"


def order_candidates(
    candidates: Iterable[ScoredPermission],
    strategy: ConflictStrategy = ConflictStrategy.DENY_FIRST,
) -> list[ScoredPermission]:
    """Return candidates in priority order (stable for equal keys)."""
    ranked = sorted(candidates, key=attrgetter("score"), reverse=True)
    if strategy is ConflictStrategy.DENY_FIRST:
        ranked.sort(key=lambda candidate: candidate.effect is not Effect.DENY)
    return ranked


def _basis(candidate: ScoredPermission, resource: str) -> ResolutionBasis:
    if candidate.resource == GLOBAL_RESOURCE:
        return ResolutionBasis.GLOBAL
    if candidate.resource == resource:
        return ResolutionBasis.EXACT
    return ResolutionBasis.PATTERN


def _reason(candidate: ScoredPermission, action: Action, resource: str) -> str:
    basis = _basis(candidate, resource)
    if candidate.effect is Effect.DENY:
        if basis is ResolutionBasis.GLOBAL:
            return "globally denied"
        if basis is ResolutionBasis.EXACT:
            return f"explicitly denied {action} on {resource}"
        return f"denied by pattern {candidate.resource}"

    if basis is ResolutionBasis.GLOBAL:
        return "globally granted"
    if basis is ResolutionBasis.EXACT:
        return f"explicitly granted {action} on {resource}"
    return f"granted by pattern {candidate.resource}"


def no_match_decision(user_id: str, action: Action, resource: str) -> Decision:
    """Default deny when no permission governs the resource."""
    return Decision(
        outcome=Outcome.DENY,
        user_id=user_id,
        reason=f"no permissions found for {action} on {resource}",
        matched_permissions=(),
        basis=ResolutionBasis.NO_MATCH,
    )


def _decide(user_id: str, action: Action, resource: str, winner: ScoredPermission) -> Decision:
    return Decision(
        outcome=Outcome.ALLOW if winner.effect is Effect.ALLOW else Outcome.DENY,
        user_id=user_id,
        reason=_reason(winner, action, resource),
        matched_permissions=(winner.permission.to_matched(),),
        basis=_basis(winner, resource),
    )


def resolve_candidates(
    user_id: str,
    action: Action,
    resource: str,
    candidates: Iterable[ScoredPermission],
    strategy: ConflictStrategy = ConflictStrategy.DENY_FIRST,
) -> Decision:
    """Reduce scored candidates to a single decision.

    Args:
        user_id: Identity the decision is made for.
        action: Requested action.
        resource: Concrete resource identifier.
        candidates: Store records for (user, action) annotated with scores.
        strategy: Candidate ordering.

    Returns:
        DENY with reason "no permissions found ..." when there are no
        candidates, otherwise the outcome of the top-ranked record (or of a
        deny tied with it). The decision names exactly that one record.
    """
    ranked = order_candidates(candidates, strategy)
    if not ranked:
        return no_match_decision(user_id, action, resource)

    top = ranked[0]
    tied_deny = next(
        (c for c in ranked if c.score == top.score and c.effect is Effect.DENY),
        None,
    )
    return _decide(user_id, action, resource, tied_deny or top)
