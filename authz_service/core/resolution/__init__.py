"""Permission resolution engine.

Given an identity, an action and a concrete resource, decide ALLOW or DENY
and explain why:

    1. map_action / map_resource   HTTP method/path -> action/resource
    2. generate_patterns           every wildcard pattern that could govern the resource
    3. PermissionStore             records for (user, action) whose resource is one of them
    4. score                       (exactness, specificity, -wildcards) per record
    5. resolve_candidates          order, detect ties, pick the deciding record

Pattern syntax:
    - Slash-separated segments: "wallets/wallet-123/transactions"
    - "*" as a segment: any segment(s) at that position
    - "*" alone: global scope

Example:
    >>> from authz_service.core.resolution import PermissionResolutionEngine, map_action, map_resource
    >>> engine = PermissionResolutionEngine(store)
    >>> decision = await engine.resolve("u1", map_action("GET"), map_resource("/wallets/wallet-123"))
    >>> decision.outcome, decision.reason
    (<Outcome.ALLOW: 'ALLOW'>, 'explicitly granted read on wallets/wallet-123')
"""

from __future__ import annotations

from authz_service.core.resolution.engine import (
    SYSTEM_ERROR_REASON,
    PermissionResolutionEngine,
    system_error_decision,
)
from authz_service.core.resolution.normalizer import count_segments, map_action, map_resource
from authz_service.core.resolution.patterns import generate_patterns
from authz_service.core.resolution.protocols import PermissionStore
from authz_service.core.resolution.resolver import (
    ConflictStrategy,
    no_match_decision,
    order_candidates,
    resolve_candidates,
)
from authz_service.core.resolution.scoring import GLOBAL_SCORE, score
from authz_service.core.resolution.types import (
    GLOBAL_RESOURCE,
    WILDCARD,
    Action,
    Decision,
    Effect,
    HttpMethod,
    MatchedPermission,
    Outcome,
    PermissionRecord,
    ResolutionBasis,
    ScoredPermission,
    SpecificityScore,
)

__all__ = [
    "GLOBAL_RESOURCE",
    "GLOBAL_SCORE",
    "SYSTEM_ERROR_REASON",
    "WILDCARD",
    "Action",
    "ConflictStrategy",
    "Decision",
    "Effect",
    "HttpMethod",
    "MatchedPermission",
    "Outcome",
    "PermissionRecord",
    "PermissionResolutionEngine",
    "PermissionStore",
    "ResolutionBasis",
    "ScoredPermission",
    "SpecificityScore",
    "count_segments",
    "generate_patterns",
    "map_action",
    "map_resource",
    "no_match_decision",
    "order_candidates",
    "resolve_candidates",
    "score",
    "system_error_decision",
]
