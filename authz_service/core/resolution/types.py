"""Value types shared by the permission resolution engine.

Actions, effects and outcomes are closed vocabularies. They are ``str``-valued
enums so they compare equal to the raw strings stored in the permission table
and serialize to them in JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple

__all__ = [
    "GLOBAL_RESOURCE",
    "WILDCARD",
    "Action",
    "Decision",
    "Effect",
    "HttpMethod",
    "MatchedPermission",
    "Outcome",
    "PermissionRecord",
    "ResolutionBasis",
    "ScoredPermission",
    "SpecificityScore",
]

# A segment that stands in for any literal segment(s)
WILDCARD = "*"
# Resource identifier (and pattern) covering everything
GLOBAL_RESOURCE = "*"
SEGMENT_SEPARATOR = "/"


class Action(str, Enum):
    """Permission actions, derived from HTTP methods by the normalizer."""

    READ = "read"
    WRITE = "write"
    DELETE = "delete"

    def __str__(self) -> str:
        return self.value


class Effect(str, Enum):
    """Effect of a permission record."""

    ALLOW = "allow"
    DENY = "deny"

    def __str__(self) -> str:
        return self.value


class Outcome(str, Enum):
    """Final authorization outcome."""

    ALLOW = "ALLOW"
    DENY = "DENY"

    def __str__(self) -> str:
        return self.value


class HttpMethod(str, Enum):
    """HTTP methods the normalizer knows how to map to an action."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class ResolutionBasis(str, Enum):
    """What a decision was based on.

    NO_MATCH is a normal business outcome (default deny); SYSTEM_ERROR is the
    fail-secure answer to an operational fault. Both produce DENY but are
    distinguishable here instead of by parsing the reason. UNAUTHENTICATED marks a
    DENY issued because the access token could not be resolved to a user.
    """

    EXACT = "exact"
    PATTERN = "pattern"
    GLOBAL = "global"
    NO_MATCH = "no_match"
    UNAUTHENTICATED = "unauthenticated"
    SYSTEM_ERROR = "system_error"


class SpecificityScore(NamedTuple):
    """Priority of a resource pattern relative to a concrete resource.

    Compared as a plain tuple: lexicographically, higher wins at each position.
    """

    exactness: int
    specificity: int
    negated_wildcards: float

    def __str__(self) -> str:
        return f"({self.exactness}, {self.specificity}, {self.negated_wildcards:g})"


@dataclass(frozen=True, slots=True)
class PermissionRecord:
    """A permission row as returned by a permission store."""

    user_id: str
    action: Action
    resource: str
    effect: Effect

    def to_matched(self) -> MatchedPermission:
        """Project the record onto the fields exposed in a decision."""
        return MatchedPermission(action=self.action, resource=self.resource, effect=self.effect)


@dataclass(frozen=True, slots=True)
class MatchedPermission:
    """The permission that determined a decision."""

    action: Action
    resource: str
    effect: Effect

    def to_dict(self) -> dict[str, str]:
        return {
            "action": self.action.value,
            "resource": self.resource,
            "effect": self.effect.value,
        }


@dataclass(frozen=True, slots=True)
class ScoredPermission:
    """A candidate permission annotated with its specificity score."""

    permission: PermissionRecord
    score: SpecificityScore

    @property
    def effect(self) -> Effect:
        return self.permission.effect

    @property
    def resource(self) -> str:
        return self.permission.resource


@dataclass(frozen=True, slots=True)
class Decision:
    """Result of one resolution call. Immutable and never persisted.

    Attributes:
        outcome: ALLOW or DENY.
        user_id: The resolved identity, or "unknown" when identity resolution failed.
        reason: Human-readable justification. Never carries internal error detail.
        matched_permissions: Empty, or exactly the one permission that drove the outcome.
        basis: What kind of evidence the outcome rests on.
    """

    outcome: Outcome
    user_id: str
    reason: str
    matched_permissions: tuple[MatchedPermission, ...] = field(default_factory=tuple)
    basis: ResolutionBasis = ResolutionBasis.NO_MATCH

    @property
    def allowed(self) -> bool:
        return self.outcome is Outcome.ALLOW

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the wire shape used by the authorize endpoint."""
        return {
            "decision": self.outcome.value,
            "user_id": self.user_id,
            "reason": self.reason,
            "matched_permissions": [p.to_dict() for p in self.matched_permissions],
        }
