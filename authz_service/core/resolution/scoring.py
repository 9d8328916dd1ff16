"""Specificity scoring of resource patterns."""

from __future__ import annotations

import math

from authz_service.core.resolution.types import (
    GLOBAL_RESOURCE,
    SEGMENT_SEPARATOR,
    WILDCARD,
    SpecificityScore,
)

__all__ = ["GLOBAL_SCORE", "score"]

# The global pattern always ranks last, whatever the segment arithmetic says
GLOBAL_SCORE = SpecificityScore(exactness=0, specificity=0, negated_wildcards=-math.inf)


def score(resource: str, pattern: str) -> SpecificityScore:
    """Score ``pattern`` as a matcher for the concrete ``resource``.

    Returns ``(exactness, specificity, -wildcards)`` where exactness is 1 only
    for the identical string, specificity counts literal segments and the
    last component penalises wildcards. Pure string computation.

    Example:
        >>> score("wallets/wallet-123", "wallets/wallet-123")
        SpecificityScore(exactness=1, specificity=2, negated_wildcards=0)
        >>> score("wallets/wallet-123", "wallets/*")
        SpecificityScore(exactness=0, specificity=1, negated_wildcards=-1)
    """
    if pattern == GLOBAL_RESOURCE:
        return GLOBAL_SCORE

    segments = pattern.split(SEGMENT_SEPARATOR)
    wildcards = sum(1 for segment in segments if segment == WILDCARD)
    return SpecificityScore(
        exactness=1 if pattern == resource else 0,
        specificity=len(segments) - wildcards,
        negated_wildcards=-wildcards,
    )
