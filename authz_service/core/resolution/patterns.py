"""Candidate pattern generation for a concrete resource identifier.

Permission records store resource *patterns*: strings shaped like resource
identifiers in which any segment may be ``*``. Rather than evaluating every
pattern a user owns against the request, the engine enumerates the closed set
of patterns that could govern a resource and asks the store for records whose
resource is textually one of them.

For ``wallets/wallet-123/transactions/txn-456`` the set is::

    wallets/wallet-123/transactions/txn-456     exact
    wallets/wallet-123/transactions/*           trailing wildcards
    wallets/wallet-123/*
    wallets/*
    wallets/*/txn-456                           first and last segment kept
    wallets/*/transactions/txn-456              one internal wildcard
    wallets/wallet-123/*/txn-456
    wallets/*/transactions/*                    internal + trailing wildcard
    *                                           global

A trailing ``*`` stands for everything after the cut, however many segments
that is. The function is pure: the same resource always yields the same
patterns in the same order.
"""

from __future__ import annotations

from authz_service.core.resolution.types import GLOBAL_RESOURCE, SEGMENT_SEPARATOR, WILDCARD

__all__ = ["generate_patterns"]


def _join(segments: list[str] | tuple[str, ...]) -> str:
    return SEGMENT_SEPARATOR.join(segments)


def generate_patterns(resource: str) -> tuple[str, ...]:
    """Generate every pattern that may match ``resource``.

    Args:
        resource: Canonical resource identifier (see ``map_resource``).

    Returns:
        Deduplicated patterns, always including ``resource`` itself and ``*``.
        Only membership matters; the order (most to least specific rule) is
        kept for readable logs and stable store queries.
    """
    segments = resource.split(SEGMENT_SEPARATOR)
    n = len(segments)
    patterns: list[str] = [resource]

    # Trailing wildcards: keep a literal prefix, replace the rest by one "*"
    for cut in range(n - 1, 0, -1):
        patterns.append(_join([*segments[:cut], WILDCARD]))

    # Single middle wildcard
    if n >= 3:
        patterns.append(_join([segments[0], WILDCARD, segments[-1]]))
    if n > 3:
        for i in range(1, n - 1):
            patterns.append(_join([*segments[:i], WILDCARD, *segments[i + 1 :]]))

    # Literal prefix, one internal wildcard, literal middle, trailing wildcard
    if n >= 4:
        for i in range(1, n - 2):
            patterns.append(_join([*segments[:i], WILDCARD, *segments[i + 1 : n - 1], WILDCARD]))

    patterns.append(GLOBAL_RESOURCE)
    return tuple(dict.fromkeys(patterns))
