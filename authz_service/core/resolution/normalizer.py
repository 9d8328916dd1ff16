"""Translate HTTP method/path pairs into permission actions and resources."""

from __future__ import annotations

from authz_service.core.exceptions import UnsupportedMethodError
from authz_service.core.resolution.types import (
    GLOBAL_RESOURCE,
    SEGMENT_SEPARATOR,
    Action,
    HttpMethod,
)

__all__ = ["count_segments", "map_action", "map_resource"]

_METHOD_ACTIONS: dict[HttpMethod, Action] = {
    HttpMethod.GET: Action.READ,
    HttpMethod.POST: Action.WRITE,
    HttpMethod.PUT: Action.WRITE,
    HttpMethod.PATCH: Action.WRITE,
    HttpMethod.DELETE: Action.DELETE,
}


def map_action(method: str) -> Action:
    """Map an HTTP method (case-insensitive) to a permission action.

    Args:
        method: HTTP method name, e.g. "GET" or "patch".

    Returns:
        The corresponding action.

    Raises:
        UnsupportedMethodError: If the method has no action (HEAD, OPTIONS, ...).

    Example:
        >>> map_action("patch")
        <Action.WRITE: 'write'>
    """
    try:
        return _METHOD_ACTIONS[HttpMethod(method.upper())]
    except ValueError:
        raise UnsupportedMethodError(method) from None


def map_resource(path: str) -> str:
    """Convert a request path into a canonical resource identifier.

    Leading slashes, the query string and trailing slashes are removed. The
    root path (or an empty path) maps to the global identifier ``*``. Nothing
    else is normalized: case and percent-encoding are kept verbatim.

    Example:
        >>> map_resource("/wallets/wallet-123/?page=2")
        'wallets/wallet-123'
        >>> map_resource("/")
        '*'
    """
    resource = path.lstrip(SEGMENT_SEPARATOR).split("?", 1)[0]
    resource = resource.rstrip(SEGMENT_SEPARATOR)
    return resource or GLOBAL_RESOURCE


def count_segments(resource: str) -> int:
    """Number of segments in a canonical resource identifier."""
    return resource.count(SEGMENT_SEPARATOR) + 1
