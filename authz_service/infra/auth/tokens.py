"""Access token helpers."""

from __future__ import annotations

import re

from authz_service.core.exceptions import InvalidTokenError

_BEARER_PREFIX = re.compile(r"^Bearer\s+", re.IGNORECASE)


def strip_bearer(token: str) -> str:
    """Remove a leading ``Bearer `` scheme (case-insensitive) and surrounding whitespace."""
    return _BEARER_PREFIX.sub("", token.strip())


def ensure_jwt_format(token: str) -> str:
    """Check that ``token`` has the three dot-separated parts of a JWT.

    Raises:
        InvalidTokenError: If it does not.
    """
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise InvalidTokenError("Invalid token format")
    return token
