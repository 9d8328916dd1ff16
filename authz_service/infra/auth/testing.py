"""Static identity resolver for development and testing.

A Protocol-based test double for IdentityResolver: tokens are looked up in a
fixed map, no identity provider is contacted.

Usage:
    resolver = StaticIdentityResolver({"alice-token": "user456"})
    identity = await resolver.resolve_identity("Bearer alice-token")
    assert identity.user_id == "user456"

    # FastAPI dependency override
    app.dependency_overrides[get_identity_resolver] = lambda: resolver

    # Simulate an identity provider outage
    resolver.fail_with(httpx.ConnectError("unreachable"))
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authz_service.core.exceptions import InvalidTokenError
from authz_service.infra.auth.models import ResolvedIdentity
from authz_service.infra.auth.tokens import strip_bearer

if TYPE_CHECKING:
    from collections.abc import Mapping


class StaticIdentityResolver:
    """IdentityResolver over a fixed token -> user id map."""

    def __init__(self, tokens: Mapping[str, str] | None = None) -> None:
        self._tokens: dict[str, str] = dict(tokens or {})
        self._failure: BaseException | None = None

    def register_token(self, token: str, user_id: str) -> None:
        self._tokens[token] = user_id

    def fail_with(self, error: BaseException | None) -> None:
        """Make every subsequent resolution raise ``error`` (``None`` to recover)."""
        self._failure = error

    async def resolve_identity(self, access_token: str) -> ResolvedIdentity:
        if self._failure is not None:
            raise self._failure
        token = strip_bearer(access_token)
        user_id = self._tokens.get(token)
        if user_id is None:
            raise InvalidTokenError("Unknown token")
        return ResolvedIdentity(user_id=user_id, claims={"sub": user_id})
