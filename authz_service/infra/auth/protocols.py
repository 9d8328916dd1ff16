"""Identity resolver protocol.

Implementations:
    - UserInfoIdentityResolver: OpenID Connect userinfo endpoint over httpx
    - StaticIdentityResolver: fixed token -> user id map (development and tests)

Structural subtyping (@runtime_checkable): any class with a matching
``resolve_identity`` satisfies the protocol without inheriting from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from authz_service.infra.auth.models import ResolvedIdentity


@runtime_checkable
class IdentityResolver(Protocol):
    """Turns an opaque access token into the identity permissions are stored under."""

    async def resolve_identity(self, access_token: str) -> ResolvedIdentity:
        """Resolve ``access_token``.

        Raises:
            InvalidTokenError: The token is malformed, rejected or carries no
                user id. Its detail is safe to show to the caller.
            Exception: Any other failure (provider unreachable, bad response)
                is an operational fault.
        """
        ...
