"""Identity resolution through an OpenID Connect userinfo endpoint.

The provider does the cryptographic work: a token it accepts at ``/userinfo``
is valid, and the configured claim of the response (``nickname`` by default)
is the user id permissions are stored under.

Example:
    resolver = UserInfoIdentityResolver("https://tenant.eu.auth0.com/userinfo")
    identity = await resolver.resolve_identity("Bearer eyJ...")
    identity.user_id  # "user456"
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from authz_service.core.exceptions import InvalidTokenError
from authz_service.infra.auth.models import ResolvedIdentity
from authz_service.infra.auth.tokens import ensure_jwt_format, strip_bearer

logger = logging.getLogger(__name__)

# Responses meaning "the provider does not accept this token"
_REJECTED_STATUSES = frozenset({401, 403})


class UserInfoIdentityResolver:
    """IdentityResolver backed by an identity provider's userinfo endpoint.

    Attributes:
        userinfo_url: Absolute URL of the userinfo endpoint.
        user_id_claim: Claim holding the user id.
        timeout: Request timeout in seconds.
    """

    def __init__(
        self,
        userinfo_url: str,
        *,
        user_id_claim: str = "nickname",
        timeout: float = 5.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            userinfo_url: Absolute URL of the userinfo endpoint.
            user_id_claim: Claim holding the user id.
            timeout: Request timeout in seconds.
            client: Shared HTTP client. When omitted, a short-lived client is
                opened per call.
        """
        self.userinfo_url = userinfo_url
        self.user_id_claim = user_id_claim
        self.timeout = timeout
        self._client = client

    async def resolve_identity(self, access_token: str) -> ResolvedIdentity:
        token = ensure_jwt_format(strip_bearer(access_token))
        claims = await self._fetch_claims(token)

        user_id = claims.get(self.user_id_claim)
        if not isinstance(user_id, str) or not user_id:
            logger.warning(
                "User id claim missing from userinfo response",
                extra={"claim": self.user_id_claim},
            )
            raise InvalidTokenError("User ID not found in token")

        return ResolvedIdentity(user_id=user_id, claims=claims)

    async def _fetch_claims(self, token: str) -> dict[str, Any]:
        headers = {"Authorization": f"Bearer {token}", "Accept": "application/json"}
        if self._client is not None:
            response = await self._client.get(self.userinfo_url, headers=headers, timeout=self.timeout)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(self.userinfo_url, headers=headers)

        if response.status_code in _REJECTED_STATUSES:
            logger.info(
                "Identity provider rejected token",
                extra={"status_code": response.status_code},
            )
            raise InvalidTokenError("Token validation failed")
        response.raise_for_status()

        claims = response.json()
        if not isinstance(claims, dict):
            msg = "userinfo response is not a JSON object"
            raise TypeError(msg)
        return claims
