"""IdentityResolver factory.

Static tokens configured (AUTH_STATIC_TOKENS) -> StaticIdentityResolver,
otherwise UserInfoIdentityResolver against AUTH_USERINFO_URL, sharing one
pooled HTTP client for the lifetime of the application.
"""

from __future__ import annotations

from functools import lru_cache
import logging
from typing import TYPE_CHECKING

import httpx

from authz_service.core.settings import get_auth_settings
from authz_service.infra.auth.protocols import IdentityResolver
from authz_service.infra.auth.testing import StaticIdentityResolver
from authz_service.infra.auth.userinfo import UserInfoIdentityResolver

if TYPE_CHECKING:
    from authz_service.infra.auth.models import ResolvedIdentity

logger = logging.getLogger(__name__)


class UnconfiguredIdentityResolver:
    """Resolver used when no identity provider is configured.

    Every call fails as an operational fault, so requests are denied with
    "system error" instead of being silently trusted.
    """

    async def resolve_identity(self, access_token: str) -> ResolvedIdentity:
        msg = "No identity provider configured (set AUTH_USERINFO_URL or AUTH_STATIC_TOKENS)"
        raise RuntimeError(msg)


@lru_cache(maxsize=1)
def get_http_client() -> httpx.AsyncClient:
    """Get the process-wide HTTP client used to reach the identity provider."""
    return httpx.AsyncClient(timeout=get_auth_settings().request_timeout)


@lru_cache(maxsize=1)
def get_identity_resolver() -> IdentityResolver:
    """Get the configured identity resolver (singleton)."""
    settings = get_auth_settings()
    if settings.uses_static_tokens:
        logger.warning(
            "Using static identity tokens; do not enable in production",
            extra={"token_count": len(settings.static_tokens)},
        )
        return StaticIdentityResolver(settings.static_tokens)

    if settings.userinfo_url is None:
        logger.error("No identity provider configured; every authorization will be denied")
        return UnconfiguredIdentityResolver()

    logger.info(
        "Using userinfo identity resolver",
        extra={"userinfo_url": str(settings.userinfo_url), "claim": settings.user_id_claim},
    )
    return UserInfoIdentityResolver(
        str(settings.userinfo_url),
        user_id_claim=settings.user_id_claim,
        timeout=settings.request_timeout,
        client=get_http_client(),
    )


async def close_identity_resolver() -> None:
    """Close the shared HTTP client and forget the cached resolver.

    This should be called during application shutdown.
    """
    if get_http_client.cache_info().currsize:
        logger.info("Closing identity provider HTTP client")
        await get_http_client().aclose()
    get_identity_resolver.cache_clear()
    get_http_client.cache_clear()
