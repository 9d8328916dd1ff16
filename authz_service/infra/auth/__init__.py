"""Identity resolution: turning an access token into a permission user id.

Usage:
    from authz_service.infra.auth import get_identity_resolver

    resolver = get_identity_resolver()
    identity = await resolver.resolve_identity(request.access_token)

Implementations:
    - UserInfoIdentityResolver: OpenID Connect userinfo endpoint (httpx)
    - StaticIdentityResolver: fixed token map for development and tests
"""

from authz_service.infra.auth.factory import (
    UnconfiguredIdentityResolver,
    close_identity_resolver,
    get_http_client,
    get_identity_resolver,
)
from authz_service.infra.auth.models import ResolvedIdentity
from authz_service.infra.auth.protocols import IdentityResolver
from authz_service.infra.auth.testing import StaticIdentityResolver
from authz_service.infra.auth.tokens import ensure_jwt_format, strip_bearer
from authz_service.infra.auth.userinfo import UserInfoIdentityResolver

__all__ = [
    "IdentityResolver",
    "ResolvedIdentity",
    "StaticIdentityResolver",
    "UnconfiguredIdentityResolver",
    "UserInfoIdentityResolver",
    "close_identity_resolver",
    "ensure_jwt_format",
    "get_http_client",
    "get_identity_resolver",
    "strip_bearer",
]
