"""Service layer for the authorization flow.

    access token ──> IdentityResolver ──> user_id
    method, path ──> map_action / map_resource ──> action, resource
    (user_id, action, resource) ──> PermissionResolutionEngine ──> Decision
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from authz_service.core.exceptions import InvalidTokenError, ResourceTooDeepError
from authz_service.core.resolution import (
    SYSTEM_ERROR_REASON,
    Decision,
    Outcome,
    ResolutionBasis,
    count_segments,
    map_action,
    map_resource,
)
from authz_service.infra.logging import get_lazy_logger, log_context

if TYPE_CHECKING:
    from authz_service.core.resolution import PermissionResolutionEngine
    from authz_service.core.settings import ResolutionSettings
    from authz_service.features.authorization.schemas import AuthorizeRequest
    from authz_service.infra.auth import IdentityResolver

# Standard logger for INFO/WARNING/ERROR
logger = logging.getLogger(__name__)
# Lazy logger for DEBUG (zero overhead when DEBUG disabled)
lazy_logger = get_lazy_logger(__name__)

UNKNOWN_USER = "unknown"


def _identity_denied(reason: str, basis: ResolutionBasis) -> Decision:
    return Decision(
        outcome=Outcome.DENY,
        user_id=UNKNOWN_USER,
        reason=reason,
        matched_permissions=(),
        basis=basis,
    )


class AuthorizationService:
    """Answers "may the bearer of this token make this HTTP request?".

    Handles:
    - Identity resolution failures (DENY for user "unknown")
    - Method/path normalization (unsupported methods are request errors)
    - Resource depth limits
    - Delegation to the resolution engine
    """

    def __init__(
        self,
        identity_resolver: IdentityResolver,
        engine: PermissionResolutionEngine,
        settings: ResolutionSettings | None = None,
    ) -> None:
        """Initialize the authorization service.

        Args:
            identity_resolver: Turns access tokens into user ids.
            engine: Permission resolution engine.
            settings: Engine settings (loaded from the environment if omitted).
        """
        if settings is None:
            from authz_service.core.settings import get_resolution_settings

            settings = get_resolution_settings()
        self._identity_resolver = identity_resolver
        self._engine = engine
        self._max_depth = settings.max_resource_depth

    async def authorize(self, request: AuthorizeRequest) -> Decision:
        """Decide whether the request described by ``request`` is allowed.

        Raises:
            UnsupportedMethodError: The method has no permission action.
            ResourceTooDeepError: The path has more segments than allowed.
        """
        # Request errors are reported before the identity provider is contacted
        action = map_action(request.method)
        resource = map_resource(request.path)
        depth = count_segments(resource)
        if depth > self._max_depth:
            raise ResourceTooDeepError(depth, self._max_depth)

        try:
            identity = await self._identity_resolver.resolve_identity(request.access_token)
        except InvalidTokenError as e:
            logger.info("Access token rejected", extra={"reason": e.detail})
            return _identity_denied(e.detail, ResolutionBasis.UNAUTHENTICATED)
        except Exception:
            logger.exception("Identity resolution failed")
            return _identity_denied(SYSTEM_ERROR_REASON, ResolutionBasis.SYSTEM_ERROR)

        lazy_logger.debug(
            lambda: f"authorize: {request.method} {request.path} -> {action} {resource} "
            f"for {identity.user_id}"
        )
        with log_context(user_id=identity.user_id, action=action.value, resource=resource):
            return await self._engine.resolve(identity.user_id, action, resource)
