"""FastAPI dependencies for the authorization feature.

Tests swap collaborators through ``app.dependency_overrides``:

    app.dependency_overrides[get_permission_store] = lambda: InMemoryPermissionStore(...)
    app.dependency_overrides[get_identity_resolver] = lambda: StaticIdentityResolver(...)
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from authz_service.core.dependencies import get_db_session
from authz_service.core.resolution import PermissionResolutionEngine, PermissionStore
from authz_service.core.settings import ResolutionSettings, get_resolution_settings  # noqa: TC001
from authz_service.features.authorization.service import AuthorizationService
from authz_service.features.permissions import SqlPermissionStore
from authz_service.infra.auth import IdentityResolver, get_identity_resolver  # noqa: TC001


async def get_permission_store(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PermissionStore:
    """Request-scoped SQL permission store."""
    return SqlPermissionStore(session)


def get_authorization_service(
    store: Annotated[PermissionStore, Depends(get_permission_store)],
    identity_resolver: Annotated[IdentityResolver, Depends(get_identity_resolver)],
    settings: Annotated[ResolutionSettings, Depends(get_resolution_settings)],
) -> AuthorizationService:
    """Assemble the authorization service for one request."""
    engine = PermissionResolutionEngine(store, settings)
    return AuthorizationService(identity_resolver, engine, settings)


AuthorizationServiceDep = Annotated[AuthorizationService, Depends(get_authorization_service)]
