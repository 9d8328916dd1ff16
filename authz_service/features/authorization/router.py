"""API router for the authorization feature.

Endpoints:
    POST /authorize  - Decide whether a token's bearer may make an HTTP request

Status codes:
    200  ALLOW
    403  DENY (body still carries the decision and its reason)
    400  Unsupported HTTP method
    422  Malformed body or resource too deep

Example:
    POST /authorize
    {"access_token": "eyJ...", "method": "GET", "path": "/wallets/wallet-123"}

    200 {"decision": "ALLOW", "user_id": "user456",
         "reason": "granted by pattern wallets/*",
         "matched_permissions": [{"action": "read", "resource": "wallets/*", "effect": "allow"}]}
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

# Runtime imports so FastAPI resolves the Annotated[..., Depends(...)] metadata
from authz_service.features.authorization.dependencies import AuthorizationServiceDep  # noqa: TC001
from authz_service.features.authorization.schemas import AuthorizeRequest, AuthorizeResponse

router = APIRouter(tags=["authorization"])
logger = logging.getLogger(__name__)


@router.post(
    "/authorize",
    response_model=AuthorizeResponse,
    summary="Authorize a request",
    description="Resolve the caller's identity and decide ALLOW or DENY for the given method and path.",
    responses={
        status.HTTP_403_FORBIDDEN: {"model": AuthorizeResponse, "description": "Request denied"},
    },
)
async def authorize(payload: AuthorizeRequest, service: AuthorizationServiceDep) -> JSONResponse:
    """Authorize a request.

    Returns:
        The decision, with status 200 for ALLOW and 403 for DENY.
    """
    decision = await service.authorize(payload)
    body = AuthorizeResponse.from_decision(decision)
    return JSONResponse(
        status_code=status.HTTP_200_OK if decision.allowed else status.HTTP_403_FORBIDDEN,
        content=body.model_dump(mode="json"),
    )
