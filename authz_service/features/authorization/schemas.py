"""Pydantic schemas for the authorization endpoint."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from authz_service.core.resolution import Decision


class AuthorizeRequest(BaseModel):
    """Authorization request: who is calling, and which request they want to make."""

    access_token: str = Field(
        ...,
        min_length=1,
        description="Caller's access token (a 'Bearer ' prefix is accepted)",
    )
    method: str = Field(
        ...,
        min_length=1,
        description="HTTP method of the guarded request (GET, POST, PUT, PATCH, DELETE)",
        examples=["GET"],
    )
    path: str = Field(
        ...,
        min_length=1,
        description="Path of the guarded request, starting with '/'",
        examples=["/wallets/wallet-123/transactions"],
    )

    @field_validator("path")
    @classmethod
    def path_is_absolute(cls, v: str) -> str:
        if not v.startswith("/"):
            msg = "path must start with '/'"
            raise ValueError(msg)
        return v


class MatchedPermissionResponse(BaseModel):
    """The permission that decided the request."""

    action: str
    resource: str
    effect: str


class AuthorizeResponse(BaseModel):
    """Authorization decision."""

    decision: str = Field(..., description="ALLOW or DENY", examples=["ALLOW"])
    user_id: str = Field(..., description="Resolved user id, 'unknown' if the token could not be resolved")
    reason: str = Field(..., description="Why the decision was made")
    matched_permissions: list[MatchedPermissionResponse] = Field(
        default_factory=list,
        description="Empty, or the single permission that determined the decision",
    )

    @classmethod
    def from_decision(cls, decision: Decision) -> AuthorizeResponse:
        return cls.model_validate(decision.to_dict())
