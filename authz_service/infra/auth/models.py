"""Identity data returned by identity resolvers."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ResolvedIdentity(BaseModel):
    """Identity behind an access token.

    Attributes:
        user_id: Identifier permissions are stored under.
        claims: Raw claims returned by the identity provider (may be empty).
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(min_length=1, description="Permission user id")
    claims: dict[str, Any] = Field(default_factory=dict, description="Identity provider claims")
