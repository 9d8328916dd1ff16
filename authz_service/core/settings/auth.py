"""Identity resolution settings.

Token verification happens at the identity provider: the service presents
the caller's access token to the provider's userinfo endpoint and reads the
user identifier from the returned claims.
"""

from __future__ import annotations

from pydantic import AnyHttpUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Identity provider settings.

    Environment variables use AUTH_ prefix.
    Example: AUTH_USERINFO_URL=https://tenant.eu.auth0.com/userinfo

    For local development, AUTH_STATIC_TOKENS maps opaque tokens straight to
    user ids (JSON object), bypassing the identity provider entirely.
    """

    userinfo_url: AnyHttpUrl | None = Field(
        default=None,
        description="OpenID Connect userinfo endpoint used to resolve access tokens",
    )
    user_id_claim: str = Field(
        default="nickname",
        min_length=1,
        description="Claim in the userinfo response holding the permission user id",
    )
    request_timeout: float = Field(
        default=5.0,
        gt=0,
        le=60,
        description="Timeout in seconds for identity provider requests",
    )
    static_tokens: dict[str, str] = Field(
        default_factory=dict,
        description="Development token -> user id map (JSON object)",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @property
    def uses_static_tokens(self) -> bool:
        """Whether the static development resolver should be used."""
        return bool(self.static_tokens)
