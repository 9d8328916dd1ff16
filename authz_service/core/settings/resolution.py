"""Permission resolution engine settings."""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ConflictStrategyName = Literal["deny_first", "specificity_first"]


class ResolutionSettings(BaseSettings):
    """Tuning for the permission resolution engine.

    Environment variables use AUTHZ_ prefix.
    Example: AUTHZ_CONFLICT_STRATEGY=deny_first, AUTHZ_MAX_RESOURCE_DEPTH=16

    conflict_strategy:
        deny_first         every deny record outranks every allow record,
                           specificity only orders records of the same effect
        specificity_first  records are ordered by specificity alone and deny
                           only wins among records tied at the top score
    """

    conflict_strategy: ConflictStrategyName = Field(
        default="deny_first",
        description="Ordering applied to candidate permissions (deny_first|specificity_first)",
    )
    max_resource_depth: int = Field(
        default=16,
        ge=1,
        le=64,
        description="Maximum number of segments in a resource identifier",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTHZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )
