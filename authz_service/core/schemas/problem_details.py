"""RFC 7807 Problem Details schema for error responses."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ProblemDetails(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs.

    See: https://datatracker.ietf.org/doc/html/rfc7807

    Example:
        return JSONResponse(
            status_code=400,
            content=ProblemDetails(
                type="unsupported-method",
                title="Bad Request",
                status=400,
                detail="Unsupported HTTP method: OPTIONS",
                instance="http://authz/authorize",
            ).model_dump(exclude_none=True),
        )
    """

    type: str = Field(
        default="about:blank",
        min_length=1,
        max_length=200,
        description="URI reference identifying the problem type",
    )
    title: str = Field(
        min_length=1, max_length=200, description="Short, human-readable summary of the problem"
    )
    status: int = Field(ge=100, le=599, description="HTTP status code")
    detail: str | None = Field(
        default=None,
        max_length=2000,
        description="Human-readable explanation specific to this occurrence",
    )
    instance: str | None = Field(
        default=None,
        max_length=500,
        description="URI reference identifying the specific occurrence",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "type": "resource-too-deep",
                "title": "Validation Error",
                "status": 422,
                "detail": "Resource has 40 segments, at most 16 are allowed",
                "instance": "http://authz/authorize",
            }
        },
        str_strip_whitespace=True,
    )


class ValidationErrorItem(BaseModel):
    """One field-level validation failure."""

    field: str = Field(description="Dotted location of the invalid field, e.g. 'body.path'")
    message: str = Field(description="What is wrong with it")
    type: str = Field(description="Pydantic error type")
    value: Any = Field(default=None, description="The rejected input")


class ValidationProblemDetails(ProblemDetails):
    """Problem details carrying field-level validation errors."""

    errors: list[ValidationErrorItem] = Field(default_factory=list)
