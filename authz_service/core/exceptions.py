"""Custom exception classes for the authorization service."""

from __future__ import annotations

from typing import Any


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
        raise AppException(
            status_code=422,
            detail="Resource path is too deep",
            type="resource-too-deep",
            extra={"depth": 40, "max_depth": 16},
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            401: "Unauthorized",
            403: "Forbidden",
            404: "Not Found",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
            503: "Service Unavailable",
        }
        return titles.get(status_code, "Error")


class BadRequestException(AppException):
    """Exception raised for malformed requests."""

    def __init__(
        self,
        detail: str,
        type: str = "bad-request",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=400,
            detail=detail,
            type=type,
            title="Bad Request",
            instance=instance,
            extra=extra,
        )


class ValidationException(AppException):
    """Exception raised for validation errors.

    Example:
        raise ValidationException(
            detail="Path must start with '/'",
            type="validation-error",
            extra={"field": "path", "value": "wallets"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class UnauthorizedException(AppException):
    """Exception raised for authentication failures."""

    def __init__(
        self,
        detail: str,
        type: str = "unauthorized",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=401,
            detail=detail,
            type=type,
            title="Unauthorized",
            instance=instance,
            extra=extra,
        )


class ServiceUnavailableException(AppException):
    """Exception raised when a backing service is temporarily unavailable.

    Example:
        raise ServiceUnavailableException(
            detail="Permission store is temporarily unavailable",
            extra={"service": "permission-store"},
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "service-unavailable",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=503,
            detail=detail,
            type=type,
            title="Service Unavailable",
            instance=instance,
            extra=extra,
        )


# ──────────────────────────────────────────────────────────────
# Authorization domain errors
# ──────────────────────────────────────────────────────────────


class UnsupportedMethodError(BadRequestException):
    """Raised when an HTTP method has no corresponding permission action.

    This is a request validation failure, not a security decision: callers
    answer it with a 4xx instead of a DENY.

    Example:
        raise UnsupportedMethodError("OPTIONS")
    """

    def __init__(self, method: str, instance: str | None = None) -> None:
        self.method = method
        super().__init__(
            detail=f"Unsupported HTTP method: {method}",
            type="unsupported-method",
            instance=instance,
            extra={"method": method},
        )


class ResourceTooDeepError(ValidationException):
    """Raised when a resource has more segments than the engine accepts.

    The pattern set grows combinatorially with depth, so deep resources are
    rejected before the permission store is queried.
    """

    def __init__(self, depth: int, max_depth: int, instance: str | None = None) -> None:
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(
            detail=f"Resource has {depth} segments, at most {max_depth} are allowed",
            type="resource-too-deep",
            instance=instance,
            extra={"depth": depth, "max_depth": max_depth},
        )


class InvalidTokenError(UnauthorizedException):
    """Raised by identity resolvers when an access token cannot be resolved.

    The detail is safe to surface as a decision reason.
    """

    def __init__(self, detail: str = "Invalid token", extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="token-invalid", extra=extra)


class StoreUnavailableError(ServiceUnavailableException):
    """Raised by permission stores when the backing database cannot be read.

    The engine converts this into a fail-secure DENY and never copies the
    underlying error text into the decision.
    """

    def __init__(self, detail: str = "Permission store unavailable", extra: dict[str, Any] | None = None) -> None:
        super().__init__(detail=detail, type="store-unavailable", extra=extra)
