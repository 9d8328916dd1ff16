"""Authorization flow: token + HTTP method/path -> ALLOW/DENY decision."""

from authz_service.features.authorization.schemas import AuthorizeRequest, AuthorizeResponse
from authz_service.features.authorization.service import UNKNOWN_USER, AuthorizationService

__all__ = ["UNKNOWN_USER", "AuthorizationService", "AuthorizeRequest", "AuthorizeResponse"]
