"""Permission storage: the ``user_permissions`` model and PermissionStore implementations."""

from authz_service.features.permissions.models import UserPermission
from authz_service.features.permissions.repository import SqlPermissionStore
from authz_service.features.permissions.seed import SAMPLE_PERMISSIONS
from authz_service.features.permissions.testing import InMemoryPermissionStore

__all__ = [
    "SAMPLE_PERMISSIONS",
    "InMemoryPermissionStore",
    "SqlPermissionStore",
    "UserPermission",
]
