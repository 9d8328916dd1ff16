"""Core database package: declarative base and model mixins."""

from authz_service.core.database.base import NAMING_CONVENTION, Base, IntegerPKMixin, TimestampMixin

__all__ = ["NAMING_CONVENTION", "Base", "IntegerPKMixin", "TimestampMixin"]
