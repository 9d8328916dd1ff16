"""SQLAlchemy models for the permission store."""

from __future__ import annotations

from sqlalchemy import CheckConstraint, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from authz_service.core.database import Base, IntegerPKMixin, TimestampMixin
from authz_service.core.resolution import Action, Effect, PermissionRecord


class UserPermission(Base, IntegerPKMixin, TimestampMixin):
    """One grant or denial of an action on a resource pattern.

    ``resource`` holds a pattern in the same shape as a resource identifier,
    where any segment may be ``*`` and ``*`` alone means everything. Patterns
    are matched by textual equality against the generated candidate set, so
    they must be stored exactly as the engine generates them.
    """

    __tablename__ = "user_permissions"
    __table_args__ = (
        Index("ix_user_permissions_user_action_resource", "user_id", "action", "resource"),
        CheckConstraint("action IN ('read', 'write', 'delete')", name="action_valid"),
        CheckConstraint("effect IN ('allow', 'deny')", name="effect_valid"),
    )

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Identity the permission applies to",
    )
    action: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        comment="read, write or delete",
    )
    resource: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        comment="Resource pattern, e.g. 'wallets/*/transactions'",
    )
    effect: Mapped[str] = mapped_column(
        String(8),
        nullable=False,
        comment="allow or deny",
    )

    def to_record(self) -> PermissionRecord:
        """Convert the row into the engine's immutable record type."""
        return PermissionRecord(
            user_id=self.user_id,
            action=Action(self.action),
            resource=self.resource,
            effect=Effect(self.effect),
        )

    def __repr__(self) -> str:
        return (
            f"<UserPermission(id={self.id}, user_id={self.user_id!r}, "
            f"{self.effect} {self.action} {self.resource!r})>"
        )
