"""Favorite model."""
from uuid import UUID

from sqlalchemy import Enum, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.enums import TargetType


class Favorite(Base, UUIDv7Mixin, TimestampMixin):
    """A favorite of a catalog item, at most one per user and target."""

    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_favorites_user_target",
        ),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    target_type: Mapped[TargetType] = mapped_column(
        Enum(TargetType, native_enum=False, length=20),
    )
    target_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True))
