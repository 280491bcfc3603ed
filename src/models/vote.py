"""Vote model - polymorphic up/down votes on catalog items."""
from uuid import UUID

from sqlalchemy import (
    CheckConstraint,
    Enum,
    ForeignKey,
    Index,
    SmallInteger,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.enums import TargetType


class Vote(Base, UUIDv7Mixin, TimestampMixin):
    """
    A user's vote on a catalog item.

    The target is a (target_type, target_id) pair rather than a foreign key so
    one table serves every catalog type. A user holds at most one vote per target.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "target_type", "target_id", name="uq_votes_user_target",
        ),
        CheckConstraint("value IN (-1, 1)", name="ck_votes_value"),
        Index("ix_votes_target", "target_type", "target_id"),
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    target_type: Mapped[TargetType] = mapped_column(
        Enum(TargetType, native_enum=False, length=20),
    )
    target_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True))
    value: Mapped[int] = mapped_column(SmallInteger)
