"""Collection and CollectionItem models."""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, Enum, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.enums import TargetType

if TYPE_CHECKING:
    from models.user import User


class Collection(Base, UUIDv7Mixin, TimestampMixin):
    """
    A user-curated named set of catalog items.

    Private collections are visible to their owner only; public ones to anyone.
    """

    __tablename__ = "collections"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100))
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    is_public: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    user: Mapped["User"] = relationship(back_populates="collections", lazy="selectin")
    items: Mapped[list["CollectionItem"]] = relationship(
        back_populates="collection",
        cascade="all, delete-orphan",
        order_by="CollectionItem.created_at",
        lazy="selectin",
    )


class CollectionItem(Base, UUIDv7Mixin, TimestampMixin):
    """Membership of one catalog item in a collection."""

    __tablename__ = "collection_items"
    __table_args__ = (
        UniqueConstraint(
            "collection_id", "target_type", "target_id",
            name="uq_collection_items_collection_target",
        ),
    )

    collection_id: Mapped[UUID] = mapped_column(
        ForeignKey("collections.id", ondelete="CASCADE"),
        index=True,
    )
    target_type: Mapped[TargetType] = mapped_column(
        Enum(TargetType, native_enum=False, length=20),
    )
    target_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True))

    collection: Mapped[Collection] = relationship(back_populates="items")
