"""Columns shared by every catalog content type."""
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import JSON, Boolean, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, declared_attr, mapped_column, relationship

from models.enums import ContentStatus, Difficulty

if TYPE_CHECKING:
    from models.user import User


# JSON lists are stored as JSONB on PostgreSQL and plain JSON elsewhere
JSONList = JSON().with_variant(JSONB(), "postgresql")


def difficulty_column() -> Mapped[Difficulty]:
    """Difficulty stored as a VARCHAR so new levels don't need an ALTER TYPE."""
    return mapped_column(
        Enum(Difficulty, native_enum=False, length=20),
        default=Difficulty.BEGINNER,
        nullable=False,
    )


class CatalogMixin:
    """
    Common catalog fields: identity, text, tags, moderation and authorship.

    Subclasses add their own `tag_objects` relationship against the type's
    junction table (see models.tag).
    """

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    difficulty: Mapped[Difficulty] = difficulty_column()
    status: Mapped[ContentStatus] = mapped_column(
        Enum(ContentStatus, native_enum=False, length=20),
        default=ContentStatus.PENDING,
        nullable=False,
        index=True,
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    @declared_attr
    def author_id(cls) -> Mapped[UUID | None]:  # noqa: N805
        return mapped_column(
            ForeignKey("users.id", ondelete="SET NULL"),
            nullable=True,
            index=True,
        )

    @declared_attr
    def author(cls) -> Mapped["User | None"]:  # noqa: N805
        return relationship("User", lazy="selectin")


class DownloadCountMixin:
    """Counters for types that track downloads and detail-page views."""

    downloads: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
