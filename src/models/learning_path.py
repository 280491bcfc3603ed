"""Learning path model."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin, JSONList
from models.tag import Tag, learning_path_tags


class LearningPath(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """
    Learning path model - a curated sequence through other catalog items.

    The path's level is the shared `difficulty` column.
    """

    __tablename__ = "learning_paths"

    audience: Mapped[str | None] = mapped_column(String(200), nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    goals: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    steps: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    prompt_slugs: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    workflow_slugs: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    tool_slugs: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    recipe_slugs: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    migration_slugs: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    tag_objects: Mapped[list[Tag]] = relationship(
        secondary=learning_path_tags, lazy="selectin",
    )
