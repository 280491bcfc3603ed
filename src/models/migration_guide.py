"""Migration guide model."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin, JSONList
from models.tag import Tag, migration_guide_tags


class MigrationGuide(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """
    Migration guide model - moving a codebase from one stack to another.

    The related_*_slugs lists point at other catalog items by slug and are
    resolved on read; unknown slugs are ignored.
    """

    __tablename__ = "migration_guides"

    from_stack: Mapped[str | None] = mapped_column(String(200), nullable=True)
    to_stack: Mapped[str | None] = mapped_column(String(200), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    prerequisites: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    steps: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    risks: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    related_prompt_slugs: Mapped[list[str]] = mapped_column(
        JSONList, default=list, nullable=False,
    )
    related_recipe_slugs: Mapped[list[str]] = mapped_column(
        JSONList, default=list, nullable=False,
    )
    related_tool_slugs: Mapped[list[str]] = mapped_column(
        JSONList, default=list, nullable=False,
    )
    related_workflow_slugs: Mapped[list[str]] = mapped_column(
        JSONList, default=list, nullable=False,
    )

    tag_objects: Mapped[list[Tag]] = relationship(
        secondary=migration_guide_tags, lazy="selectin",
    )
