"""Code recipe model."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin
from models.tag import Tag, code_recipe_tags


class CodeRecipe(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """Code recipe model - a worked code sample with explanation."""

    __tablename__ = "code_recipes"

    language: Mapped[str | None] = mapped_column(String(100), nullable=True)
    framework: Mapped[str | None] = mapped_column(String(100), nullable=True)
    code_sample: Mapped[str | None] = mapped_column(Text, nullable=True)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    usage_notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=code_recipe_tags, lazy="selectin")
