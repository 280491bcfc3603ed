"""Prompt model for reusable AI prompts."""
from sqlalchemy.orm import Mapped, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin
from models.tag import Tag, prompt_tags


class Prompt(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """
    Prompt model - a copy-ready prompt for an AI coding assistant.

    Prompts have no category column; the category is carried as a
    `category:<name>` tag.
    """

    __tablename__ = "prompts"

    tag_objects: Mapped[list[Tag]] = relationship(secondary=prompt_tags, lazy="selectin")
