"""Tool model for AI development tools."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin
from models.tag import Tag, tool_tags


class Tool(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """Tool model - an external product or service, categorized through its tags."""

    __tablename__ = "tools"

    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    author_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=tool_tags, lazy="selectin")
