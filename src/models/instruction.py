"""Instruction model for custom assistant instruction files."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin, DownloadCountMixin
from models.tag import Tag, instruction_tags


class Instruction(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin, DownloadCountMixin):
    """Instruction model - an instructions file scoped by file pattern, language and framework."""

    __tablename__ = "instructions"

    file_pattern: Mapped[str | None] = mapped_column(String(255), nullable=True)
    language: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    framework: Mapped[str | None] = mapped_column(String(100), nullable=True)
    scope: Mapped[str | None] = mapped_column(String(100), nullable=True)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=instruction_tags, lazy="selectin")
