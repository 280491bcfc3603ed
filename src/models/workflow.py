"""Workflow model for multi-step AI-assisted processes."""
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin, JSONList
from models.tag import Tag, workflow_tags


class Workflow(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """Workflow model - an ordered list of steps; category is a `category:<name>` tag."""

    __tablename__ = "workflows"

    steps: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=workflow_tags, lazy="selectin")
