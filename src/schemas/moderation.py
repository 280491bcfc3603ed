"""Pydantic schemas for moderation endpoints."""
from uuid import UUID

from pydantic import BaseModel

from models.enums import ContentStatus, TargetType
from schemas.catalog import AuthorSummary, CatalogListItem


class ModerationDecision(BaseModel):
    """New status for a submission, optionally (un)featuring it."""

    status: ContentStatus
    featured: bool | None = None


class PendingItem(CatalogListItem):
    """A submission waiting for review."""

    type: TargetType


class ModerationResult(BaseModel):
    """Status of an item after a moderation decision."""

    id: UUID
    type: TargetType
    slug: str
    status: ContentStatus
    featured: bool
    author: AuthorSummary | None = None
