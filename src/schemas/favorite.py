"""Pydantic schemas for favorite endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from models.enums import TargetType
from schemas.target import TargetRef


class FavoriteToggle(TargetRef):
    """Body of the toggle endpoint."""


class FavoriteResponse(BaseModel):
    """A favorited item."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    target_type: TargetType
    target_id: UUID
    created_at: datetime


class FavoriteToggleResponse(BaseModel):
    """Result of a toggle: `favorite` is set only when the item was added."""

    favorited: bool
    favorite: FavoriteResponse | None = None
    message: str


class FavoriteCheckRequest(BaseModel):
    """Ask which of several items of one type the caller has favorited."""

    target_type: TargetType
    target_ids: list[UUID] = Field(max_length=100)
