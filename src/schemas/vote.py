"""Pydantic schemas for vote endpoints."""
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from models.enums import TargetType
from schemas.target import TargetRef


class VoteCreate(TargetRef):
    """Cast or change a vote. Anything other than 1 or -1 is rejected."""

    value: Literal[1, -1]


class VoteResponse(BaseModel):
    """A user's vote on a target."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    target_type: TargetType
    target_id: UUID
    value: int
    created_at: datetime
    updated_at: datetime


class VoteValue(BaseModel):
    """The caller's vote value on a target."""

    value: int


class VoteSummary(BaseModel):
    """Aggregate of every vote on a target."""

    vote_count: int
    upvotes: int
    downvotes: int


class SuccessResponse(BaseModel):
    """Acknowledgement for deletes that report success in the body."""

    success: bool = True
