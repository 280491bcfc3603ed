"""Pydantic schemas for personal access token endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class TokenCreate(BaseModel):
    """Request body for creating a personal access token."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Label for the token, e.g. 'CLI' or 'CI publisher'",
    )
    expires_in_days: int | None = Field(
        default=None,
        ge=1,
        le=365,
        description="Days until the token expires (1-365). Omit for a token that never expires.",
    )


class TokenCreateResponse(BaseModel):
    """
    A newly created token.

    `token` holds the plaintext value and is returned only here; it cannot be
    retrieved later.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    token: str = Field(..., description="Plaintext token, shown once.")
    token_prefix: str
    expires_at: datetime | None
    created_at: datetime


class TokenResponse(BaseModel):
    """Token metadata for listings (never the plaintext)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    token_prefix: str
    last_used_at: datetime | None
    expires_at: datetime | None
    created_at: datetime
