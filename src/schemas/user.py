"""Pydantic schemas for users and login."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from models.enums import UserRole


class UserResponse(BaseModel):
    """The authenticated user's profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    github_id: int
    login: str
    name: str | None
    email: str | None
    avatar_url: str | None
    role: UserRole
    created_at: datetime


class LoginResponse(BaseModel):
    """Result of a GitHub login: a bearer token and the user it belongs to."""

    token: str
    user: UserResponse
