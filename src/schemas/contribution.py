"""Pydantic schemas for GitHub pull request contributions."""
from typing import Any

from pydantic import BaseModel, Field

from models.enums import TargetType
from schemas.catalog import CatalogCreate


class ContributionCreate(CatalogCreate):
    """
    Content to contribute as a pull request.

    `extra` holds type-specific front matter (e.g. `language`, `category`).
    """

    type: TargetType
    extra: dict[str, Any] = Field(default_factory=dict)


class ContributionResponse(BaseModel):
    """The opened pull request."""

    pr_url: str
    branch: str
    path: str
