"""
Base schemas shared by every catalog content type.

Per-type schemas in schemas.content extend these with their own fields.
"""
from datetime import datetime
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from models.enums import ContentStatus, Difficulty
from schemas.validators import (
    validate_and_normalize_tags,
    validate_content_length,
    validate_description_length,
    validate_tag_count,
    validate_title_length,
)

T = TypeVar("T")

# Attributes filled from relationships or computed by the router, never read
# straight off the ORM object
_DERIVED_FIELDS = {"tags", "author", "vote_count"}


class AuthorSummary(BaseModel):
    """Public subset of the submitting user's profile."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    login: str
    name: str | None = None
    avatar_url: str | None = None


class CatalogCreate(BaseModel):
    """
    Fields common to every submission.

    Subclasses set `content_required = False` for types whose detail is
    carried by other fields (tools, MCP servers, guides, paths).
    """

    content_required: ClassVar[bool] = True

    title: str
    description: str
    content: str | None = None
    tags: list[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.BEGINNER

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: list[str]) -> list[str]:
        """Normalize tags: lowercase, strip whitespace, validate format."""
        return validate_and_normalize_tags(v or [])

    @field_validator("tags")
    @classmethod
    def check_tag_count(cls, v: list[str]) -> list[str]:
        """Require between one and the configured maximum number of tags."""
        return validate_tag_count(v)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str) -> str:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str) -> str:
        """Validate description length."""
        return validate_description_length(v)

    @field_validator("content")
    @classmethod
    def check_content_length(cls, v: str | None) -> str | None:
        """Validate content length."""
        return validate_content_length(v)

    @model_validator(mode="after")
    def check_content_present(self) -> "CatalogCreate":
        """Reject submissions that omit content when the type requires it."""
        if self.content_required and not self.content:
            raise ValueError("Content is required.")
        return self


class CatalogUpdate(BaseModel):
    """Partial update: only provided fields are changed."""

    title: str | None = None
    description: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    difficulty: Difficulty | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def normalize_tags(cls, v: list[str] | None) -> list[str] | None:
        """Normalize tags: lowercase, strip whitespace, validate format."""
        if v is None:
            return v
        return validate_and_normalize_tags(v)

    @field_validator("tags")
    @classmethod
    def check_tag_count(cls, v: list[str] | None) -> list[str] | None:
        """Require between one and the configured maximum number of tags."""
        if v is None:
            return v
        return validate_tag_count(v)

    @field_validator("title")
    @classmethod
    def check_title_length(cls, v: str | None) -> str | None:
        """Validate title length."""
        return validate_title_length(v)

    @field_validator("description")
    @classmethod
    def check_description_length(cls, v: str | None) -> str | None:
        """Validate description length."""
        return validate_description_length(v)

    @field_validator("content")
    @classmethod
    def check_content_length(cls, v: str | None) -> str | None:
        """Validate content length."""
        return validate_content_length(v)


class CatalogListItem(BaseModel):
    """
    Fields every list item carries (no `content`, to keep list pages small).

    Built from ORM objects: tag names come from the loaded `tag_objects`
    relationship and `vote_count` is attached by the router.
    """

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    difficulty: Difficulty
    status: ContentStatus
    featured: bool = False
    author: AuthorSummary | None = None
    vote_count: int = 0
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="before")
    @classmethod
    def extract_from_model(cls, data: Any) -> Any:
        """
        Flatten an ORM object into a dict of this schema's fields.

        Relationships are read from __dict__ only, so an unloaded relationship
        never triggers lazy IO outside the async context.
        """
        if isinstance(data, dict) or not hasattr(data, "__dict__"):
            return data

        data_dict = {}
        for key in cls.model_fields:
            if key in _DERIVED_FIELDS:
                continue
            if hasattr(data, key):
                data_dict[key] = getattr(data, key)

        loaded = data.__dict__
        tag_objects = loaded.get("tag_objects")
        data_dict["tags"] = [tag.name for tag in tag_objects] if tag_objects else []
        data_dict["author"] = loaded.get("author")
        return data_dict


class CatalogResponse(CatalogListItem):
    """Full detail response (includes `content`)."""

    content: str | None = None


class PaginatedResponse(BaseModel, Generic[T]):
    """
    One page of a list endpoint.

    `next_offset` is the offset of the following page (offset plus the number
    of items returned) or None on the last page.
    """

    items: list[T]
    total: int
    offset: int
    limit: int
    has_more: bool
    next_offset: int | None = None


class CategoryStatsResponse(BaseModel):
    """Category breakdown for types with a category column."""

    total: int
    categories: list[str]
    counts: dict[str, int]


class CategoryCountsResponse(BaseModel):
    """Tag-derived category counts."""

    counts: dict[str, int]
    total: int


class InstructionStatsResponse(BaseModel):
    """Headline numbers for the instructions catalog."""

    total: int
    featured: int
    languages: int


class ItemSummary(BaseModel):
    """Minimal reference to a catalog item, used for related content."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    description: str | None = None


class DownloadTrackRequest(BaseModel):
    """Body of the download tracking endpoints."""

    id: UUID
