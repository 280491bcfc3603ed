"""Pydantic schemas for collection endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.enums import Difficulty, TargetType
from schemas.catalog import AuthorSummary
from schemas.target import TargetRef
from schemas.validators import validate_collection_name

MAX_COLLECTION_ITEMS = 200


class CollectionItemInput(TargetRef):
    """An item to put in a collection."""


class CollectionCreate(BaseModel):
    """New collection. `name` is required and trimmed to at least two characters."""

    name: str = Field(max_length=100)
    description: str = Field(default="", max_length=500)
    is_public: bool = False

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str) -> str:
        """Validate and trim the name."""
        return validate_collection_name(v)


class CollectionUpdate(BaseModel):
    """
    Partial update. When `items` is present it replaces the collection's items
    (duplicates are dropped).
    """

    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    is_public: bool | None = None
    items: list[CollectionItemInput] | None = Field(default=None, max_length=MAX_COLLECTION_ITEMS)

    @field_validator("name")
    @classmethod
    def check_name(cls, v: str | None) -> str | None:
        """Validate and trim the name when given."""
        return validate_collection_name(v)


class ContentSummary(BaseModel):
    """Approved catalog item referenced by a collection item."""

    id: UUID
    type: TargetType
    title: str
    slug: str
    description: str = ""
    difficulty: Difficulty
    tags: list[str] = Field(default_factory=list)


class CollectionItemResponse(BaseModel):
    """A collection item; `content` is null when the item is gone or not approved."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    target_type: TargetType
    target_id: UUID
    created_at: datetime
    content: ContentSummary | None = None


class CollectionResponse(BaseModel):
    """A collection with its items."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str
    is_public: bool
    user_id: UUID
    owner: AuthorSummary | None = None
    items: list[CollectionItemResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
