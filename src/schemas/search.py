"""Pydantic schemas for site-wide search."""
from pydantic import BaseModel, Field

from schemas.collection import ContentSummary


class SearchResultItem(ContentSummary):
    """A search hit with its vote score."""

    vote_count: int = 0


class SearchResponse(BaseModel):
    """Matches grouped by content type."""

    query: str
    total_results: int
    prompts: list[SearchResultItem] = Field(default_factory=list)
    workflows: list[SearchResultItem] = Field(default_factory=list)
    tools: list[SearchResultItem] = Field(default_factory=list)
    mcps: list[SearchResultItem] = Field(default_factory=list)
    instructions: list[SearchResultItem] = Field(default_factory=list)
    agents: list[SearchResultItem] = Field(default_factory=list)
    recipes: list[SearchResultItem] = Field(default_factory=list)
    migrations: list[SearchResultItem] = Field(default_factory=list)
    paths: list[SearchResultItem] = Field(default_factory=list)
