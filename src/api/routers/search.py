"""Site-wide search endpoint."""
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from core.http_cache import set_public_cache
from models.enums import Difficulty
from schemas.search import SearchResponse
from services.search_service import search_all

router = APIRouter(tags=["search"])

SearchSection = Literal[
    "all", "prompts", "workflows", "tools", "mcps", "instructions",
    "agents", "recipes", "migrations", "paths",
]


@router.get("/search", response_model=SearchResponse)
async def search(
    response: Response,
    q: str = Query(default="", max_length=200, description="Search text"),
    type: SearchSection = Query(default="all", description="Restrict to one section"),  # noqa: A002
    difficulty: Difficulty | None = Query(default=None),
    tags: list[str] = Query(default=[], description="Only items carrying any of these tags"),
    db: AsyncSession = Depends(get_async_session),
) -> SearchResponse:
    """Search every content type; up to 20 approved matches per section, newest if `q` is blank."""
    try:
        results = await search_all(
            db, q, section=type, difficulty=difficulty, tags=tags or None,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    set_public_cache(response)
    return SearchResponse(**results)
