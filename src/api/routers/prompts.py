"""Prompt endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from schemas.catalog import CategoryCountsResponse
from schemas.content import PromptCreate, PromptListItem, PromptResponse, PromptUpdate
from services.prompt_service import prompt_service

router = APIRouter(prefix="/prompts", tags=["prompts"])


@router.get("/categories", response_model=CategoryCountsResponse)
async def get_prompt_categories(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryCountsResponse:
    """Approved prompts per `category:` tag, with the prefix stripped."""
    counts = await prompt_service.get_category_counts(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return CategoryCountsResponse(**counts)


register_catalog_routes(
    router,
    prompt_service,
    create_schema=PromptCreate,
    update_schema=PromptUpdate,
    list_schema=PromptListItem,
    response_schema=PromptResponse,
)
