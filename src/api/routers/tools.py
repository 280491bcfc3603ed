"""Tool endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from schemas.catalog import CategoryCountsResponse
from schemas.content import ToolCreate, ToolListItem, ToolResponse, ToolUpdate
from services.tool_service import tool_service

router = APIRouter(prefix="/tools", tags=["tools"])


@router.get("/categories", response_model=CategoryCountsResponse)
async def get_tool_categories(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryCountsResponse:
    """Approved tools per tag (tools use plain tags as categories)."""
    counts = await tool_service.get_category_counts(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return CategoryCountsResponse(**counts)


register_catalog_routes(
    router,
    tool_service,
    create_schema=ToolCreate,
    update_schema=ToolUpdate,
    list_schema=ToolListItem,
    response_schema=ToolResponse,
)
