"""Workflow endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from schemas.catalog import CategoryCountsResponse
from schemas.content import WorkflowCreate, WorkflowListItem, WorkflowResponse, WorkflowUpdate
from services.workflow_service import workflow_service

router = APIRouter(prefix="/workflows", tags=["workflows"])


@router.get("/categories", response_model=CategoryCountsResponse)
async def get_workflow_categories(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryCountsResponse:
    """Approved workflows per `category:` tag, with the prefix stripped."""
    counts = await workflow_service.get_category_counts(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return CategoryCountsResponse(**counts)


register_catalog_routes(
    router,
    workflow_service,
    create_schema=WorkflowCreate,
    update_schema=WorkflowUpdate,
    list_schema=WorkflowListItem,
    response_schema=WorkflowResponse,
)
