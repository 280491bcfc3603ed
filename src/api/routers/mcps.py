"""MCP server endpoints."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from schemas.catalog import CategoryStatsResponse
from schemas.content import (
    McpServerCreate,
    McpServerListItem,
    McpServerResponse,
    McpServerUpdate,
)
from services.mcp_server_service import mcp_server_service

router = APIRouter(prefix="/mcps", tags=["mcps"])


@router.get("/stats", response_model=CategoryStatsResponse)
async def get_mcp_stats(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryStatsResponse:
    """Approved MCP servers per (lowercased) category."""
    stats = await mcp_server_service.get_stats(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return CategoryStatsResponse(**stats)


register_catalog_routes(
    router,
    mcp_server_service,
    create_schema=McpServerCreate,
    update_schema=McpServerUpdate,
    list_schema=McpServerListItem,
    response_schema=McpServerResponse,
)
