"""Agent endpoints, including the downloadable `.agent.md` file."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import not_found, register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from models.agent import Agent
from schemas.catalog import CategoryStatsResponse, DownloadTrackRequest, ItemSummary
from schemas.content import AgentCreate, AgentListItem, AgentResponse, AgentUpdate
from schemas.vote import SuccessResponse
from services import download_service
from services.agent_service import agent_service
from services.exceptions import ContentNotFoundError

router = APIRouter(prefix="/agents", tags=["agents"])


@router.get("/stats", response_model=CategoryStatsResponse)
async def get_agent_stats(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> CategoryStatsResponse:
    """Approved agents per category; uncategorized agents count as 'Other'."""
    stats = await agent_service.get_stats(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return CategoryStatsResponse(**stats)


@router.post("/download", response_model=SuccessResponse)
async def track_agent_download(
    data: DownloadTrackRequest,
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Count a download made from the client without fetching the file."""
    try:
        await agent_service.increment_downloads(db, data.id)
    except ContentNotFoundError as e:
        raise not_found(agent_service.entity_name) from e
    return SuccessResponse()


@router.get("/{slug}/download")
async def download_agent(
    slug: str,
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """Download the agent as `<slug>.agent.md`."""
    try:
        file = await download_service.download_agent(db, slug)
    except ContentNotFoundError as e:
        raise not_found(agent_service.entity_name) from e
    return Response(
        content=file.content,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{file.filename}"'},
    )


async def _add_mcp_server_details(
    db: AsyncSession,
    agent: Agent,
    response: AgentResponse,
) -> None:
    servers = await agent_service.resolve_mcp_servers(db, agent)
    response.mcp_server_details = [ItemSummary.model_validate(s) for s in servers]


register_catalog_routes(
    router,
    agent_service,
    create_schema=AgentCreate,
    update_schema=AgentUpdate,
    list_schema=AgentListItem,
    response_schema=AgentResponse,
    enrich_detail=_add_mcp_server_details,
)
