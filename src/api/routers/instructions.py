"""Instruction endpoints, including the downloadable instruction file."""
from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session
from api.helpers import not_found, register_catalog_routes
from core.http_cache import STATS_CACHE_CONTROL, set_public_cache
from schemas.catalog import DownloadTrackRequest, InstructionStatsResponse
from schemas.content import (
    InstructionCreate,
    InstructionListItem,
    InstructionResponse,
    InstructionUpdate,
)
from schemas.vote import SuccessResponse
from services import download_service
from services.exceptions import ContentNotFoundError
from services.instruction_service import instruction_service

router = APIRouter(prefix="/instructions", tags=["instructions"])


@router.get("/stats", response_model=InstructionStatsResponse)
async def get_instruction_stats(
    response: Response,
    db: AsyncSession = Depends(get_async_session),
) -> InstructionStatsResponse:
    """Totals for the instructions catalog."""
    stats = await instruction_service.get_stats(db)
    set_public_cache(response, STATS_CACHE_CONTROL)
    return InstructionStatsResponse(**stats)


@router.post("/download", response_model=SuccessResponse)
async def track_instruction_download(
    data: DownloadTrackRequest,
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Count a download made from the client without fetching the file."""
    try:
        await instruction_service.increment_downloads(db, data.id)
    except ContentNotFoundError as e:
        raise not_found(instruction_service.entity_name) from e
    return SuccessResponse()


@router.get("/{slug}/download")
async def download_instruction(
    slug: str,
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """Download the instruction as `copilot-instructions-<slug>.md`."""
    try:
        file = await download_service.download_instruction(db, slug)
    except ContentNotFoundError as e:
        raise not_found(instruction_service.entity_name) from e
    return Response(
        content=file.content,
        media_type="text/markdown; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{file.filename}"'},
    )


register_catalog_routes(
    router,
    instruction_service,
    create_schema=InstructionCreate,
    update_schema=InstructionUpdate,
    list_schema=InstructionListItem,
    response_schema=InstructionResponse,
)
