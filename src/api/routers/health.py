"""Health check endpoint."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db.session import get_async_session
from schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse, responses={503: {"model": HealthResponse}})
async def health_check(
    db: AsyncSession = Depends(get_async_session),
) -> HealthResponse | JSONResponse:
    """Report whether the API can reach its database."""
    try:
        await db.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError):
        logger.exception("Database health check failed")
        unhealthy = HealthResponse(status="unhealthy", database="disconnected")
        return JSONResponse(status_code=503, content=unhealthy.model_dump())
    return HealthResponse(status="healthy", database="connected")
