"""Learning path endpoints."""
from fastapi import APIRouter
from sqlalchemy.ext.asyncio import AsyncSession

from api.helpers import register_catalog_routes
from models.learning_path import LearningPath
from schemas.content import (
    LearningPathCreate,
    LearningPathListItem,
    LearningPathResponse,
    LearningPathUpdate,
    RelatedContent,
)
from services.learning_path_service import learning_path_service
from services.related_service import related_for_path

router = APIRouter(prefix="/paths", tags=["paths"])


async def _add_related(
    db: AsyncSession,
    path: LearningPath,
    response: LearningPathResponse,
) -> None:
    related = await related_for_path(db, path)
    response.related = RelatedContent.model_validate(related, from_attributes=True)


register_catalog_routes(
    router,
    learning_path_service,
    create_schema=LearningPathCreate,
    update_schema=LearningPathUpdate,
    list_schema=LearningPathListItem,
    response_schema=LearningPathResponse,
    enrich_detail=_add_related,
)
