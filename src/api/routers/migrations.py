"""Migration guide endpoints."""
from fastapi import APIRouter
from sqlalchemy.ext.asyncio import AsyncSession

from api.helpers import register_catalog_routes
from models.migration_guide import MigrationGuide
from schemas.content import (
    MigrationGuideCreate,
    MigrationGuideListItem,
    MigrationGuideResponse,
    MigrationGuideUpdate,
    RelatedContent,
)
from services.migration_guide_service import migration_guide_service
from services.related_service import related_for_migration

router = APIRouter(prefix="/migrations", tags=["migrations"])


async def _add_related(
    db: AsyncSession,
    guide: MigrationGuide,
    response: MigrationGuideResponse,
) -> None:
    related = await related_for_migration(db, guide)
    response.related = RelatedContent.model_validate(related, from_attributes=True)


register_catalog_routes(
    router,
    migration_guide_service,
    create_schema=MigrationGuideCreate,
    update_schema=MigrationGuideUpdate,
    list_schema=MigrationGuideListItem,
    response_schema=MigrationGuideResponse,
    enrich_detail=_add_related,
)
