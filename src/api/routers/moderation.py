"""Moderation endpoints (admins only)."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, require_admin
from api.helpers import build_page, not_found
from api.helpers.pagination import MAX_PAGE_SIZE
from models.enums import ContentStatus, TargetType
from models.user import User
from schemas.catalog import AuthorSummary, CatalogListItem, PaginatedResponse
from schemas.moderation import ModerationDecision, ModerationResult, PendingItem
from services.exceptions import ContentNotFoundError
from services.registry import get_catalog_service

router = APIRouter(prefix="/moderation", tags=["moderation"])


@router.get("/pending", response_model=PaginatedResponse[PendingItem])
async def list_pending(
    type: TargetType = Query(..., description="Content type to review"),  # noqa: A002
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=MAX_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> PaginatedResponse:
    """Submissions of one type waiting for review, oldest first."""
    service = get_catalog_service(type)
    entities, total = await service.search(
        db, status=ContentStatus.PENDING, sort="oldest", offset=offset, limit=limit,
    )
    items = [
        PendingItem(**CatalogListItem.model_validate(e).model_dump(), type=type)
        for e in entities
    ]
    return build_page(items, total, offset, limit)


@router.post("/{type}/{item_id}", response_model=ModerationResult)
async def moderate(
    type: TargetType,  # noqa: A002
    item_id: UUID,
    decision: ModerationDecision,
    _admin: User = Depends(require_admin),
    db: AsyncSession = Depends(get_async_session),
) -> ModerationResult:
    """Approve, reject or re-queue a submission, optionally setting `featured`."""
    service = get_catalog_service(type)
    if decision.featured and decision.status != ContentStatus.APPROVED:
        raise HTTPException(status_code=400, detail="Only approved items can be featured")
    try:
        entity = await service.set_status(db, item_id, decision.status, decision.featured)
    except ContentNotFoundError as e:
        raise not_found(service.entity_name) from e
    author = entity.__dict__.get("author")
    return ModerationResult(
        id=entity.id,
        type=type,
        slug=entity.slug,
        status=entity.status,
        featured=entity.featured,
        author=AuthorSummary.model_validate(author) if author else None,
    )
