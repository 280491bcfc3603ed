"""Collection endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user, get_current_user_optional
from models.collection import Collection
from models.enums import TargetType
from models.user import User
from schemas.catalog import AuthorSummary
from schemas.collection import (
    CollectionCreate,
    CollectionItemInput,
    CollectionItemResponse,
    CollectionResponse,
    CollectionUpdate,
    ContentSummary,
)
from schemas.vote import SuccessResponse
from services import collection_service
from services.exceptions import (
    CollectionForbiddenError,
    CollectionNotFoundError,
    InvalidTargetError,
)

router = APIRouter(prefix="/collections", tags=["collections"])

FORBIDDEN_DETAIL = "Collection not found or you are not its owner"


async def _to_response(db: AsyncSession, collection: Collection) -> CollectionResponse:
    """Build the response with each item resolved to its approved content (or null)."""
    resolved = await collection_service.resolve_items(db, collection)
    items = []
    for item in collection.items:
        summary = resolved.get((item.target_type, item.target_id))
        items.append(CollectionItemResponse(
            id=item.id,
            target_type=item.target_type,
            target_id=item.target_id,
            created_at=item.created_at,
            content=ContentSummary(**summary) if summary else None,
        ))
    return CollectionResponse(
        id=collection.id,
        name=collection.name,
        description=collection.description,
        is_public=collection.is_public,
        user_id=collection.user_id,
        owner=AuthorSummary.model_validate(collection.user) if collection.user else None,
        items=items,
        created_at=collection.created_at,
        updated_at=collection.updated_at,
    )


@router.get("/", response_model=list[CollectionResponse])
async def list_collections(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[CollectionResponse]:
    """The caller's collections, most recently updated first."""
    collections = await collection_service.list_collections(db, current_user.id)
    return [await _to_response(db, c) for c in collections]


@router.post("/", response_model=CollectionResponse, status_code=201)
async def create_collection(
    data: CollectionCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CollectionResponse:
    """Create an empty collection."""
    collection = await collection_service.create_collection(db, current_user, data)
    return await _to_response(db, collection)


@router.get("/{collection_id}", response_model=CollectionResponse)
async def get_collection(
    collection_id: UUID,
    current_user: User | None = Depends(get_current_user_optional),
    db: AsyncSession = Depends(get_async_session),
) -> CollectionResponse:
    """A public collection, or one of the caller's own."""
    viewer_id = current_user.id if current_user else None
    try:
        collection = await collection_service.get_collection(db, collection_id, viewer_id)
    except CollectionNotFoundError as e:
        raise HTTPException(status_code=404, detail="Collection not found") from e
    return await _to_response(db, collection)


@router.put("/{collection_id}", response_model=CollectionResponse)
async def update_collection(
    collection_id: UUID,
    data: CollectionUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CollectionResponse:
    """Update a collection; `items`, when given, replaces its contents."""
    try:
        collection = await collection_service.update_collection(
            db, current_user.id, collection_id, data,
        )
    except CollectionForbiddenError as e:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL) from e
    return await _to_response(db, collection)


@router.delete("/{collection_id}", response_model=SuccessResponse)
async def delete_collection(
    collection_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Delete a collection and its items."""
    try:
        await collection_service.delete_collection(db, current_user.id, collection_id)
    except CollectionForbiddenError as e:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL) from e
    return SuccessResponse()


@router.post("/{collection_id}/items", response_model=CollectionResponse)
async def add_collection_item(
    collection_id: UUID,
    data: CollectionItemInput,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CollectionResponse:
    """Add one item to a collection (no-op if it is already there)."""
    try:
        collection = await collection_service.add_item(
            db, current_user.id, collection_id, data.target_type, data.target_id,
        )
    except CollectionForbiddenError as e:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL) from e
    except InvalidTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    return await _to_response(db, collection)


@router.delete("/{collection_id}/items", response_model=SuccessResponse)
async def remove_collection_item(
    collection_id: UUID,
    target_type: TargetType = Query(...),
    target_id: UUID = Query(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Remove one item from a collection."""
    try:
        removed = await collection_service.remove_item(
            db, current_user.id, collection_id, target_type, target_id,
        )
    except CollectionForbiddenError as e:
        raise HTTPException(status_code=403, detail=FORBIDDEN_DETAIL) from e
    if not removed:
        raise HTTPException(status_code=404, detail="Item not in collection")
    return SuccessResponse()
