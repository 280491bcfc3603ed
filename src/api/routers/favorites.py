"""Favorite endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.enums import TargetType
from models.user import User
from schemas.favorite import (
    FavoriteCheckRequest,
    FavoriteResponse,
    FavoriteToggle,
    FavoriteToggleResponse,
)
from schemas.vote import SuccessResponse
from services import favorite_service
from services.exceptions import FavoriteNotFoundError, InvalidTargetError

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("/", response_model=list[FavoriteResponse])
async def list_favorites(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[FavoriteResponse]:
    """The caller's favorites, newest first."""
    favorites = await favorite_service.list_favorites(db, current_user.id)
    return [FavoriteResponse.model_validate(f) for f in favorites]


@router.post("/", response_model=FavoriteToggleResponse)
async def toggle_favorite(
    data: FavoriteToggle,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> FavoriteToggleResponse:
    """Favorite an item, or unfavorite it if it already is."""
    try:
        favorite = await favorite_service.toggle_favorite(
            db, current_user.id, data.target_type, data.target_id,
        )
    except InvalidTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    if favorite is None:
        return FavoriteToggleResponse(favorited=False, message="Removed from favorites")
    return FavoriteToggleResponse(
        favorited=True,
        favorite=FavoriteResponse.model_validate(favorite),
        message="Added to favorites",
    )


@router.delete("/", response_model=SuccessResponse)
async def remove_favorite(
    target_type: TargetType = Query(...),
    target_id: UUID = Query(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Unfavorite an item."""
    try:
        await favorite_service.remove_favorite(db, current_user.id, target_type, target_id)
    except FavoriteNotFoundError as e:
        raise HTTPException(status_code=404, detail="Favorite not found") from e
    return SuccessResponse()


@router.post("/check", response_model=dict[UUID, bool])
async def check_favorites(
    data: FavoriteCheckRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> dict[UUID, bool]:
    """Which of the given items the caller has favorited."""
    return await favorite_service.check_favorites(
        db, current_user.id, data.target_type, data.target_ids,
    )
