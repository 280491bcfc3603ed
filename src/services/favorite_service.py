"""Service layer for favorites."""
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.favorite import Favorite
from services.exceptions import FavoriteNotFoundError
from services.registry import ensure_target_exists


async def _get_favorite(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> Favorite | None:
    result = await db.execute(
        select(Favorite).where(
            Favorite.user_id == user_id,
            Favorite.target_type == target_type,
            Favorite.target_id == target_id,
        ),
    )
    return result.scalar_one_or_none()


async def list_favorites(db: AsyncSession, user_id: UUID) -> list[Favorite]:
    """The user's favorites, newest first."""
    result = await db.execute(
        select(Favorite)
        .where(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc()),
    )
    return list(result.scalars().all())


async def toggle_favorite(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> Favorite | None:
    """
    Add the favorite if absent, remove it if present.

    Returns:
        The new Favorite when one was added, None when it was removed.

    Raises:
        InvalidTargetError: If adding a favorite for missing or unapproved content.
    """
    existing = await _get_favorite(db, user_id, target_type, target_id)
    if existing is not None:
        await db.delete(existing)
        await db.flush()
        return None

    await ensure_target_exists(db, target_type, target_id)
    favorite = Favorite(user_id=user_id, target_type=target_type, target_id=target_id)
    db.add(favorite)
    await db.flush()
    return favorite


async def remove_favorite(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> None:
    """
    Remove a favorite.

    Raises:
        FavoriteNotFoundError: If the user has not favorited the target.
    """
    existing = await _get_favorite(db, user_id, target_type, target_id)
    if existing is None:
        raise FavoriteNotFoundError(target_type.value, target_id)
    await db.delete(existing)
    await db.flush()


async def check_favorites(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_ids: list[UUID],
) -> dict[UUID, bool]:
    """Map every requested id to whether the user has favorited it."""
    if not target_ids:
        return {}
    result = await db.execute(
        select(Favorite.target_id).where(
            Favorite.user_id == user_id,
            Favorite.target_type == target_type,
            Favorite.target_id.in_(target_ids),
        ),
    )
    favorited = set(result.scalars().all())
    return {target_id: target_id in favorited for target_id in target_ids}
