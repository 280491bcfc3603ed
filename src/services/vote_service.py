"""Service layer for votes."""
import logging
from collections.abc import Iterable
from uuid import UUID

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.user import User
from models.vote import Vote
from services.registry import ensure_target_exists

logger = logging.getLogger(__name__)


async def get_user_vote(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> Vote | None:
    """The user's vote on a target, or None."""
    result = await db.execute(
        select(Vote).where(
            Vote.user_id == user_id,
            Vote.target_type == target_type,
            Vote.target_id == target_id,
        ),
    )
    return result.scalar_one_or_none()


async def cast_vote(
    db: AsyncSession,
    user: User,
    target_type: TargetType,
    target_id: UUID,
    value: int,
) -> tuple[Vote, bool]:
    """
    Create the user's vote on a target, or change its value.

    A user holds one vote per target, so voting again replaces the value
    rather than adding another vote.

    Returns:
        Tuple of (vote, created) where created is False when an existing vote
        was updated.

    Raises:
        InvalidTargetError: If the target is missing or not approved.
        ValueError: If value is not +1 or -1.
    """
    if value not in (1, -1):
        raise ValueError("Vote value must be 1 or -1")
    await ensure_target_exists(db, target_type, target_id)

    vote = await get_user_vote(db, user.id, target_type, target_id)
    if vote is not None:
        vote.value = value
        await db.flush()
        return vote, False

    vote = Vote(
        user_id=user.id,
        target_type=target_type,
        target_id=target_id,
        value=value,
    )
    db.add(vote)
    await db.flush()
    return vote, True


async def remove_vote(
    db: AsyncSession,
    user_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> bool:
    """Delete the user's vote on a target. Returns True if a vote was removed."""
    result = await db.execute(
        delete(Vote).where(
            Vote.user_id == user_id,
            Vote.target_type == target_type,
            Vote.target_id == target_id,
        ),
    )
    return result.rowcount > 0


async def get_vote_totals(
    db: AsyncSession,
    target_type: TargetType,
    target_ids: Iterable[UUID],
) -> dict[UUID, int]:
    """
    Sum of vote values per target, in one query.

    Targets without votes are absent from the result; callers default to 0.
    """
    ids = list(target_ids)
    if not ids:
        return {}
    result = await db.execute(
        select(Vote.target_id, func.sum(Vote.value))
        .where(Vote.target_type == target_type, Vote.target_id.in_(ids))
        .group_by(Vote.target_id),
    )
    return {target_id: int(total or 0) for target_id, total in result.all()}


async def get_vote_summary(
    db: AsyncSession,
    target_type: TargetType,
    target_id: UUID,
) -> dict:
    """Return {vote_count, upvotes, downvotes} for one target."""
    result = await db.execute(
        select(
            func.coalesce(func.sum(Vote.value), 0),
            func.coalesce(func.sum(case((Vote.value > 0, 1), else_=0)), 0),
            func.coalesce(func.sum(case((Vote.value < 0, 1), else_=0)), 0),
        ).where(Vote.target_type == target_type, Vote.target_id == target_id),
    )
    vote_count, upvotes, downvotes = result.one()
    return {
        "vote_count": int(vote_count),
        "upvotes": int(upvotes),
        "downvotes": int(downvotes),
    }
