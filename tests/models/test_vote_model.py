"""Tests for vote table constraints."""
import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.user import User
from models.vote import Vote


async def test_one_vote_per_user_and_target(db_session: AsyncSession, test_user: User) -> None:
    from uuid import uuid4

    target_id = uuid4()
    db_session.add(Vote(user_id=test_user.id, target_type=TargetType.TOOL, target_id=target_id, value=1))
    await db_session.flush()

    db_session.add(Vote(user_id=test_user.id, target_type=TargetType.TOOL, target_id=target_id, value=-1))
    with pytest.raises(IntegrityError):
        await db_session.flush()


async def test_vote_value_must_be_plus_or_minus_one(
    db_session: AsyncSession, test_user: User,
) -> None:
    from uuid import uuid4

    db_session.add(Vote(user_id=test_user.id, target_type=TargetType.TOOL, target_id=uuid4(), value=5))
    with pytest.raises(IntegrityError):
        await db_session.flush()
