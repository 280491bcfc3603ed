"""Tests for tag service operations."""
import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.tag import Tag
from services.tag_service import get_or_create_tags


async def test_get_or_create_tags_creates_normalized(db_session: AsyncSession) -> None:
    tags = await get_or_create_tags(db_session, ['React', ' testing ', 'react', ''])
    assert [tag.name for tag in tags] == ['react', 'testing']
    assert all(tag.id is not None for tag in tags)


async def test_get_or_create_tags_reuses_existing(db_session: AsyncSession) -> None:
    first = await get_or_create_tags(db_session, ['python'])
    second = await get_or_create_tags(db_session, ['python', 'category:web'])

    assert second[0].id == first[0].id
    count = (await db_session.execute(select(func.count()).select_from(Tag))).scalar_one()
    assert count == 2


async def test_get_or_create_tags_empty(db_session: AsyncSession) -> None:
    assert await get_or_create_tags(db_session, []) == []


async def test_get_or_create_tags_invalid_format(db_session: AsyncSession) -> None:
    with pytest.raises(ValueError, match='Invalid tag format'):
        await get_or_create_tags(db_session, ['not valid'])
