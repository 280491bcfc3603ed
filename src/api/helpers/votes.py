"""Attach vote scores to catalog responses."""
from collections.abc import Sequence
from typing import TypeVar

from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from services.vote_service import get_vote_totals

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def with_vote_counts(
    db: AsyncSession,
    target_type: TargetType,
    entities: Sequence,
    schema: type[SchemaT],
) -> list[SchemaT]:
    """Validate entities into `schema` and fill `vote_count` with one aggregate query."""
    totals = await get_vote_totals(db, target_type, [e.id for e in entities])
    items = []
    for entity in entities:
        item = schema.model_validate(entity)
        item.vote_count = totals.get(entity.id, 0)
        items.append(item)
    return items
