"""Service layer for tag operations."""
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.tag import Tag
from schemas.validators import validate_and_normalize_tags


async def get_or_create_tags(
    db: AsyncSession,
    tag_names: list[str],
) -> list[Tag]:
    """
    Get existing tags or create new ones.

    Tags are global, so two submissions tagged 'react' share one row.

    Args:
        db: Database session.
        tag_names: List of tag names to get or create.

    Returns:
        List of Tag objects in the order of the (normalized) input names.
    """
    if not tag_names:
        return []

    normalized = validate_and_normalize_tags(tag_names)
    if not normalized:
        return []

    result = await db.execute(select(Tag).where(Tag.name.in_(normalized)))
    existing_tags = {tag.name: tag for tag in result.scalars()}

    tags = []
    for name in normalized:
        if name in existing_tags:
            tags.append(existing_tags[name])
        else:
            new_tag = Tag(name=name)
            db.add(new_tag)
            tags.append(new_tag)

    await db.flush()
    return tags
