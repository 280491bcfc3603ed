"""Service layer for user collections."""
import logging
from collections import defaultdict
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.base import utc_now
from models.collection import Collection, CollectionItem
from models.enums import TargetType
from models.user import User
from schemas.collection import CollectionCreate, CollectionItemInput, CollectionUpdate
from services.exceptions import CollectionForbiddenError, CollectionNotFoundError
from services.registry import ensure_target_exists, get_catalog_service, summarize

logger = logging.getLogger(__name__)


async def _get(db: AsyncSession, collection_id: UUID) -> Collection | None:
    result = await db.execute(select(Collection).where(Collection.id == collection_id))
    return result.scalar_one_or_none()


async def _get_owned(db: AsyncSession, user_id: UUID, collection_id: UUID) -> Collection:
    collection = await _get(db, collection_id)
    if collection is None or collection.user_id != user_id:
        raise CollectionForbiddenError(collection_id)
    return collection


def _dedupe_items(items: list[CollectionItemInput]) -> list[CollectionItemInput]:
    seen: set[tuple[TargetType, UUID]] = set()
    unique = []
    for item in items:
        key = (item.target_type, item.target_id)
        if key not in seen:
            seen.add(key)
            unique.append(item)
    return unique


async def create_collection(
    db: AsyncSession,
    user: User,
    data: CollectionCreate,
) -> Collection:
    """Create an empty collection. The name is validated by CollectionCreate."""
    collection = Collection(
        user_id=user.id,
        user=user,
        name=data.name,
        description=data.description or "",
        is_public=data.is_public,
        items=[],
    )
    db.add(collection)
    await db.flush()
    return collection


async def list_collections(db: AsyncSession, user_id: UUID) -> list[Collection]:
    """All of the user's collections, public and private, most recently updated first."""
    result = await db.execute(
        select(Collection)
        .where(Collection.user_id == user_id)
        .order_by(Collection.updated_at.desc(), Collection.id.desc()),
    )
    return list(result.scalars().all())


async def get_collection(
    db: AsyncSession,
    collection_id: UUID,
    viewer_id: UUID | None,
) -> Collection:
    """
    Get a collection visible to the viewer (its owner, or anyone if public).

    Raises:
        CollectionNotFoundError: If missing, or private and not owned by the viewer.
    """
    collection = await _get(db, collection_id)
    if collection is None:
        raise CollectionNotFoundError(collection_id)
    if not collection.is_public and collection.user_id != viewer_id:
        raise CollectionNotFoundError(collection_id)
    return collection


async def update_collection(
    db: AsyncSession,
    user_id: UUID,
    collection_id: UUID,
    data: CollectionUpdate,
) -> Collection:
    """
    Update a collection's fields and, when `items` is given, replace its items.

    Duplicate items in the replacement list are dropped.

    Raises:
        CollectionForbiddenError: If missing or not owned by the user.
    """
    collection = await _get_owned(db, user_id, collection_id)

    if data.name is not None:
        collection.name = data.name
    if data.description is not None:
        collection.description = data.description
    if data.is_public is not None:
        collection.is_public = data.is_public

    if data.items is not None:
        # Flush the removals first so re-added targets don't collide with the
        # unique constraint on (collection, target)
        collection.items.clear()
        await db.flush()
        for item in _dedupe_items(data.items):
            collection.items.append(
                CollectionItem(target_type=item.target_type, target_id=item.target_id),
            )

    collection.updated_at = utc_now()
    await db.flush()
    return collection


async def delete_collection(db: AsyncSession, user_id: UUID, collection_id: UUID) -> None:
    """
    Delete a collection and its items.

    Raises:
        CollectionForbiddenError: If missing or not owned by the user.
    """
    collection = await _get_owned(db, user_id, collection_id)
    await db.delete(collection)
    await db.flush()


async def add_item(
    db: AsyncSession,
    user_id: UUID,
    collection_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> Collection:
    """
    Add one item to a collection; adding an existing item is a no-op.

    Raises:
        CollectionForbiddenError: If missing or not owned by the user.
        InvalidTargetError: If the target is missing or not approved.
    """
    collection = await _get_owned(db, user_id, collection_id)
    if any(
        item.target_type == target_type and item.target_id == target_id
        for item in collection.items
    ):
        return collection

    await ensure_target_exists(db, target_type, target_id)
    collection.items.append(CollectionItem(target_type=target_type, target_id=target_id))
    collection.updated_at = utc_now()
    await db.flush()
    return collection


async def remove_item(
    db: AsyncSession,
    user_id: UUID,
    collection_id: UUID,
    target_type: TargetType,
    target_id: UUID,
) -> bool:
    """
    Remove one item from a collection.

    Returns:
        True if the item was in the collection.

    Raises:
        CollectionForbiddenError: If missing or not owned by the user.
    """
    collection = await _get_owned(db, user_id, collection_id)
    for item in list(collection.items):
        if item.target_type == target_type and item.target_id == target_id:
            collection.items.remove(item)
            collection.updated_at = utc_now()
            await db.flush()
            return True
    return False


async def resolve_items(
    db: AsyncSession,
    collection: Collection,
) -> dict[tuple[TargetType, UUID], dict]:
    """
    Summaries of the approved content referenced by a collection's items.

    Keyed by (target_type, target_id); items whose content is missing or not
    approved are absent. One query per referenced type.
    """
    ids_by_type: dict[TargetType, list[UUID]] = defaultdict(list)
    for item in collection.items:
        ids_by_type[item.target_type].append(item.target_id)

    resolved: dict[tuple[TargetType, UUID], dict] = {}
    for target_type, ids in ids_by_type.items():
        entities = await get_catalog_service(target_type).get_many_by_ids(db, ids)
        for entity_id, entity in entities.items():
            resolved[(target_type, entity_id)] = summarize(target_type, entity)
    return resolved
