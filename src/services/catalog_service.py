"""
Base service class for catalog content operations.

Provides shared logic for every catalog type (prompts, workflows, tools, MCP
servers, instructions, agents, recipes, migration guides, learning paths).
Type-specific behavior is defined via abstract methods and class attributes.
"""
import logging
from abc import ABC, abstractmethod
from collections import Counter
from collections.abc import Iterable
from datetime import datetime
from typing import Generic, Literal, Protocol, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import ColumnElement, Table, and_, exists, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql import Select

from models.enums import ContentStatus, Difficulty, TargetType
from models.tag import Tag
from models.user import User
from models.vote import Vote
from schemas.validators import CATEGORY_TAG_PREFIX, validate_and_normalize_tags
from services.exceptions import ContentNotFoundError, PermissionDeniedError, SlugConflictError
from services.tag_service import get_or_create_tags
from services.utils import escape_ilike, slug_with_suffix, slugify

logger = logging.getLogger(__name__)

SortOption = Literal["featured", "newest", "oldest", "title", "popular", "downloads"]

# Attempts at a random suffix before giving up on a unique slug
MAX_SLUG_ATTEMPTS = 10


class CatalogEntity(Protocol):
    """Protocol defining the interface shared by catalog models."""

    id: UUID
    title: str
    slug: str
    description: str | None
    content: str | None
    difficulty: Difficulty
    status: ContentStatus
    featured: bool
    author_id: UUID | None
    created_at: datetime
    updated_at: datetime
    tag_objects: list


T = TypeVar("T", bound=CatalogEntity)


class CatalogService(ABC, Generic[T]):
    """
    Abstract base class for catalog operations.

    Subclasses must define:
    - model: The SQLAlchemy model class
    - junction_table: The tag junction table (e.g., prompt_tags)
    - entity_name: Human-readable name for error messages (e.g., "Prompt")
    - target_type: The TargetType used by votes, favorites and collections

    Subclasses must implement:
    - _build_text_search_filter(): Type-specific search fields

    Subclasses may override:
    - _build_category_filter(): how `?category=` narrows the list
    """

    model: type[T]
    junction_table: Table
    entity_name: str
    target_type: TargetType

    # --- Helper Methods ---

    def _get_junction_entity_id_column(self) -> InstrumentedAttribute:
        """Get the entity ID column from the junction table (e.g., prompt_id)."""
        junction_columns = [c.name for c in self.junction_table.columns if c.name != "tag_id"]
        return self.junction_table.c[junction_columns[0]]

    def _approved_query(self) -> Select[tuple[T]]:
        return select(self.model).where(self.model.status == ContentStatus.APPROVED)

    @property
    def tracks_downloads(self) -> bool:
        """Whether the model carries download/view counters."""
        return hasattr(self.model, "downloads")

    def _vote_score(self) -> ColumnElement[int]:
        """Correlated subquery summing the votes cast on each row."""
        return (
            select(func.coalesce(func.sum(Vote.value), 0))
            .where(
                Vote.target_type == self.target_type,
                Vote.target_id == self.model.id,
            )
            .correlate(self.model)
            .scalar_subquery()
        )

    # --- Abstract / overridable Methods (type-specific) ---

    @abstractmethod
    def _build_text_search_filter(self, pattern: str) -> list:
        """
        Build text search filter for type-specific fields.

        Args:
            pattern: The ILIKE pattern (already escaped and wrapped with %).

        Returns:
            List of SQLAlchemy conditions (typically a single or_()).
        """
        ...

    def _build_category_filter(self, category: str) -> ColumnElement[bool] | None:
        """
        Build the `?category=` filter. Types without categories ignore it.

        Args:
            category: Category name, already stripped; never 'all'.
        """
        return None

    def _ilike(self, column: InstrumentedAttribute, pattern: str) -> ColumnElement[bool]:
        return column.ilike(pattern, escape="\\")

    def _category_tag_filter(self, *tag_names: str) -> ColumnElement[bool]:
        """EXISTS filter matching any of the given tag names."""
        junction_entity_id_col = self._get_junction_entity_id_column()
        subq = (
            select(junction_entity_id_col)
            .join(Tag, self.junction_table.c.tag_id == Tag.id)
            .where(
                junction_entity_id_col == self.model.id,
                Tag.name.in_(tag_names),
            )
        )
        return exists(subq)

    # --- Read Operations ---

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str,
        include_unapproved: bool = False,
    ) -> T | None:
        """
        Get an item by slug.

        Args:
            db: Database session.
            slug: The item's slug.
            include_unapproved: If True, pending and rejected items are returned too
                (for authors and moderators). Default False.

        Returns:
            The item if found and visible, None otherwise.
        """
        query = select(self.model).where(self.model.slug == slug)
        if not include_unapproved:
            query = query.where(self.model.status == ContentStatus.APPROVED)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_by_id(
        self,
        db: AsyncSession,
        entity_id: UUID,
        include_unapproved: bool = False,
    ) -> T | None:
        """Get an item by id; approved only unless include_unapproved."""
        query = select(self.model).where(self.model.id == entity_id)
        if not include_unapproved:
            query = query.where(self.model.status == ContentStatus.APPROVED)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def get_many_by_ids(self, db: AsyncSession, ids: Iterable[UUID]) -> dict[UUID, T]:
        """Approved items for the given ids, keyed by id. Missing ids are absent."""
        id_list = list(ids)
        if not id_list:
            return {}
        result = await db.execute(self._approved_query().where(self.model.id.in_(id_list)))
        return {entity.id: entity for entity in result.scalars()}

    async def get_many_by_slugs(self, db: AsyncSession, slugs: list[str]) -> list[T]:
        """
        Approved items for the given slugs, in the order the slugs were given.

        Unknown or unapproved slugs are dropped silently.
        """
        if not slugs:
            return []
        result = await db.execute(self._approved_query().where(self.model.slug.in_(slugs)))
        by_slug = {entity.slug: entity for entity in result.scalars()}
        return [by_slug[slug] for slug in dict.fromkeys(slugs) if slug in by_slug]

    async def search(
        self,
        db: AsyncSession,
        query: str | None = None,
        category: str | None = None,
        tags: list[str] | None = None,
        tag_match: Literal["all", "any"] = "all",
        difficulty: Difficulty | None = None,
        featured: bool | None = None,
        sort: SortOption = "featured",
        offset: int = 0,
        limit: int = 20,
        status: ContentStatus | None = ContentStatus.APPROVED,
    ) -> tuple[list[T], int]:
        """
        Search and filter items with pagination.

        Args:
            db: Database session.
            query: Text search (uses type-specific _build_text_search_filter).
            category: Category filter ('all' or empty means no filter).
            tags: Filter by tags (normalized to lowercase).
            tag_match: "all" (AND) or "any" (OR) for tag matching.
            difficulty: Only items at this difficulty.
            featured: If set, only featured (True) or non-featured (False) items.
            sort: Ordering; see _apply_sorting.
            offset: Pagination offset.
            limit: Pagination limit.
            status: Moderation status to list; None lists every status.

        Returns:
            Tuple of (list of items, total count).

        Raises:
            ValueError: If a tag in `tags` has an invalid format.
        """
        base_query = select(self.model)
        if status is not None:
            base_query = base_query.where(self.model.status == status)

        if query and query.strip():
            search_pattern = f"%{escape_ilike(query.strip())}%"
            for text_filter in self._build_text_search_filter(search_pattern):
                base_query = base_query.where(text_filter)

        if category and category.strip() and category.strip().lower() != "all":
            category_filter = self._build_category_filter(category.strip())
            if category_filter is not None:
                base_query = base_query.where(category_filter)

        if tags:
            base_query = self._apply_tag_filter(base_query, tags, tag_match)

        if difficulty is not None:
            base_query = base_query.where(self.model.difficulty == difficulty)

        if featured is not None:
            base_query = base_query.where(self.model.featured == featured)

        count_query = select(func.count()).select_from(base_query.subquery())
        total_result = await db.execute(count_query)
        total = total_result.scalar() or 0

        base_query = self._apply_sorting(base_query, sort)
        base_query = base_query.offset(offset).limit(limit)

        result = await db.execute(base_query)
        entities = list(result.scalars().all())

        return entities, total

    async def quick_search(
        self,
        db: AsyncSession,
        query: str,
        difficulty: Difficulty | None = None,
        tags: list[str] | None = None,
        limit: int = 20,
        featured_first: bool = False,
    ) -> list[T]:
        """
        Approved items matching a site-wide search query.

        An item matches when the text search matches or when it carries a tag
        equal to the lowercased query. A blank query matches every approved
        item. `tags` match when the item carries any of them. Newest first, or
        featured first when `featured_first` is set.
        """
        stmt = self._approved_query()
        stripped = query.strip()
        if stripped:
            pattern = f"%{escape_ilike(stripped)}%"
            stmt = stmt.where(or_(
                and_(*self._build_text_search_filter(pattern)),
                self._category_tag_filter(stripped.lower()),
            ))
        if difficulty is not None:
            stmt = stmt.where(self.model.difficulty == difficulty)
        if tags:
            stmt = self._apply_tag_filter(stmt, tags, "any")
        if featured_first:
            stmt = stmt.order_by(self.model.featured.desc())
        stmt = stmt.order_by(self.model.created_at.desc(), self.model.id.desc()).limit(limit)
        result = await db.execute(stmt)
        return list(result.scalars().all())

    def _apply_tag_filter(
        self,
        query: Select[tuple[T]],
        tags: list[str],
        tag_match: Literal["all", "any"],
    ) -> Select[tuple[T]]:
        """Apply tag filter to query."""
        normalized_tags = validate_and_normalize_tags(tags)
        if not normalized_tags:
            return query

        junction_entity_id_col = self._get_junction_entity_id_column()

        if tag_match == "all":
            for tag_name in normalized_tags:
                subq = (
                    select(junction_entity_id_col)
                    .join(Tag, self.junction_table.c.tag_id == Tag.id)
                    .where(
                        junction_entity_id_col == self.model.id,
                        Tag.name == tag_name,
                    )
                )
                query = query.where(exists(subq))
        else:
            query = query.where(self._category_tag_filter(*normalized_tags))

        return query

    def _apply_sorting(self, query: Select[tuple[T]], sort: SortOption) -> Select[tuple[T]]:
        """
        Apply ordering with an id tiebreaker so pages never overlap.

        - featured: featured items first, then newest (default)
        - newest / oldest: by created_at
        - title: case-insensitive A-Z
        - popular: highest vote score first
        - downloads: most downloaded first (types without counters fall back to featured)
        """
        model = self.model
        if sort == "newest":
            return query.order_by(model.created_at.desc(), model.id.desc())
        if sort == "oldest":
            return query.order_by(model.created_at.asc(), model.id.asc())
        if sort == "title":
            return query.order_by(func.lower(model.title).asc(), model.id.asc())
        if sort == "popular":
            return query.order_by(
                self._vote_score().desc(), model.created_at.desc(), model.id.desc(),
            )
        if sort == "downloads" and self.tracks_downloads:
            return query.order_by(
                model.downloads.desc(), model.created_at.desc(), model.id.desc(),
            )
        return query.order_by(
            model.featured.desc(), model.created_at.desc(), model.id.desc(),
        )

    # --- Write Operations ---

    async def generate_unique_slug(self, db: AsyncSession, title: str) -> str:
        """
        Slugify the title, appending a random 4-character suffix if it is taken.

        Raises:
            SlugConflictError: If no free slug was found after several attempts.
        """
        base_slug = slugify(title)
        candidate = base_slug or slug_with_suffix(base_slug)
        for _ in range(MAX_SLUG_ATTEMPTS):
            taken = await db.scalar(
                select(exists().where(self.model.slug == candidate)),
            )
            if not taken:
                return candidate
            candidate = slug_with_suffix(base_slug)
        raise SlugConflictError(base_slug)

    async def create(self, db: AsyncSession, author: User, data: BaseModel) -> T:
        """
        Create a user submission.

        Submissions always start PENDING and unfeatured; a moderator approves
        them before they appear in public lists.

        Raises:
            SlugConflictError: If a concurrent submission claimed the same slug.
        """
        fields = data.model_dump(exclude={"tags"})
        slug = await self.generate_unique_slug(db, data.title)
        entity = self.model(
            **fields,
            slug=slug,
            status=ContentStatus.PENDING,
            featured=False,
            author_id=author.id,
        )
        entity.author = author
        entity.tag_objects = await get_or_create_tags(db, data.tags)
        db.add(entity)
        try:
            await db.flush()
        except IntegrityError as e:
            await db.rollback()
            raise SlugConflictError(slug) from e

        logger.info(
            "content_submitted",
            extra={"type": self.target_type.value, "slug": slug, "author_id": str(author.id)},
        )
        return entity

    def _check_can_modify(self, user: User, entity: T) -> None:
        if user.is_admin:
            return
        if entity.author_id is None or entity.author_id != user.id:
            raise PermissionDeniedError(
                f"Only the author or an admin can modify this {self.entity_name.lower()}",
            )

    async def update(
        self,
        db: AsyncSession,
        user: User,
        slug: str,
        data: BaseModel,
    ) -> T:
        """
        Update an item as its author or an admin.

        Only fields present in the request are changed. The slug is kept stable
        so existing links keep working. Edits by non-admins send the item back
        to PENDING for review.

        Raises:
            ContentNotFoundError: If no item has this slug.
            PermissionDeniedError: If the user is neither the author nor an admin.
            ValueError: If a required field is set to null.
        """
        entity = await self.get_by_slug(db, slug, include_unapproved=True)
        if entity is None:
            raise ContentNotFoundError(self.entity_name, slug)
        self._check_can_modify(user, entity)

        update_data = data.model_dump(exclude_unset=True, exclude={"tags"})
        columns = self.model.__table__.columns
        for field, value in update_data.items():
            if value is None and field in columns and not columns[field].nullable:
                raise ValueError(f"{field} cannot be null")
            setattr(entity, field, value)

        if "tags" in data.model_fields_set and data.tags is not None:
            entity.tag_objects = await get_or_create_tags(db, data.tags)

        if not user.is_admin:
            entity.status = ContentStatus.PENDING

        await db.flush()
        return entity

    async def delete(self, db: AsyncSession, user: User, slug: str) -> None:
        """
        Permanently delete an item as its author or an admin.

        Raises:
            ContentNotFoundError: If no item has this slug.
            PermissionDeniedError: If the user is neither the author nor an admin.
        """
        entity = await self.get_by_slug(db, slug, include_unapproved=True)
        if entity is None:
            raise ContentNotFoundError(self.entity_name, slug)
        self._check_can_modify(user, entity)
        await db.delete(entity)
        await db.flush()

    async def set_status(
        self,
        db: AsyncSession,
        entity_id: UUID,
        status: ContentStatus,
        featured: bool | None = None,
    ) -> T:
        """
        Moderation: set the status (and optionally the featured flag) of an item.

        Raises:
            ContentNotFoundError: If no item has this id.
        """
        entity = await self.get_by_id(db, entity_id, include_unapproved=True)
        if entity is None:
            raise ContentNotFoundError(self.entity_name, entity_id)
        entity.status = status
        if featured is not None:
            entity.featured = featured
        await db.flush()
        logger.info(
            "content_moderated",
            extra={"type": self.target_type.value, "id": str(entity_id), "status": status.value},
        )
        return entity

    async def _increment(self, db: AsyncSession, entity_id: UUID, column: str) -> bool:
        """Atomically add one to a counter column. Returns False if no approved row matched."""
        counter = getattr(self.model, column)
        result = await db.execute(
            update(self.model)
            .where(
                self.model.id == entity_id,
                self.model.status == ContentStatus.APPROVED,
            )
            .values({column: counter + 1, "updated_at": self.model.updated_at}),
        )
        return result.rowcount > 0

    async def increment_views(self, db: AsyncSession, entity_id: UUID) -> bool:
        """Count a detail-page view; no-op for types without counters."""
        if not self.tracks_downloads:
            return False
        return await self._increment(db, entity_id, "views")

    async def increment_downloads(self, db: AsyncSession, entity_id: UUID) -> bool:
        """
        Count a download.

        Raises:
            ContentNotFoundError: If the type has no counter or the item is not approved.
        """
        if not self.tracks_downloads or not await self._increment(db, entity_id, "downloads"):
            raise ContentNotFoundError(self.entity_name, entity_id)
        return True

    # --- Statistics ---

    async def _approved_values(self, db: AsyncSession, *columns: InstrumentedAttribute) -> list:
        result = await db.execute(
            select(*columns).where(self.model.status == ContentStatus.APPROVED),
        )
        return list(result.all())

    async def count_approved(self, db: AsyncSession) -> int:
        """Number of publicly visible items."""
        result = await db.execute(
            select(func.count())
            .select_from(self.model)
            .where(self.model.status == ContentStatus.APPROVED),
        )
        return result.scalar() or 0

    async def category_stats(
        self,
        db: AsyncSession,
        column: InstrumentedAttribute,
        default: str,
        lowercase: bool,
    ) -> dict:
        """
        Count approved items per value of a category column.

        Null or blank values count as `default`. Returns
        {total, categories (sorted), counts}.
        """
        rows = await self._approved_values(db, column)
        counts: Counter[str] = Counter()
        for (value,) in rows:
            category = (value or "").strip() or default
            if lowercase:
                category = category.lower()
            counts[category] += 1
        return {
            "total": len(rows),
            "categories": sorted(counts),
            "counts": dict(counts),
        }

    async def tag_counts(self, db: AsyncSession, prefix: str | None = None) -> dict:
        """
        Count approved items per tag.

        With a prefix (e.g. 'category:'), only matching tags are counted and the
        prefix is stripped from the keys. Returns {counts, total}.
        """
        junction_entity_id_col = self._get_junction_entity_id_column()
        tag_query = (
            select(Tag.name, func.count(junction_entity_id_col))
            .select_from(self.junction_table)
            .join(Tag, self.junction_table.c.tag_id == Tag.id)
            .join(self.model, self.model.id == junction_entity_id_col)
            .where(self.model.status == ContentStatus.APPROVED)
            .group_by(Tag.name)
        )
        if prefix:
            tag_query = tag_query.where(Tag.name.startswith(prefix, autoescape=True))
        result = await db.execute(tag_query)

        counts: dict[str, int] = {}
        for name, count in result.all():
            key = name.lower()
            if prefix:
                key = key[len(prefix):]
            counts[key] = counts.get(key, 0) + count
        return {"counts": counts, "total": await self.count_approved(db)}


def category_tag(category: str) -> str:
    """Tag name that carries a category for tag-categorized types."""
    return f"{CATEGORY_TAG_PREFIX}{category.strip().lower()}"
