"""
Standard catalog endpoints shared by every content type.

Each type's router module declares its own extra routes (stats, downloads)
first and then calls `register_catalog_routes`, so fixed paths such as
`/stats` are matched before `/{slug}`.
"""
from collections.abc import Awaitable, Callable
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from api.helpers.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, build_page
from api.helpers.votes import with_vote_counts
from core.http_cache import set_public_cache
from models.enums import Difficulty
from models.user import User
from schemas.catalog import PaginatedResponse
from services.catalog_service import CatalogService, SortOption
from services.exceptions import ContentNotFoundError, PermissionDeniedError, SlugConflictError

# Adds type-specific data (related content, resolved references) to a detail
# response after it has been built
DetailEnricher = Callable[[AsyncSession, object, BaseModel], Awaitable[None]]


def not_found(entity_name: str) -> HTTPException:
    """404 in the shape every catalog endpoint uses."""
    return HTTPException(status_code=404, detail=f"{entity_name} not found")


def register_catalog_routes(  # noqa: PLR0915
    router: APIRouter,
    service: CatalogService,
    create_schema: type[BaseModel],
    update_schema: type[BaseModel],
    list_schema: type[BaseModel],
    response_schema: type[BaseModel],
    enrich_detail: DetailEnricher | None = None,
) -> APIRouter:
    """Add list, submit, detail, update and delete endpoints for one type."""
    entity_name = service.entity_name
    target_type = service.target_type

    async def to_response(db: AsyncSession, entity: object) -> BaseModel:
        (response,) = await with_vote_counts(db, target_type, [entity], response_schema)
        if enrich_detail is not None:
            await enrich_detail(db, entity, response)
        return response

    @router.get("/", response_model=PaginatedResponse[list_schema])
    async def list_items(
        response: Response,
        q: str | None = Query(default=None, description="Case-insensitive text search"),
        category: str | None = Query(default=None, description="Category ('all' for no filter)"),
        tags: list[str] = Query(default=[], description="Filter by tags"),
        tag_match: Literal["all", "any"] = Query(
            default="all", description="Require all tags or any of them",
        ),
        difficulty: Difficulty | None = Query(default=None),
        featured: bool | None = Query(default=None),
        sort: SortOption = Query(default="featured"),
        offset: int = Query(default=0, ge=0, description="Pagination offset"),
        limit: int = Query(
            default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Pagination limit",
        ),
        db: AsyncSession = Depends(get_async_session),
    ) -> PaginatedResponse:
        """List approved items with filtering, sorting and pagination."""
        try:
            entities, total = await service.search(
                db,
                query=q,
                category=category,
                tags=tags or None,
                tag_match=tag_match,
                difficulty=difficulty,
                featured=featured,
                sort=sort,
                offset=offset,
                limit=limit,
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        items = await with_vote_counts(db, target_type, entities, list_schema)
        set_public_cache(response)
        return build_page(items, total, offset, limit)

    @router.post("/", response_model=response_schema, status_code=201)
    async def submit_item(
        data: create_schema,  # type: ignore[valid-type]
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_async_session),
    ) -> BaseModel:
        """Submit a new item. It stays PENDING until a moderator approves it."""
        try:
            entity = await service.create(db, current_user, data)
        except SlugConflictError as e:
            raise HTTPException(
                status_code=409,
                detail=f"An item with slug '{e.slug}' already exists, please retry",
            ) from e
        return await to_response(db, entity)

    @router.get("/{slug}", response_model=response_schema)
    async def get_item(
        slug: str,
        db: AsyncSession = Depends(get_async_session),
    ) -> BaseModel:
        """Get an approved item by slug."""
        entity = await service.get_by_slug(db, slug)
        if entity is None:
            raise not_found(entity_name)
        await service.increment_views(db, entity.id)
        return await to_response(db, entity)

    @router.patch("/{slug}", response_model=response_schema)
    async def update_item(
        slug: str,
        data: update_schema,  # type: ignore[valid-type]
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_async_session),
    ) -> BaseModel:
        """Update an item as its author or an admin. Author edits go back to review."""
        try:
            entity = await service.update(db, current_user, slug, data)
        except ContentNotFoundError as e:
            raise not_found(entity_name) from e
        except PermissionDeniedError as e:
            raise HTTPException(status_code=403, detail=str(e)) from e
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        return await to_response(db, entity)

    @router.delete("/{slug}", status_code=204)
    async def delete_item(
        slug: str,
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_async_session),
    ) -> None:
        """Delete an item as its author or an admin."""
        try:
            await service.delete(db, current_user, slug)
        except ContentNotFoundError as e:
            raise not_found(entity_name) from e
        except PermissionDeniedError as e:
            raise HTTPException(status_code=403, detail=str(e)) from e

    return router
