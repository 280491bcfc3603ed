"""Offset pagination for list endpoints."""
from collections.abc import Sequence
from typing import TypeVar

from schemas.catalog import PaginatedResponse

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 50


def build_page(items: Sequence[T], total: int, offset: int, limit: int) -> PaginatedResponse:
    """
    Wrap one page of results.

    The next page starts right after the items actually returned, so
    `next_offset` advances by len(items) rather than by `limit`.
    """
    next_offset = offset + len(items)
    has_more = next_offset < total
    return PaginatedResponse(
        items=list(items),
        total=total,
        offset=offset,
        limit=limit,
        has_more=has_more,
        next_offset=next_offset if has_more else None,
    )
