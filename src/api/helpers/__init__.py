"""API helper utilities."""
from api.helpers.catalog_router import not_found, register_catalog_routes
from api.helpers.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, build_page
from api.helpers.votes import with_vote_counts

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "build_page",
    "not_found",
    "register_catalog_routes",
    "with_vote_counts",
]
