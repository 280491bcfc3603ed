"""Service layer for migration guide operations."""
from sqlalchemy import ColumnElement, func, or_

from models.enums import TargetType
from models.migration_guide import MigrationGuide
from models.tag import migration_guide_tags
from services.catalog_service import CatalogService


class MigrationGuideService(CatalogService[MigrationGuide]):
    """Migration guides have a category column, compared case-insensitively."""

    model = MigrationGuide
    junction_table = migration_guide_tags
    entity_name = "Migration guide"
    target_type = TargetType.MIGRATION

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(MigrationGuide.title, pattern),
            self._ilike(MigrationGuide.description, pattern),
            self._ilike(MigrationGuide.content, pattern),
            self._ilike(MigrationGuide.from_stack, pattern),
            self._ilike(MigrationGuide.to_stack, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        return func.lower(MigrationGuide.category) == category.lower()


migration_guide_service = MigrationGuideService()
