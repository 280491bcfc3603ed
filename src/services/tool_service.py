"""Service layer for tool operations."""
from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.tag import tool_tags
from models.tool import Tool
from services.catalog_service import CatalogService, category_tag


class ToolService(CatalogService[Tool]):
    """
    Tools carry their category as a plain tag ('ide') or a prefixed one
    ('category:ide'); the filter accepts either.
    """

    model = Tool
    junction_table = tool_tags
    entity_name = "Tool"
    target_type = TargetType.TOOL

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(Tool.title, pattern),
            self._ilike(Tool.name, pattern),
            self._ilike(Tool.description, pattern),
            self._ilike(Tool.short_description, pattern),
            self._ilike(Tool.content, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        name = category.strip().lower()
        return self._category_tag_filter(name, category_tag(name))

    async def get_category_counts(self, db: AsyncSession) -> dict:
        """Counts per tag (every tag of a tool is treated as a category)."""
        return await self.tag_counts(db)


tool_service = ToolService()
