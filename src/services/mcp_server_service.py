"""Service layer for MCP server operations."""
import re

from sqlalchemy import ColumnElement, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.mcp_server import McpServer
from models.tag import mcp_server_tags
from services.catalog_service import CatalogService

_WORD_START = re.compile(r"\b\w")


class McpServerService(CatalogService[McpServer]):
    """MCP servers have a category column, compared case-insensitively."""

    model = McpServer
    junction_table = mcp_server_tags
    entity_name = "MCP server"
    target_type = TargetType.MCP

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(McpServer.title, pattern),
            self._ilike(McpServer.name, pattern),
            self._ilike(McpServer.description, pattern),
            self._ilike(McpServer.short_description, pattern),
            self._ilike(McpServer.content, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        return func.lower(McpServer.category) == category.lower()

    async def get_stats(self, db: AsyncSession) -> dict:
        """Category breakdown with lowercased names; uncategorized servers count as 'other'."""
        return await self.category_stats(
            db, McpServer.category, default="other", lowercase=True,
        )


def mcp_display_title(server: McpServer) -> str:
    """
    Display name for an MCP server.

    Uses the repository part of an `owner/repo` name (or the title when there
    is no name), with hyphens turned into spaces and each word capitalized.
    """
    raw_name = server.name or server.title or "Untitled MCP"
    repo_name = raw_name.split("/")[1] if "/" in raw_name else raw_name
    return _WORD_START.sub(lambda m: m.group().upper(), repo_name.replace("-", " "))


mcp_server_service = McpServerService()
