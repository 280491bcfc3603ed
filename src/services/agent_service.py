"""Service layer for agent operations."""
from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.agent import Agent
from models.enums import TargetType
from models.mcp_server import McpServer
from models.tag import agent_tags
from services.catalog_service import CatalogService
from services.mcp_server_service import mcp_server_service


class AgentService(CatalogService[Agent]):
    """Agents have a category column matched exactly."""

    model = Agent
    junction_table = agent_tags
    entity_name = "Agent"
    target_type = TargetType.AGENT

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(Agent.title, pattern),
            self._ilike(Agent.description, pattern),
            self._ilike(Agent.content, pattern),
            self._ilike(Agent.category, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        return Agent.category == category

    async def get_stats(self, db: AsyncSession) -> dict:
        """Category breakdown; uncategorized agents count as 'Other'."""
        return await self.category_stats(db, Agent.category, default="Other", lowercase=False)

    async def resolve_mcp_servers(self, db: AsyncSession, agent: Agent) -> list[McpServer]:
        """
        Approved MCP servers an agent depends on.

        Entries of `mcp_servers` are matched case-insensitively against each
        server's name, its repository part, and its slug; unmatched entries are
        skipped.
        """
        wanted = {name.strip().lower() for name in agent.mcp_servers or [] if name.strip()}
        if not wanted:
            return []
        servers, _ = await mcp_server_service.search(db, limit=1000, sort="title")
        matched = []
        for server in servers:
            keys = {server.slug.lower()}
            if server.name:
                keys.add(server.name.lower())
                keys.add(server.name.split("/")[-1].lower())
            if keys & wanted:
                matched.append(server)
        return matched


agent_service = AgentService()
