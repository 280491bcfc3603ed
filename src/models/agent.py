"""Agent model for custom agent definitions."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin, DownloadCountMixin, JSONList
from models.tag import Tag, agent_tags


class Agent(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin, DownloadCountMixin):
    """
    Agent model - a downloadable `.agent.md` definition.

    `mcp_servers` holds MCP server names the agent expects to be installed.
    """

    __tablename__ = "agents"

    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    mcp_servers: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    languages: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)
    frameworks: Mapped[list[str]] = mapped_column(JSONList, default=list, nullable=False)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=agent_tags, lazy="selectin")
