"""MCP server model."""
from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.catalog import CatalogMixin
from models.tag import Tag, mcp_server_tags


class McpServer(Base, UUIDv7Mixin, TimestampMixin, CatalogMixin):
    """
    MCP server model - a catalogued Model Context Protocol server.

    `name` is usually the GitHub `owner/repo` the server is published from.
    """

    __tablename__ = "mcp_servers"

    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    github_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    logo: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    install_command: Mapped[str | None] = mapped_column(Text, nullable=True)
    config_example: Mapped[str | None] = mapped_column(Text, nullable=True)
    author_name: Mapped[str | None] = mapped_column(String(200), nullable=True)

    tag_objects: Mapped[list[Tag]] = relationship(secondary=mcp_server_tags, lazy="selectin")
