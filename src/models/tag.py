"""Tag model and per-type tag junction tables."""
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    String,
    Table,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, UUIDv7Mixin, utc_now


def content_tags_table(table_name: str, content_table: str, id_column: str) -> Table:
    """
    Build the junction table linking one catalog table to the shared tags table.

    Rows are removed with either side. The composite primary key covers lookups
    by content id, so only tag_id gets its own index.
    """
    return Table(
        table_name,
        Base.metadata,
        Column(
            id_column,
            Uuid(as_uuid=True),
            ForeignKey(f"{content_table}.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Column(
            "tag_id",
            Uuid(as_uuid=True),
            ForeignKey("tags.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        Index(f"ix_{table_name}_tag_id", "tag_id"),
    )


prompt_tags = content_tags_table("prompt_tags", "prompts", "prompt_id")
workflow_tags = content_tags_table("workflow_tags", "workflows", "workflow_id")
tool_tags = content_tags_table("tool_tags", "tools", "tool_id")
mcp_server_tags = content_tags_table("mcp_server_tags", "mcp_servers", "mcp_server_id")
instruction_tags = content_tags_table("instruction_tags", "instructions", "instruction_id")
agent_tags = content_tags_table("agent_tags", "agents", "agent_id")
code_recipe_tags = content_tags_table("code_recipe_tags", "code_recipes", "code_recipe_id")
migration_guide_tags = content_tags_table(
    "migration_guide_tags", "migration_guides", "migration_guide_id",
)
learning_path_tags = content_tags_table(
    "learning_path_tags", "learning_paths", "learning_path_id",
)


class Tag(Base, UUIDv7Mixin):
    """Tag model - one global row per tag name, shared by all catalog types."""

    __tablename__ = "tags"

    # id provided by UUIDv7Mixin
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        server_default=func.now(),
        nullable=False,
    )
