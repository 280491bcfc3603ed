"""
Initial schema: users, tokens, catalog types, tags, votes, favorites, collections.

Revision ID: 0b1c5e7a9d20
Revises:
Create Date: 2026-10-16 09:12:40.118734
"""
from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0b1c5e7a9d20"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON_LIST = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")

# (table, junction table, junction id column, tracks downloads)
CATALOG_TABLES = [
    ("prompts", "prompt_tags", "prompt_id", False),
    ("workflows", "workflow_tags", "workflow_id", False),
    ("tools", "tool_tags", "tool_id", False),
    ("mcp_servers", "mcp_server_tags", "mcp_server_id", False),
    ("instructions", "instruction_tags", "instruction_id", True),
    ("agents", "agent_tags", "agent_id", True),
    ("code_recipes", "code_recipe_tags", "code_recipe_id", False),
    ("migration_guides", "migration_guide_tags", "migration_guide_id", False),
    ("learning_paths", "learning_path_tags", "learning_path_id", False),
]


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def _json_list(name: str) -> sa.Column:
    return sa.Column(name, JSON_LIST, nullable=False)


def _type_columns(table: str) -> list[sa.Column]:
    """Columns specific to one catalog table."""
    columns = {
        "prompts": [],
        "workflows": [_json_list("steps")],
        "tools": [
            sa.Column("name", sa.String(length=200), nullable=True),
            sa.Column("short_description", sa.Text(), nullable=True),
            sa.Column("url", sa.String(length=2048), nullable=True),
            sa.Column("website_url", sa.String(length=2048), nullable=True),
            sa.Column("logo", sa.String(length=2048), nullable=True),
            sa.Column("author_name", sa.String(length=200), nullable=True),
        ],
        "mcp_servers": [
            sa.Column("name", sa.String(length=200), nullable=True),
            sa.Column("short_description", sa.Text(), nullable=True),
            sa.Column("github_url", sa.String(length=2048), nullable=True),
            sa.Column("website_url", sa.String(length=2048), nullable=True),
            sa.Column("logo", sa.String(length=2048), nullable=True),
            sa.Column("category", sa.String(length=100), nullable=True),
            sa.Column("install_command", sa.Text(), nullable=True),
            sa.Column("config_example", sa.Text(), nullable=True),
            sa.Column("author_name", sa.String(length=200), nullable=True),
        ],
        "instructions": [
            sa.Column("file_pattern", sa.String(length=255), nullable=True),
            sa.Column("language", sa.String(length=100), nullable=True),
            sa.Column("framework", sa.String(length=100), nullable=True),
            sa.Column("scope", sa.String(length=100), nullable=True),
        ],
        "agents": [
            sa.Column("category", sa.String(length=100), nullable=True),
            _json_list("mcp_servers"),
            _json_list("languages"),
            _json_list("frameworks"),
        ],
        "code_recipes": [
            sa.Column("language", sa.String(length=100), nullable=True),
            sa.Column("framework", sa.String(length=100), nullable=True),
            sa.Column("code_sample", sa.Text(), nullable=True),
            sa.Column("explanation", sa.Text(), nullable=True),
            sa.Column("usage_notes", sa.Text(), nullable=True),
        ],
        "migration_guides": [
            sa.Column("from_stack", sa.String(length=200), nullable=True),
            sa.Column("to_stack", sa.String(length=200), nullable=True),
            sa.Column("category", sa.String(length=100), nullable=True),
            sa.Column("overview", sa.Text(), nullable=True),
            _json_list("prerequisites"),
            _json_list("steps"),
            _json_list("risks"),
            _json_list("related_prompt_slugs"),
            _json_list("related_recipe_slugs"),
            _json_list("related_tool_slugs"),
            _json_list("related_workflow_slugs"),
        ],
        "learning_paths": [
            sa.Column("audience", sa.String(length=200), nullable=True),
            sa.Column("overview", sa.Text(), nullable=True),
            _json_list("goals"),
            _json_list("steps"),
            _json_list("prompt_slugs"),
            _json_list("workflow_slugs"),
            _json_list("tool_slugs"),
            _json_list("recipe_slugs"),
            _json_list("migration_slugs"),
        ],
    }
    return columns[table]


def _create_catalog_table(table: str, junction: str, id_column: str, downloads: bool) -> None:
    counters = []
    if downloads:
        counters = [
            sa.Column("downloads", sa.Integer(), server_default="0", nullable=False),
            sa.Column("views", sa.Integer(), server_default="0", nullable=False),
        ]
    op.create_table(
        table,
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("slug", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("difficulty", sa.String(length=20), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("featured", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("author_id", sa.Uuid(), nullable=True),
        *_type_columns(table),
        *counters,
        *_timestamps(),
        sa.ForeignKeyConstraint(["author_id"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f(f"ix_{table}_slug"), table, ["slug"], unique=True)
    op.create_index(op.f(f"ix_{table}_status"), table, ["status"])
    op.create_index(op.f(f"ix_{table}_author_id"), table, ["author_id"])
    op.create_index(op.f(f"ix_{table}_updated_at"), table, ["updated_at"])
    if table in ("mcp_servers", "agents", "migration_guides"):
        op.create_index(op.f(f"ix_{table}_category"), table, ["category"])
    if table == "instructions":
        op.create_index(op.f("ix_instructions_language"), table, ["language"])

    op.create_table(
        junction,
        sa.Column(id_column, sa.Uuid(), nullable=False),
        sa.Column("tag_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint([id_column], [f"{table}.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["tag_id"], ["tags.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint(id_column, "tag_id"),
    )
    op.create_index(f"ix_{junction}_tag_id", junction, ["tag_id"])


def _create_target_table(table: str, *extra: sa.SchemaItem) -> None:
    """Tables that point at a catalog item by (target_type, target_id)."""
    op.create_table(
        table,
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("target_type", sa.String(length=20), nullable=False),
        sa.Column("target_id", sa.Uuid(), nullable=False),
        *extra,
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "user_id", "target_type", "target_id", name=f"uq_{table}_user_target",
        ),
    )
    op.create_index(op.f(f"ix_{table}_user_id"), table, ["user_id"])
    op.create_index(op.f(f"ix_{table}_updated_at"), table, ["updated_at"])


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "github_id",
            sa.BigInteger(),
            nullable=False,
            comment="GitHub numeric user id - stable across login renames",
        ),
        sa.Column("login", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("avatar_url", sa.String(length=2048), nullable=True),
        sa.Column("role", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_github_id"), "users", ["github_id"], unique=True)
    op.create_index(op.f("ix_users_updated_at"), "users", ["updated_at"])

    op.create_table(
        "api_tokens",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("token_hash", sa.String(length=64), nullable=False),
        sa.Column(
            "token_prefix",
            sa.String(length=12),
            nullable=False,
            comment="First 12 chars for identification, e.g., 'cp_abc12345'",
        ),
        sa.Column("last_used_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "issued_at_login",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
            comment="True for tokens handed out by the GitHub OAuth callback",
        ),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_api_tokens_user_id"), "api_tokens", ["user_id"])
    op.create_index(op.f("ix_api_tokens_token_hash"), "api_tokens", ["token_hash"], unique=True)
    op.create_index(op.f("ix_api_tokens_updated_at"), "api_tokens", ["updated_at"])

    op.create_table(
        "tags",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    for table, junction, id_column, downloads in CATALOG_TABLES:
        _create_catalog_table(table, junction, id_column, downloads)

    _create_target_table(
        "votes",
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.CheckConstraint("value IN (-1, 1)", name="ck_votes_value"),
    )
    op.create_index("ix_votes_target", "votes", ["target_type", "target_id"])
    _create_target_table("favorites")

    op.create_table(
        "collections",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("description", sa.Text(), server_default="", nullable=False),
        sa.Column("is_public", sa.Boolean(), server_default=sa.false(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_collections_user_id"), "collections", ["user_id"])
    op.create_index(op.f("ix_collections_updated_at"), "collections", ["updated_at"])

    op.create_table(
        "collection_items",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("collection_id", sa.Uuid(), nullable=False),
        sa.Column("target_type", sa.String(length=20), nullable=False),
        sa.Column("target_id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["collection_id"], ["collections.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "collection_id", "target_type", "target_id",
            name="uq_collection_items_collection_target",
        ),
    )
    op.create_index(
        op.f("ix_collection_items_collection_id"), "collection_items", ["collection_id"],
    )
    op.create_index(
        op.f("ix_collection_items_updated_at"), "collection_items", ["updated_at"],
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("collection_items")
    op.drop_table("collections")
    op.drop_table("favorites")
    op.drop_table("votes")
    for table, junction, _, _ in reversed(CATALOG_TABLES):
        op.drop_table(junction)
        op.drop_table(table)
    op.drop_table("tags")
    op.drop_table("api_tokens")
    op.drop_table("users")
