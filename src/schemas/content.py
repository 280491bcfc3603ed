"""Per-type request and response schemas for the catalog content types."""
from typing import ClassVar

from pydantic import BaseModel, Field, HttpUrl, field_validator

from schemas.catalog import (
    CatalogCreate,
    CatalogListItem,
    CatalogResponse,
    CatalogUpdate,
    ItemSummary,
)
from schemas.validators import validate_string_list


def _url_or_none(v: HttpUrl | str | None) -> str | None:
    return str(v) if v is not None else None


# --- Prompts ---

class PromptCreate(CatalogCreate):
    """Prompt submission. Categorize with a `category:<name>` tag."""


class PromptUpdate(CatalogUpdate):
    """Partial prompt update."""


class PromptListItem(CatalogListItem):
    """Prompt list item."""


class PromptResponse(CatalogResponse):
    """Full prompt."""


# --- Workflows ---

class WorkflowCreate(CatalogCreate):
    """Workflow submission with 1-20 ordered steps."""

    steps: list[str] = Field(min_length=1, max_length=20)

    @field_validator("steps")
    @classmethod
    def strip_steps(cls, v: list[str]) -> list[str]:
        """Drop blank steps."""
        steps = validate_string_list(v)
        if not steps:
            raise ValueError("At least one step is required.")
        return steps


class WorkflowUpdate(CatalogUpdate):
    """Partial workflow update."""

    steps: list[str] | None = Field(default=None, max_length=20)

    @field_validator("steps")
    @classmethod
    def strip_steps(cls, v: list[str] | None) -> list[str] | None:
        """Drop blank steps."""
        return validate_string_list(v) if v is not None else v


class WorkflowListItem(CatalogListItem):
    """Workflow list item."""


class WorkflowResponse(CatalogResponse):
    """Full workflow."""

    steps: list[str] = Field(default_factory=list)


# --- Tools ---

class ToolCreate(CatalogCreate):
    """Tool submission."""

    content_required: ClassVar[bool] = False

    name: str | None = Field(default=None, max_length=200)
    short_description: str | None = Field(default=None, max_length=300)
    url: HttpUrl | None = None
    website_url: HttpUrl | None = None
    logo: HttpUrl | None = None
    author_name: str | None = Field(default=None, max_length=200)

    @field_validator("url", "website_url", "logo")
    @classmethod
    def url_to_string(cls, v: HttpUrl | None) -> str | None:
        """Store URLs as plain strings."""
        return _url_or_none(v)


class ToolUpdate(CatalogUpdate):
    """Partial tool update."""

    name: str | None = Field(default=None, max_length=200)
    short_description: str | None = Field(default=None, max_length=300)
    url: HttpUrl | None = None
    website_url: HttpUrl | None = None
    logo: HttpUrl | None = None
    author_name: str | None = Field(default=None, max_length=200)

    @field_validator("url", "website_url", "logo")
    @classmethod
    def url_to_string(cls, v: HttpUrl | None) -> str | None:
        """Store URLs as plain strings."""
        return _url_or_none(v)


class ToolListItem(CatalogListItem):
    """Tool list item."""

    name: str | None = None
    short_description: str | None = None
    url: str | None = None
    website_url: str | None = None
    logo: str | None = None


class ToolResponse(CatalogResponse, ToolListItem):
    """Full tool."""

    author_name: str | None = None


# --- MCP servers ---

class McpServerCreate(CatalogCreate):
    """MCP server submission."""

    content_required: ClassVar[bool] = False

    name: str | None = Field(default=None, max_length=200)
    short_description: str | None = Field(default=None, max_length=300)
    github_url: HttpUrl | None = None
    website_url: HttpUrl | None = None
    logo: HttpUrl | None = None
    category: str | None = Field(default=None, max_length=100)
    install_command: str | None = None
    config_example: str | None = None
    author_name: str | None = Field(default=None, max_length=200)

    @field_validator("github_url", "website_url", "logo")
    @classmethod
    def url_to_string(cls, v: HttpUrl | None) -> str | None:
        """Store URLs as plain strings."""
        return _url_or_none(v)


class McpServerUpdate(CatalogUpdate):
    """Partial MCP server update."""

    name: str | None = Field(default=None, max_length=200)
    short_description: str | None = Field(default=None, max_length=300)
    github_url: HttpUrl | None = None
    website_url: HttpUrl | None = None
    logo: HttpUrl | None = None
    category: str | None = Field(default=None, max_length=100)
    install_command: str | None = None
    config_example: str | None = None
    author_name: str | None = Field(default=None, max_length=200)

    @field_validator("github_url", "website_url", "logo")
    @classmethod
    def url_to_string(cls, v: HttpUrl | None) -> str | None:
        """Store URLs as plain strings."""
        return _url_or_none(v)


class McpServerListItem(CatalogListItem):
    """MCP server list item."""

    name: str | None = None
    short_description: str | None = None
    github_url: str | None = None
    logo: str | None = None
    category: str | None = None


class McpServerResponse(CatalogResponse, McpServerListItem):
    """Full MCP server."""

    website_url: str | None = None
    install_command: str | None = None
    config_example: str | None = None
    author_name: str | None = None


# --- Instructions ---

class InstructionCreate(CatalogCreate):
    """Instruction submission."""

    file_pattern: str | None = Field(default=None, max_length=255)
    language: str | None = Field(default=None, max_length=100)
    framework: str | None = Field(default=None, max_length=100)
    scope: str | None = Field(default=None, max_length=100)


class InstructionUpdate(CatalogUpdate):
    """Partial instruction update."""

    file_pattern: str | None = Field(default=None, max_length=255)
    language: str | None = Field(default=None, max_length=100)
    framework: str | None = Field(default=None, max_length=100)
    scope: str | None = Field(default=None, max_length=100)


class InstructionListItem(CatalogListItem):
    """Instruction list item."""

    file_pattern: str | None = None
    language: str | None = None
    framework: str | None = None
    scope: str | None = None
    downloads: int = 0
    views: int = 0


class InstructionResponse(CatalogResponse, InstructionListItem):
    """Full instruction."""


# --- Agents ---

class AgentCreate(CatalogCreate):
    """Agent submission."""

    category: str | None = Field(default=None, max_length=100)
    mcp_servers: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)

    @field_validator("mcp_servers", "languages", "frameworks")
    @classmethod
    def strip_lists(cls, v: list[str]) -> list[str]:
        """Drop blank entries."""
        return validate_string_list(v)


class AgentUpdate(CatalogUpdate):
    """Partial agent update."""

    category: str | None = Field(default=None, max_length=100)
    mcp_servers: list[str] | None = None
    languages: list[str] | None = None
    frameworks: list[str] | None = None

    @field_validator("mcp_servers", "languages", "frameworks")
    @classmethod
    def strip_lists(cls, v: list[str] | None) -> list[str] | None:
        """Drop blank entries."""
        return validate_string_list(v) if v is not None else v


class AgentListItem(CatalogListItem):
    """Agent list item."""

    category: str | None = None
    mcp_servers: list[str] = Field(default_factory=list)
    languages: list[str] = Field(default_factory=list)
    frameworks: list[str] = Field(default_factory=list)
    downloads: int = 0
    views: int = 0


class AgentResponse(CatalogResponse, AgentListItem):
    """
    Full agent.

    `mcp_server_details` lists the approved MCP servers whose name matches an
    entry of `mcp_servers`.
    """

    mcp_server_details: list[ItemSummary] = Field(default_factory=list)


# --- Code recipes ---

class CodeRecipeCreate(CatalogCreate):
    """Code recipe submission."""

    language: str | None = Field(default=None, max_length=100)
    framework: str | None = Field(default=None, max_length=100)
    code_sample: str | None = None
    explanation: str | None = None
    usage_notes: str | None = None


class CodeRecipeUpdate(CatalogUpdate):
    """Partial code recipe update."""

    language: str | None = Field(default=None, max_length=100)
    framework: str | None = Field(default=None, max_length=100)
    code_sample: str | None = None
    explanation: str | None = None
    usage_notes: str | None = None


class CodeRecipeListItem(CatalogListItem):
    """Code recipe list item."""

    language: str | None = None
    framework: str | None = None


class CodeRecipeResponse(CatalogResponse, CodeRecipeListItem):
    """Full code recipe."""

    code_sample: str | None = None
    explanation: str | None = None
    usage_notes: str | None = None


# --- Migration guides ---

class MigrationGuideCreate(CatalogCreate):
    """Migration guide submission."""

    content_required: ClassVar[bool] = False

    from_stack: str | None = Field(default=None, max_length=200)
    to_stack: str | None = Field(default=None, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    overview: str | None = None
    prerequisites: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    related_prompt_slugs: list[str] = Field(default_factory=list)
    related_recipe_slugs: list[str] = Field(default_factory=list)
    related_tool_slugs: list[str] = Field(default_factory=list)
    related_workflow_slugs: list[str] = Field(default_factory=list)

    @field_validator(
        "prerequisites", "steps", "risks",
        "related_prompt_slugs", "related_recipe_slugs",
        "related_tool_slugs", "related_workflow_slugs",
    )
    @classmethod
    def strip_lists(cls, v: list[str]) -> list[str]:
        """Drop blank entries."""
        return validate_string_list(v)


class MigrationGuideUpdate(CatalogUpdate):
    """Partial migration guide update."""

    from_stack: str | None = Field(default=None, max_length=200)
    to_stack: str | None = Field(default=None, max_length=200)
    category: str | None = Field(default=None, max_length=100)
    overview: str | None = None
    prerequisites: list[str] | None = None
    steps: list[str] | None = None
    risks: list[str] | None = None
    related_prompt_slugs: list[str] | None = None
    related_recipe_slugs: list[str] | None = None
    related_tool_slugs: list[str] | None = None
    related_workflow_slugs: list[str] | None = None


class MigrationGuideListItem(CatalogListItem):
    """Migration guide list item."""

    from_stack: str | None = None
    to_stack: str | None = None
    category: str | None = None


class RelatedContent(BaseModel):
    """Resolved slug references of a guide or path, grouped by type."""

    prompts: list[ItemSummary] = Field(default_factory=list)
    workflows: list[ItemSummary] = Field(default_factory=list)
    tools: list[ItemSummary] = Field(default_factory=list)
    recipes: list[ItemSummary] = Field(default_factory=list)
    migrations: list[ItemSummary] = Field(default_factory=list)


class MigrationGuideResponse(CatalogResponse, MigrationGuideListItem):
    """Full migration guide with its related content resolved."""

    overview: str | None = None
    prerequisites: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    risks: list[str] = Field(default_factory=list)
    related_prompt_slugs: list[str] = Field(default_factory=list)
    related_recipe_slugs: list[str] = Field(default_factory=list)
    related_tool_slugs: list[str] = Field(default_factory=list)
    related_workflow_slugs: list[str] = Field(default_factory=list)
    related: RelatedContent = Field(default_factory=RelatedContent)


# --- Learning paths ---

class LearningPathCreate(CatalogCreate):
    """Learning path submission. `difficulty` is the path's level."""

    content_required: ClassVar[bool] = False

    audience: str | None = Field(default=None, max_length=200)
    overview: str | None = None
    goals: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    prompt_slugs: list[str] = Field(default_factory=list)
    workflow_slugs: list[str] = Field(default_factory=list)
    tool_slugs: list[str] = Field(default_factory=list)
    recipe_slugs: list[str] = Field(default_factory=list)
    migration_slugs: list[str] = Field(default_factory=list)

    @field_validator(
        "goals", "steps", "prompt_slugs", "workflow_slugs",
        "tool_slugs", "recipe_slugs", "migration_slugs",
    )
    @classmethod
    def strip_lists(cls, v: list[str]) -> list[str]:
        """Drop blank entries."""
        return validate_string_list(v)


class LearningPathUpdate(CatalogUpdate):
    """Partial learning path update."""

    audience: str | None = Field(default=None, max_length=200)
    overview: str | None = None
    goals: list[str] | None = None
    steps: list[str] | None = None
    prompt_slugs: list[str] | None = None
    workflow_slugs: list[str] | None = None
    tool_slugs: list[str] | None = None
    recipe_slugs: list[str] | None = None
    migration_slugs: list[str] | None = None


class LearningPathListItem(CatalogListItem):
    """Learning path list item."""

    audience: str | None = None


class LearningPathResponse(CatalogResponse, LearningPathListItem):
    """Full learning path with its referenced items resolved."""

    overview: str | None = None
    goals: list[str] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    prompt_slugs: list[str] = Field(default_factory=list)
    workflow_slugs: list[str] = Field(default_factory=list)
    tool_slugs: list[str] = Field(default_factory=list)
    recipe_slugs: list[str] = Field(default_factory=list)
    migration_slugs: list[str] = Field(default_factory=list)
    related: RelatedContent = Field(default_factory=RelatedContent)
