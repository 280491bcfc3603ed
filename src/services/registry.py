"""
Lookup of catalog services by target type.

Votes, favorites, collections and search address content as
(target_type, target_id); this module maps a target type to the service that
owns it.
"""
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from services.agent_service import agent_service
from services.catalog_service import CatalogService
from services.code_recipe_service import code_recipe_service
from services.exceptions import InvalidTargetError
from services.instruction_service import instruction_service
from services.learning_path_service import learning_path_service
from services.mcp_server_service import mcp_display_title, mcp_server_service
from services.migration_guide_service import migration_guide_service
from services.prompt_service import prompt_service
from services.tool_service import tool_service
from services.workflow_service import workflow_service

CATALOG_SERVICES: dict[TargetType, CatalogService] = {
    TargetType.PROMPT: prompt_service,
    TargetType.WORKFLOW: workflow_service,
    TargetType.TOOL: tool_service,
    TargetType.MCP: mcp_server_service,
    TargetType.INSTRUCTION: instruction_service,
    TargetType.AGENT: agent_service,
    TargetType.RECIPE: code_recipe_service,
    TargetType.MIGRATION: migration_guide_service,
    TargetType.PATH: learning_path_service,
}


# Plural name of each type, used for route prefixes, search sections and
# contribution directories
SECTION_NAMES: dict[TargetType, str] = {
    TargetType.PROMPT: "prompts",
    TargetType.WORKFLOW: "workflows",
    TargetType.TOOL: "tools",
    TargetType.MCP: "mcps",
    TargetType.INSTRUCTION: "instructions",
    TargetType.AGENT: "agents",
    TargetType.RECIPE: "recipes",
    TargetType.MIGRATION: "migrations",
    TargetType.PATH: "paths",
}


def get_catalog_service(target_type: TargetType) -> CatalogService:
    """Service owning the given target type."""
    return CATALOG_SERVICES[target_type]


async def ensure_target_exists(
    db: AsyncSession,
    target_type: TargetType,
    target_id: UUID,
) -> None:
    """
    Check that a target refers to approved content.

    Raises:
        InvalidTargetError: If the item is missing or not approved.
    """
    service = get_catalog_service(target_type)
    if await service.get_by_id(db, target_id) is None:
        raise InvalidTargetError(target_type.value, target_id)


def summarize(target_type: TargetType, entity) -> dict:
    """
    Uniform summary of any catalog item for search results and collections.

    MCP servers show their repository-derived display name. Tools prefer their
    short description.
    """
    title = mcp_display_title(entity) if target_type == TargetType.MCP else entity.title
    description = entity.description
    if target_type == TargetType.TOOL:
        description = entity.short_description or entity.description
    return {
        "id": entity.id,
        "type": target_type,
        "title": title,
        "slug": entity.slug,
        "description": description or "",
        "difficulty": entity.difficulty,
        "tags": [tag.name for tag in entity.__dict__.get("tag_objects") or []],
    }
