"""Resolve the slug lists on migration guides and learning paths into content."""
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.learning_path import LearningPath
from models.migration_guide import MigrationGuide
from services.registry import get_catalog_service


async def _resolve(db: AsyncSession, slug_lists: dict[str, tuple[TargetType, list[str]]]) -> dict:
    related = {}
    for key, (target_type, slugs) in slug_lists.items():
        related[key] = await get_catalog_service(target_type).get_many_by_slugs(db, slugs or [])
    return related


async def related_for_migration(db: AsyncSession, guide: MigrationGuide) -> dict:
    """Approved prompts, workflows, tools and recipes a guide links to. Unknown slugs are dropped."""
    return await _resolve(db, {
        "prompts": (TargetType.PROMPT, guide.related_prompt_slugs),
        "workflows": (TargetType.WORKFLOW, guide.related_workflow_slugs),
        "tools": (TargetType.TOOL, guide.related_tool_slugs),
        "recipes": (TargetType.RECIPE, guide.related_recipe_slugs),
    })


async def related_for_path(db: AsyncSession, path: LearningPath) -> dict:
    """Approved content a learning path walks through, in the path's order."""
    return await _resolve(db, {
        "prompts": (TargetType.PROMPT, path.prompt_slugs),
        "workflows": (TargetType.WORKFLOW, path.workflow_slugs),
        "tools": (TargetType.TOOL, path.tool_slugs),
        "recipes": (TargetType.RECIPE, path.recipe_slugs),
        "migrations": (TargetType.MIGRATION, path.migration_slugs),
    })
