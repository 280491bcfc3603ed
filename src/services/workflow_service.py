"""Service layer for workflow operations."""
from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.tag import workflow_tags
from models.workflow import Workflow
from schemas.validators import CATEGORY_TAG_PREFIX
from services.catalog_service import CatalogService, category_tag


class WorkflowService(CatalogService[Workflow]):
    """Workflows are categorized like prompts, through `category:<name>` tags."""

    model = Workflow
    junction_table = workflow_tags
    entity_name = "Workflow"
    target_type = TargetType.WORKFLOW

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(Workflow.title, pattern),
            self._ilike(Workflow.description, pattern),
            self._ilike(Workflow.content, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        return self._category_tag_filter(category_tag(category))

    async def get_category_counts(self, db: AsyncSession) -> dict:
        """Counts per `category:<name>` tag, keyed by the bare category name."""
        return await self.tag_counts(db, prefix=CATEGORY_TAG_PREFIX)


workflow_service = WorkflowService()
