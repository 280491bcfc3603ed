"""Service layer for prompt operations."""
from sqlalchemy import ColumnElement, or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.prompt import Prompt
from models.tag import prompt_tags
from schemas.validators import CATEGORY_TAG_PREFIX
from services.catalog_service import CatalogService, category_tag


class PromptService(CatalogService[Prompt]):
    """Prompts are categorized through `category:<name>` tags."""

    model = Prompt
    junction_table = prompt_tags
    entity_name = "Prompt"
    target_type = TargetType.PROMPT

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(Prompt.title, pattern),
            self._ilike(Prompt.description, pattern),
            self._ilike(Prompt.content, pattern),
        )]

    def _build_category_filter(self, category: str) -> ColumnElement[bool]:
        return self._category_tag_filter(category_tag(category))

    async def get_category_counts(self, db: AsyncSession) -> dict:
        """Counts per `category:<name>` tag, keyed by the bare category name."""
        return await self.tag_counts(db, prefix=CATEGORY_TAG_PREFIX)


prompt_service = PromptService()
