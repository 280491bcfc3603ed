"""Service layer for instruction operations."""
from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.instruction import Instruction
from models.tag import instruction_tags
from services.catalog_service import CatalogService


class InstructionService(CatalogService[Instruction]):
    """Instructions have no category; stats report distinct languages instead."""

    model = Instruction
    junction_table = instruction_tags
    entity_name = "Instruction"
    target_type = TargetType.INSTRUCTION

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(Instruction.title, pattern),
            self._ilike(Instruction.description, pattern),
            self._ilike(Instruction.content, pattern),
            self._ilike(Instruction.language, pattern),
            self._ilike(Instruction.framework, pattern),
        )]

    async def get_stats(self, db: AsyncSession) -> dict:
        """Return {total, featured, languages} over approved instructions."""
        rows = await self._approved_values(db, Instruction.featured, Instruction.language)
        languages = {
            language.strip().lower()
            for _, language in rows
            if language and language.strip()
        }
        return {
            "total": len(rows),
            "featured": sum(1 for featured, _ in rows if featured),
            "languages": len(languages),
        }


instruction_service = InstructionService()
