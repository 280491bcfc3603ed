"""Service layer for learning path operations."""
from sqlalchemy import or_

from models.enums import TargetType
from models.learning_path import LearningPath
from models.tag import learning_path_tags
from services.catalog_service import CatalogService


class LearningPathService(CatalogService[LearningPath]):
    """Learning paths; filter by level with `difficulty`."""

    model = LearningPath
    junction_table = learning_path_tags
    entity_name = "Learning path"
    target_type = TargetType.PATH

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(LearningPath.title, pattern),
            self._ilike(LearningPath.description, pattern),
            self._ilike(LearningPath.content, pattern),
            self._ilike(LearningPath.audience, pattern),
            self._ilike(LearningPath.overview, pattern),
        )]


learning_path_service = LearningPathService()
