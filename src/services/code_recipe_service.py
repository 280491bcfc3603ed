"""Service layer for code recipe operations."""
from sqlalchemy import or_

from models.code_recipe import CodeRecipe
from models.enums import TargetType
from models.tag import code_recipe_tags
from services.catalog_service import CatalogService


class CodeRecipeService(CatalogService[CodeRecipe]):
    """Code recipes; `?category=` is ignored."""

    model = CodeRecipe
    junction_table = code_recipe_tags
    entity_name = "Code recipe"
    target_type = TargetType.RECIPE

    def _build_text_search_filter(self, pattern: str) -> list:
        return [or_(
            self._ilike(CodeRecipe.title, pattern),
            self._ilike(CodeRecipe.description, pattern),
            self._ilike(CodeRecipe.content, pattern),
            self._ilike(CodeRecipe.language, pattern),
            self._ilike(CodeRecipe.framework, pattern),
            self._ilike(CodeRecipe.code_sample, pattern),
        )]


code_recipe_service = CodeRecipeService()
