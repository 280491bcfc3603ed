"""Code recipe endpoints."""
from fastapi import APIRouter

from api.helpers import register_catalog_routes
from schemas.content import (
    CodeRecipeCreate,
    CodeRecipeListItem,
    CodeRecipeResponse,
    CodeRecipeUpdate,
)
from services.code_recipe_service import code_recipe_service

router = APIRouter(prefix="/recipes", tags=["recipes"])

register_catalog_routes(
    router,
    code_recipe_service,
    create_schema=CodeRecipeCreate,
    update_schema=CodeRecipeUpdate,
    list_schema=CodeRecipeListItem,
    response_schema=CodeRecipeResponse,
)
