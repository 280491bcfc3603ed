"""SQLAlchemy models."""
from models.api_token import ApiToken
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.tag import Tag  # Must be before catalog models, which reference junction tables
from models.agent import Agent
from models.code_recipe import CodeRecipe
from models.collection import Collection, CollectionItem
from models.enums import ContentStatus, Difficulty, TargetType, UserRole
from models.favorite import Favorite
from models.instruction import Instruction
from models.learning_path import LearningPath
from models.mcp_server import McpServer
from models.migration_guide import MigrationGuide
from models.prompt import Prompt
from models.tool import Tool
from models.user import User
from models.vote import Vote
from models.workflow import Workflow

__all__ = [
    "Agent",
    "ApiToken",
    "Base",
    "CodeRecipe",
    "Collection",
    "CollectionItem",
    "ContentStatus",
    "Difficulty",
    "Favorite",
    "Instruction",
    "LearningPath",
    "McpServer",
    "MigrationGuide",
    "Prompt",
    "Tag",
    "TargetType",
    "TimestampMixin",
    "Tool",
    "UUIDv7Mixin",
    "User",
    "UserRole",
    "Vote",
    "Workflow",
]
