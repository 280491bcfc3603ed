"""Enumerations shared by models, schemas and services."""
from enum import StrEnum


class Difficulty(StrEnum):
    """Skill level a catalog item is aimed at."""

    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"


class ContentStatus(StrEnum):
    """Moderation status. Only APPROVED content is publicly visible."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class TargetType(StrEnum):
    """Catalog type referenced by votes, favorites and collection items."""

    PROMPT = "PROMPT"
    WORKFLOW = "WORKFLOW"
    TOOL = "TOOL"
    MCP = "MCP"
    INSTRUCTION = "INSTRUCTION"
    AGENT = "AGENT"
    RECIPE = "RECIPE"
    MIGRATION = "MIGRATION"
    PATH = "PATH"


class UserRole(StrEnum):
    """Access level of a user account."""

    USER = "USER"
    ADMIN = "ADMIN"
