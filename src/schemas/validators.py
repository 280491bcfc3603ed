"""
Shared validation functions for Pydantic schemas.

Submission limits are read from settings so they can be tuned per deployment.
"""
import re

from core.config import get_settings

# Tag format: lowercase alphanumeric with hyphens, with an optional `prefix:`
# namespace (e.g., 'react', 'code-review', 'category:testing')
TAG_PATTERN = re.compile(r"^(?:[a-z0-9]+(?:-[a-z0-9]+)*:)?[a-z0-9]+(?:-[a-z0-9]+)*$")

CATEGORY_TAG_PREFIX = "category:"

MIN_TITLE_LENGTH = 3
MIN_DESCRIPTION_LENGTH = 10
MIN_CONTENT_LENGTH = 20
MIN_COLLECTION_NAME_LENGTH = 2


def validate_and_normalize_tag(tag: str) -> str:
    """
    Normalize and validate a single tag.

    Raises:
        ValueError: If tag is empty or has invalid format.
    """
    normalized = tag.lower().strip()
    if not normalized:
        raise ValueError("Tag name cannot be empty")
    if not TAG_PATTERN.match(normalized):
        raise ValueError(
            f"Invalid tag format: '{normalized}'. "
            "Use lowercase letters, numbers, and hyphens only, with an optional "
            "'prefix:' (e.g., 'react' or 'category:testing').",
        )
    return normalized


def validate_and_normalize_tags(tags: list[str]) -> list[str]:
    """
    Normalize and validate a list of tags.

    Empty strings are dropped and duplicates removed, preserving first
    occurrence order.

    Raises:
        ValueError: If any tag has invalid format.
    """
    normalized = []
    seen: set[str] = set()
    for tag in tags:
        trimmed = tag.lower().strip()
        if not trimmed:
            continue
        validated = validate_and_normalize_tag(trimmed)
        if validated not in seen:
            seen.add(validated)
            normalized.append(validated)
    return normalized


def validate_tag_count(tags: list[str]) -> list[str]:
    """Require between one and max_tags tags on a submission."""
    settings = get_settings()
    if not tags:
        raise ValueError("At least one tag is required.")
    if len(tags) > settings.max_tags:
        raise ValueError(
            f"Too many tags: at most {settings.max_tags} allowed (got {len(tags)}).",
        )
    return tags


def validate_title_length(title: str | None) -> str | None:
    """Validate that title is within the allowed length range."""
    if title is None:
        return title
    settings = get_settings()
    title = title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        raise ValueError(f"Title must be at least {MIN_TITLE_LENGTH} characters.")
    if len(title) > settings.max_title_length:
        raise ValueError(
            f"Title exceeds maximum length of {settings.max_title_length:,} characters "
            f"(got {len(title):,} characters).",
        )
    return title


def validate_description_length(description: str | None) -> str | None:
    """Validate that description is within the allowed length range."""
    if description is None:
        return description
    settings = get_settings()
    description = description.strip()
    if len(description) < MIN_DESCRIPTION_LENGTH:
        raise ValueError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters.",
        )
    if len(description) > settings.max_description_length:
        max_len = settings.max_description_length
        raise ValueError(
            f"Description exceeds maximum length of {max_len:,} characters "
            f"(got {len(description):,} characters).",
        )
    return description


def validate_content_length(content: str | None) -> str | None:
    """Validate that content is within the allowed length range."""
    if content is None:
        return content
    settings = get_settings()
    if len(content.strip()) < MIN_CONTENT_LENGTH:
        raise ValueError(f"Content must be at least {MIN_CONTENT_LENGTH} characters.")
    if len(content) > settings.max_content_length:
        raise ValueError(
            f"Content exceeds maximum length of {settings.max_content_length:,} characters "
            f"(got {len(content):,} characters).",
        )
    return content


def validate_collection_name(name: str | None) -> str | None:
    """Collection names are trimmed and must have at least two characters."""
    if name is None:
        return name
    trimmed = name.strip()
    if len(trimmed) < MIN_COLLECTION_NAME_LENGTH:
        raise ValueError(
            f"Collection name must be at least {MIN_COLLECTION_NAME_LENGTH} characters.",
        )
    return trimmed


def validate_string_list(values: list[str]) -> list[str]:
    """Strip entries of a free-text list and drop the empty ones."""
    return [v.strip() for v in values if v and v.strip()]
