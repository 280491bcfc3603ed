"""Shared exceptions for service layer operations."""
from uuid import UUID


class ContentNotFoundError(Exception):
    """Raised when a catalog item does not exist or is not visible to the caller."""

    def __init__(self, entity_name: str, identifier: str | UUID) -> None:
        self.entity_name = entity_name
        self.identifier = identifier
        super().__init__(f"{entity_name} not found: {identifier}")


class PermissionDeniedError(Exception):
    """Raised when a user acts on a resource they neither own nor moderate."""

    def __init__(self, message: str = "You do not have permission to modify this resource") -> None:
        super().__init__(message)


class InvalidTargetError(Exception):
    """Raised when a vote, favorite or collection item references unknown content."""

    def __init__(self, target_type: str, target_id: UUID) -> None:
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(f"{target_type} not found: {target_id}")


class CollectionNotFoundError(Exception):
    """Raised when a collection is missing or not visible to the caller."""

    def __init__(self, collection_id: UUID) -> None:
        self.collection_id = collection_id
        super().__init__(f"Collection not found: {collection_id}")


class CollectionForbiddenError(Exception):
    """
    Raised when a collection cannot be modified by the caller.

    Covers both a missing collection and one owned by someone else, so the
    response does not reveal which collections exist.
    """

    def __init__(self, collection_id: UUID) -> None:
        self.collection_id = collection_id
        super().__init__(f"Collection not found or forbidden: {collection_id}")


class FavoriteNotFoundError(Exception):
    """Raised when removing a favorite that does not exist."""

    def __init__(self, target_type: str, target_id: UUID) -> None:
        self.target_type = target_type
        self.target_id = target_id
        super().__init__(f"Favorite not found: {target_type} {target_id}")


class ContributionNotConfiguredError(Exception):
    """Raised when PR-based contributions are requested but not configured."""

    def __init__(self) -> None:
        super().__init__("Contributions are not configured on this server")


class ContributionError(Exception):
    """Raised when the GitHub API rejects a contribution step."""

    def __init__(self, step: str, status_code: int, message: str) -> None:
        self.step = step
        self.status_code = status_code
        super().__init__(f"GitHub {step} failed ({status_code}): {message}")


class GitHubAuthError(Exception):
    """Raised when the GitHub OAuth exchange or profile fetch fails."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class SlugConflictError(Exception):
    """Raised when a concurrent submission claimed the same slug."""

    def __init__(self, slug: str) -> None:
        self.slug = slug
        super().__init__(f"Slug already exists: {slug}")
