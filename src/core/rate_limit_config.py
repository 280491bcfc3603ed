"""
Rate limit policy: which limits apply to which callers and operations.

Enforcement lives in rate_limiter.py.
"""
from dataclasses import dataclass
from enum import Enum


class AuthType(Enum):
    """How the caller authenticated."""

    # Token handed out by the GitHub OAuth callback (browser sessions)
    GITHUB = "github"
    # Token the user created for scripts and CLIs
    PAT = "pat"


class OperationType(Enum):
    """Kind of operation being limited."""

    READ = "read"
    WRITE = "write"
    SENSITIVE = "sensitive"  # Calls out to GitHub on the user's behalf


@dataclass
class RateLimitConfig:
    """Limits for one auth/operation combination."""

    requests_per_minute: int
    requests_per_day: int


@dataclass
class RateLimitResult:
    """Outcome of a rate limit check, with the values for the response headers."""

    allowed: bool
    limit: int
    remaining: int
    reset: int  # Unix timestamp when the window resets
    retry_after: int  # Seconds until a retry is allowed (0 when allowed)


class RateLimitExceededError(Exception):
    """Raised when a caller is over its limit; rendered as a 429."""

    def __init__(self, result: RateLimitResult) -> None:
        self.result = result
        super().__init__("Rate limit exceeded")


# Daily caps are pooled: read and write share one, sensitive has its own.
RATE_LIMITS: dict[tuple[AuthType, OperationType], RateLimitConfig] = {
    (AuthType.PAT, OperationType.READ): RateLimitConfig(120, 2000),
    (AuthType.PAT, OperationType.WRITE): RateLimitConfig(30, 500),
    (AuthType.PAT, OperationType.SENSITIVE): RateLimitConfig(5, 20),
    (AuthType.GITHUB, OperationType.READ): RateLimitConfig(300, 4000),
    (AuthType.GITHUB, OperationType.WRITE): RateLimitConfig(60, 1000),
    (AuthType.GITHUB, OperationType.SENSITIVE): RateLimitConfig(10, 50),
}

# (HTTP method, path) pairs that reach out to external services
SENSITIVE_ENDPOINTS: set[tuple[str, str]] = {
    ("POST", "/contributions"),
    ("POST", "/contributions/"),
}


def get_operation_type(method: str, path: str) -> OperationType:
    """Classify a request by method and path."""
    if (method, path) in SENSITIVE_ENDPOINTS:
        return OperationType.SENSITIVE
    if method in ("GET", "HEAD"):
        return OperationType.READ
    return OperationType.WRITE
