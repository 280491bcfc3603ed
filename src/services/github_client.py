"""
GitHub OAuth client.

Exchanges an OAuth authorization code for an access token and reads the
authenticated user's profile from the GitHub REST API.
"""
import logging
from dataclasses import dataclass
from urllib.parse import urlencode

import httpx

from core.config import Settings
from services.exceptions import GitHubAuthError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://github.com/login/oauth/authorize"
ACCESS_TOKEN_URL = "https://github.com/login/oauth/access_token"
API_BASE_URL = "https://api.github.com"
OAUTH_SCOPE = "read:user user:email"
REQUEST_TIMEOUT = 10.0


@dataclass
class GitHubUser:
    """The subset of a GitHub profile the directory stores."""

    id: int
    login: str
    name: str | None
    email: str | None
    avatar_url: str | None


def authorize_url(settings: Settings, state: str) -> str:
    """URL of GitHub's consent page for this app."""
    params = {
        "client_id": settings.github_client_id,
        "redirect_uri": settings.github_redirect_uri,
        "scope": OAUTH_SCOPE,
        "state": state,
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


async def exchange_code(settings: Settings, code: str) -> str:
    """
    Exchange an authorization code for a GitHub access token.

    Raises:
        GitHubAuthError: If GitHub rejects the code or cannot be reached.
    """
    try:
        async with httpx.AsyncClient(timeout=REQUEST_TIMEOUT) as client:
            response = await client.post(
                ACCESS_TOKEN_URL,
                data={
                    "client_id": settings.github_client_id,
                    "client_secret": settings.github_client_secret,
                    "code": code,
                    "redirect_uri": settings.github_redirect_uri,
                },
                headers={"Accept": "application/json"},
            )
    except httpx.RequestError as e:
        logger.warning("github_oauth_failed", extra={"step": "token", "error": str(e)})
        raise GitHubAuthError("Could not reach GitHub") from e

    payload = response.json() if response.is_success else {}
    access_token = payload.get("access_token")
    if not access_token:
        # GitHub reports a bad code as 200 with an `error` field
        error = payload.get("error_description") or payload.get("error") or f"HTTP {response.status_code}"
        logger.warning("github_oauth_failed", extra={"step": "token", "error": error})
        raise GitHubAuthError(f"GitHub rejected the authorization code: {error}")
    return access_token


async def fetch_user(access_token: str) -> GitHubUser:
    """
    Fetch the profile of the user who owns the access token.

    Raises:
        GitHubAuthError: If the request fails.
    """
    try:
        async with httpx.AsyncClient(base_url=API_BASE_URL, timeout=REQUEST_TIMEOUT) as client:
            response = await client.get(
                "/user",
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Accept": "application/vnd.github+json",
                },
            )
            response.raise_for_status()
    except httpx.HTTPError as e:
        logger.warning("github_oauth_failed", extra={"step": "user", "error": str(e)})
        raise GitHubAuthError("Could not load the GitHub profile") from e

    data = response.json()
    return GitHubUser(
        id=int(data["id"]),
        login=data["login"],
        name=data.get("name"),
        email=data.get("email"),
        avatar_url=data.get("avatar_url"),
    )
