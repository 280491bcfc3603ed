"""
Contribute content by opening a pull request on the configured GitHub repo.

The submission is rendered as a markdown file with YAML front matter, then
committed to a fresh branch off the base branch, and a pull request is
opened from that branch.
"""
import base64
import logging
import secrets
from dataclasses import dataclass

import httpx
import yaml

from core.config import Settings
from models.user import User
from schemas.contribution import ContributionCreate
from services.exceptions import ContributionError, ContributionNotConfiguredError
from services.registry import SECTION_NAMES
from services.utils import slugify

logger = logging.getLogger(__name__)

API_BASE_URL = "https://api.github.com"
REQUEST_TIMEOUT = 15.0


@dataclass
class ContributionResult:
    """Where the contribution landed."""

    pr_url: str
    branch: str
    path: str


def render_contribution(data: ContributionCreate, author: User) -> str:
    """
    Markdown file for a contribution: YAML front matter followed by the content.

    `extra` keys are appended to the front matter but never override the
    standard keys.
    """
    metadata = {
        "title": data.title,
        "description": data.description,
        "type": data.type.value.lower(),
        "difficulty": data.difficulty.value.lower(),
        "tags": data.tags,
        "author": author.login,
    }
    for key, value in data.extra.items():
        metadata.setdefault(key, value)

    frontmatter = yaml.safe_dump(
        metadata,
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    ).strip()
    return f"---\n{frontmatter}\n---\n\n{data.content.strip()}\n"


def contribution_path(data: ContributionCreate) -> str:
    """Repository path of the contributed file, e.g. `content/prompts/my-prompt.md`."""
    return f"content/{SECTION_NAMES[data.type]}/{slugify(data.title) or 'untitled'}.md"


async def _call(
    client: httpx.AsyncClient,
    step: str,
    method: str,
    url: str,
    json: dict | None = None,
) -> dict:
    """
    Call the GitHub API for one step of the flow.

    Raises:
        ContributionError: On a transport error or a non-2xx response.
    """
    try:
        response = await client.request(method, url, json=json)
    except httpx.RequestError as e:
        logger.warning("contribution_failed", extra={"step": step, "error": str(e)})
        raise ContributionError(step, 0, str(e)) from e
    if not response.is_success:
        try:
            message = response.json().get("message", response.text)
        except ValueError:
            message = response.text
        logger.warning(
            "contribution_failed",
            extra={"step": step, "status_code": response.status_code, "error": message},
        )
        raise ContributionError(step, response.status_code, message)
    return response.json()


async def create_contribution_pr(
    settings: Settings,
    author: User,
    data: ContributionCreate,
) -> ContributionResult:
    """
    Open a pull request adding the contribution to the content repository.

    Raises:
        ContributionNotConfiguredError: If no repository or token is configured.
        ContributionError: If any GitHub API call fails.
    """
    if not settings.contributions_enabled:
        raise ContributionNotConfiguredError()

    repo = settings.contribution_repo
    base = settings.contribution_base_branch
    path = contribution_path(data)
    slug = path.rsplit("/", 1)[-1].removesuffix(".md")
    branch = f"contrib/{SECTION_NAMES[data.type]}-{slug}-{secrets.token_hex(3)}"
    body = render_contribution(data, author)

    headers = {
        "Authorization": f"Bearer {settings.contribution_token}",
        "Accept": "application/vnd.github+json",
    }
    async with httpx.AsyncClient(
        base_url=API_BASE_URL, headers=headers, timeout=REQUEST_TIMEOUT,
    ) as client:
        base_ref = await _call(client, "get_base_ref", "GET", f"/repos/{repo}/git/ref/heads/{base}")
        await _call(
            client, "create_branch", "POST", f"/repos/{repo}/git/refs",
            json={"ref": f"refs/heads/{branch}", "sha": base_ref["object"]["sha"]},
        )
        await _call(
            client, "create_file", "PUT", f"/repos/{repo}/contents/{path}",
            json={
                "message": f"Add {data.type.value.lower()}: {data.title}",
                "content": base64.b64encode(body.encode()).decode(),
                "branch": branch,
            },
        )
        pull = await _call(
            client, "create_pull_request", "POST", f"/repos/{repo}/pulls",
            json={
                "title": f"Add {data.type.value.lower()}: {data.title}",
                "head": branch,
                "base": base,
                "body": (
                    f"{data.description}\n\n"
                    f"Submitted by @{author.login} via {settings.site_url}."
                ),
            },
        )

    logger.info(
        "contribution_pr_created",
        extra={"pr_url": pull["html_url"], "branch": branch, "user_id": str(author.id)},
    )
    return ContributionResult(pr_url=pull["html_url"], branch=branch, path=path)
