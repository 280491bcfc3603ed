"""
Render agents and instructions as downloadable markdown files.

Files are rendered from the Jinja2 templates in `templates/`. Every download
is counted on the item.
"""
from dataclasses import dataclass
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import get_settings
from models.agent import Agent
from models.instruction import Instruction
from services.agent_service import agent_service
from services.exceptions import ContentNotFoundError
from services.instruction_service import instruction_service

_jinja_env = Environment(
    loader=FileSystemLoader(Path(__file__).parent / "templates"),
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


@dataclass
class DownloadFile:
    """A rendered file ready to be sent as an attachment."""

    filename: str
    content: str


def _site_url() -> str:
    return get_settings().site_url.rstrip("/")


def render_agent_file(agent: Agent) -> DownloadFile:
    """Render an agent as `<slug>.agent.md`."""
    content = _jinja_env.get_template("agent.md.j2").render(
        title=agent.title,
        description=agent.description,
        category=agent.category,
        slug=agent.slug,
        content=agent.content or "",
        site_url=_site_url(),
    )
    return DownloadFile(filename=f"{agent.slug}.agent.md", content=content)


def render_instruction_file(instruction: Instruction) -> DownloadFile:
    """Render an instruction as `copilot-instructions-<slug>.md`."""
    content = _jinja_env.get_template("instruction.md.j2").render(
        title=instruction.title,
        file_pattern=instruction.file_pattern,
        language=instruction.language,
        framework=instruction.framework,
        slug=instruction.slug,
        content=instruction.content or "",
        site_url=_site_url(),
    )
    return DownloadFile(filename=f"copilot-instructions-{instruction.slug}.md", content=content)


async def download_agent(db: AsyncSession, slug: str) -> DownloadFile:
    """
    Count a download and render the agent file.

    Raises:
        ContentNotFoundError: If no approved agent has this slug.
    """
    agent = await agent_service.get_by_slug(db, slug)
    if agent is None:
        raise ContentNotFoundError(agent_service.entity_name, slug)
    await agent_service.increment_downloads(db, agent.id)
    return render_agent_file(agent)


async def download_instruction(db: AsyncSession, slug: str) -> DownloadFile:
    """
    Count a download and render the instruction file.

    Raises:
        ContentNotFoundError: If no approved instruction has this slug.
    """
    instruction = await instruction_service.get_by_slug(db, slug)
    if instruction is None:
        raise ContentNotFoundError(instruction_service.entity_name, slug)
    await instruction_service.increment_downloads(db, instruction.id)
    return render_instruction_file(instruction)
