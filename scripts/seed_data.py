"""Seed script to populate the local dev database with approved sample content.

Usage:
    PYTHONPATH=src python scripts/seed_data.py populate
    PYTHONPATH=src python scripts/seed_data.py populate --force
    PYTHONPATH=src python scripts/seed_data.py clear
"""

import argparse
import asyncio

from dotenv import load_dotenv
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

load_dotenv()

from core.auth import DEV_USER_GITHUB_ID, get_or_create_dev_user  # noqa: E402
from core.config import get_settings  # noqa: E402
from models import (  # noqa: E402
    Agent,
    CodeRecipe,
    Collection,
    ContentStatus,
    Difficulty,
    Favorite,
    Instruction,
    LearningPath,
    McpServer,
    MigrationGuide,
    Prompt,
    Tool,
    User,
    Vote,
    Workflow,
)
from services.tag_service import get_or_create_tags  # noqa: E402
from services.utils import slugify  # noqa: E402

CATALOG_MODELS = [
    Prompt, Workflow, Tool, McpServer, Instruction, Agent, CodeRecipe, MigrationGuide, LearningPath,
]

# ---------------------------------------------------------------------------
# Sample content, keyed by model
# ---------------------------------------------------------------------------

SEED_CONTENT = {
    Prompt: [
        {
            'title': 'Explain This Code',
            'description': 'Ask the assistant for a line-by-line explanation of a snippet.',
            'content': (
                'Explain the following code step by step. For each block, describe what it '
                'does, why it is written that way, and any edge cases it misses.\n\n{{code}}'
            ),
            'tags': ['category:learning', 'explanation'],
            'featured': True,
        },
        {
            'title': 'Write Unit Tests',
            'description': 'Generate focused unit tests for a function, including edge cases.',
            'content': (
                'Write unit tests for the function below using the project\'s test framework. '
                'Cover the happy path, boundary values and error handling.\n\n{{code}}'
            ),
            'tags': ['category:testing', 'unit-tests'],
            'difficulty': Difficulty.INTERMEDIATE,
        },
    ],
    Workflow: [
        {
            'title': 'Review a Pull Request',
            'description': 'A repeatable sequence for reviewing a pull request with an assistant.',
            'content': 'Use the assistant as a second reviewer before approving any change.',
            'steps': [
                'Summarize the diff and its intent.',
                'Ask for risky changes and missing tests.',
                'Check the suggestions against the codebase conventions.',
            ],
            'tags': ['category:code-review', 'pull-requests'],
        },
    ],
    Tool: [
        {
            'title': 'Ripgrep',
            'name': 'ripgrep',
            'description': 'Recursively search directories for a regex pattern, fast.',
            'short_description': 'Line-oriented search tool that respects .gitignore.',
            'url': 'https://github.com/BurntSushi/ripgrep',
            'tags': ['category:cli', 'search'],
            'featured': True,
        },
    ],
    McpServer: [
        {
            'title': 'Filesystem MCP Server',
            'name': 'filesystem',
            'description': 'Gives assistants controlled read and write access to local files.',
            'short_description': 'Secure file operations with configurable access controls.',
            'github_url': 'https://github.com/modelcontextprotocol/servers',
            'category': 'Developer Tools',
            'install_command': 'npx -y @modelcontextprotocol/server-filesystem ~/projects',
            'tags': ['filesystem', 'files'],
            'featured': True,
        },
    ],
    Instruction: [
        {
            'title': 'Python Style Guide',
            'description': 'Repository instructions for idiomatic, typed Python code.',
            'content': (
                '- Use type hints on public functions.\n'
                '- Prefer pathlib over os.path.\n'
                '- Raise specific exceptions and never use a bare except.'
            ),
            'file_pattern': '**/*.py',
            'language': 'python',
            'scope': 'repository',
            'tags': ['python', 'style'],
        },
    ],
    Agent: [
        {
            'title': 'Test Writer',
            'description': 'An agent that reads a module and writes missing tests for it.',
            'content': (
                'You are a test engineer. Read the target module, list untested behaviour, '
                'then write tests for each item using the existing fixtures.'
            ),
            'category': 'testing',
            'mcp_servers': ['filesystem'],
            'languages': ['python', 'typescript'],
            'tags': ['category:testing', 'automation'],
            'difficulty': Difficulty.ADVANCED,
        },
    ],
    CodeRecipe: [
        {
            'title': 'Retry With Exponential Backoff',
            'description': 'Wrap a flaky network call in retries with jittered backoff.',
            'content': 'A small helper for retrying idempotent calls that fail transiently.',
            'language': 'python',
            'code_sample': (
                'for attempt in range(5):\n'
                '    try:\n'
                '        return call()\n'
                '    except TimeoutError:\n'
                '        time.sleep(2 ** attempt + random.random())\n'
            ),
            'tags': ['python', 'resilience'],
            'difficulty': Difficulty.INTERMEDIATE,
        },
    ],
    MigrationGuide: [
        {
            'title': 'Migrate From Flask to FastAPI',
            'description': 'Move a Flask JSON API to FastAPI with an assistant doing the rote work.',
            'from_stack': 'Flask',
            'to_stack': 'FastAPI',
            'category': 'web',
            'overview': 'Port routes one blueprint at a time and keep both apps running.',
            'steps': [
                'Generate Pydantic models from existing request payloads.',
                'Port one blueprint to an APIRouter.',
                'Move shared state into dependencies.',
            ],
            'risks': ['Sync database drivers block the event loop.'],
            'related_prompt_slugs': ['explain-this-code'],
            'related_tool_slugs': ['ripgrep'],
            'tags': ['python', 'web'],
            'difficulty': Difficulty.INTERMEDIATE,
        },
    ],
    LearningPath: [
        {
            'title': 'Getting Started With AI Pair Programming',
            'description': 'A first week of working alongside a coding assistant.',
            'audience': 'Developers new to coding assistants',
            'goals': ['Write better prompts', 'Review generated code safely'],
            'steps': ['Read the prompts', 'Try the review workflow', 'Install a tool'],
            'prompt_slugs': ['explain-this-code', 'write-unit-tests'],
            'workflow_slugs': ['review-a-pull-request'],
            'tool_slugs': ['ripgrep'],
            'migration_slugs': ['migrate-from-flask-to-fastapi'],
            'tags': ['beginner', 'onboarding'],
        },
    ],
}


async def create_content(session: AsyncSession, user: User) -> None:
    """Insert every seed item as APPROVED content authored by the dev user."""
    for model, items in SEED_CONTENT.items():
        for data in items:
            fields = dict(data)
            tag_names = fields.pop('tags')
            entity = model(
                **fields,
                slug=slugify(fields['title']),
                status=ContentStatus.APPROVED,
                author_id=user.id,
            )
            entity.tag_objects = await get_or_create_tags(session, tag_names)
            session.add(entity)
        await session.flush()
        print(f'  Created {len(items)} {model.__tablename__}')


async def count_content(session: AsyncSession, user: User) -> int:
    total = 0
    for model in CATALOG_MODELS:
        total += (await session.execute(
            select(func.count()).select_from(model).where(model.author_id == user.id),
        )).scalar_one()
    return total


async def clear_data(session: AsyncSession) -> None:
    """Delete the dev user's content, votes, favorites and collections."""
    result = await session.execute(select(User).where(User.github_id == DEV_USER_GITHUB_ID))
    user = result.scalar_one_or_none()
    if user is None:
        print('No dev user found, nothing to clear.')
        return

    print(f'Clearing data for dev user {user.id}...')
    content_count = await count_content(session, user)
    for model in CATALOG_MODELS:
        await session.execute(delete(model).where(model.author_id == user.id))
    await session.execute(delete(Vote).where(Vote.user_id == user.id))
    await session.execute(delete(Favorite).where(Favorite.user_id == user.id))
    await session.execute(delete(Collection).where(Collection.user_id == user.id))
    await session.flush()

    print(f'  Deleted {content_count} catalog items')
    print('Clear complete.')


async def populate(force: bool = False) -> None:
    """Populate the database with seed data."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            user = await get_or_create_dev_user(session)
            print(f'  Using dev user: {user.id}')

            if await count_content(session, user) > 0:
                if not force:
                    print(
                        'Dev user already has content. '
                        'Use --force to clear and re-populate.',
                    )
                    return
                print('Existing data found, clearing first (--force)...')
                await clear_data(session)

            print('Populating seed data...')
            await create_content(session, user)
            await session.commit()
            print('Seed data created successfully.')
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


async def clear() -> None:
    """Clear all dev user data."""
    settings = get_settings()
    engine = create_async_engine(settings.database_url, echo=False)
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            await clear_data(session)
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await engine.dispose()


def main() -> None:
    """CLI entry point."""
    settings = get_settings()
    if not settings.dev_mode:
        print(
            'ERROR: Seed script requires DEV_MODE=true.\n'
            'This script modifies data directly and must only run against a local dev database.',
        )
        raise SystemExit(1)

    parser = argparse.ArgumentParser(description='Seed the dev database with sample content.')
    subparsers = parser.add_subparsers(dest='command', required=True)

    populate_parser = subparsers.add_parser('populate', help='Populate database with sample content')
    populate_parser.add_argument(
        '--force', action='store_true',
        help='Clear existing data before populating',
    )

    subparsers.add_parser('clear', help='Remove all dev user data')

    args = parser.parse_args()

    if args.command == 'populate':
        asyncio.run(populate(force=args.force))
    elif args.command == 'clear':
        asyncio.run(clear())


if __name__ == '__main__':
    main()
