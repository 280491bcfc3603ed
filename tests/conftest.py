"""
Pytest fixtures for testing.

Tests run against in-memory SQLite by default. Set TEST_DATABASE=postgres to
run them against a PostgreSQL container instead.
"""
import os
from collections.abc import AsyncGenerator, Generator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

USE_POSTGRES = os.environ.get("TEST_DATABASE") == "postgres"
SQLITE_URL = "sqlite+aiosqlite://"

# Must be set before any app import triggers Settings validation.
# Tests run in dev mode (bypasses auth) regardless of local .env
os.environ["DATABASE_URL"] = SQLITE_URL
os.environ["DEV_MODE"] = "true"
os.environ["REDIS_ENABLED"] = "false"

from models import Base, ContentStatus, TargetType, User  # noqa: E402


@pytest.fixture(scope="session")
def database_url() -> Generator[str]:
    """SQLite in memory, or the URL of a PostgreSQL container for the session."""
    if not USE_POSTGRES:
        yield SQLITE_URL
        return

    from testcontainers.postgres import PostgresContainer

    with PostgresContainer("postgres:16", driver="asyncpg") as postgres:
        url = postgres.get_connection_url()
        os.environ["DATABASE_URL"] = url
        yield url


@pytest.fixture
async def async_engine(database_url: str) -> AsyncGenerator[AsyncEngine]:
    """Create an async engine with a fresh schema."""
    if database_url.startswith("sqlite"):
        # One shared connection, so every session sees the same in-memory database
        engine = create_async_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """
    Create an async session for one test.

    Nothing is committed; the schema is rebuilt for the next test.
    """
    session_factory = async_sessionmaker(
        bind=async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """Create a test client with database session override."""
    # Clear the settings cache so it picks up the environment set above
    from core.config import get_settings

    get_settings.cache_clear()

    from api.main import app
    from db.session import get_async_session

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    app.dependency_overrides[get_async_session] = override_get_async_session

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A regular (non-admin) user."""
    user = User(github_id=1001, login="octocat", name="The Octocat")
    db_session.add(user)
    await db_session.flush()
    return user


@pytest.fixture
def make_approved(db_session: AsyncSession):  # noqa: ANN201
    """
    Factory creating an APPROVED catalog item through its service.

    Usage: `prompt = await make_approved(TargetType.PROMPT, author, title=...)`.
    """
    from schemas import content
    from services.registry import get_catalog_service

    create_schemas = {
        TargetType.PROMPT: content.PromptCreate,
        TargetType.WORKFLOW: content.WorkflowCreate,
        TargetType.TOOL: content.ToolCreate,
        TargetType.MCP: content.McpServerCreate,
        TargetType.INSTRUCTION: content.InstructionCreate,
        TargetType.AGENT: content.AgentCreate,
        TargetType.RECIPE: content.CodeRecipeCreate,
        TargetType.MIGRATION: content.MigrationGuideCreate,
        TargetType.PATH: content.LearningPathCreate,
    }

    async def _make(target_type, author: User, featured: bool = False, **fields):  # noqa: ANN001, ANN202
        service = get_catalog_service(target_type)
        payload = {
            "title": "Sample item",
            "description": "A sample item used by the tests.",
            "content": "Sample content long enough to pass validation.",
            "tags": ["sample"],
        }
        payload.update(fields)
        entity = await service.create(db_session, author, create_schemas[target_type](**payload))
        return await service.set_status(
            db_session, entity.id, ContentStatus.APPROVED, featured=featured,
        )

    return _make
