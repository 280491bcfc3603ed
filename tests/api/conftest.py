"""Shared fixtures for API tests."""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from api.main import app
from core.auth import DEV_USER_GITHUB_ID
from core.config import Settings, get_settings
from db.session import get_async_session
from models.user import User
from schemas.token import TokenCreate
from services.token_service import create_token


@asynccontextmanager
async def create_user2_client(
    db_session: AsyncSession,
    github_id: int,
    login: str,
    settings_overrides: dict | None = None,
) -> AsyncGenerator[AsyncClient]:
    """
    Create an AsyncClient authenticated as a second, non-admin user via PAT.

    Overrides FastAPI dependencies to disable dev_mode and restores the previous
    overrides on exit, so the dev-mode `client` fixture keeps working afterwards.
    """
    user2 = User(github_id=github_id, login=login)
    db_session.add(user2)
    await db_session.flush()

    _, user2_token = await create_token(
        db_session, user2.id, TokenCreate(name='Test Token'),
    )
    await db_session.flush()

    get_settings.cache_clear()
    previous_overrides = dict(app.dependency_overrides)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return Settings(
            database_url='sqlite+aiosqlite://',
            dev_mode=False,
            **(settings_overrides or {}),
        )

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = override_get_settings

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url='http://test',
            headers={'Authorization': f'Bearer {user2_token}'},
        ) as user2_client:
            yield user2_client
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(previous_overrides)


@asynccontextmanager
async def create_anonymous_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient]:
    """AsyncClient with dev_mode disabled and no credentials."""
    previous_overrides = dict(app.dependency_overrides)

    async def override_get_async_session() -> AsyncGenerator[AsyncSession]:
        yield db_session

    def override_get_settings() -> Settings:
        return Settings(database_url='sqlite+aiosqlite://', dev_mode=False)

    app.dependency_overrides[get_async_session] = override_get_async_session
    app.dependency_overrides[get_settings] = override_get_settings

    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url='http://test',
        ) as anonymous_client:
            yield anonymous_client
    finally:
        app.dependency_overrides.clear()
        app.dependency_overrides.update(previous_overrides)


async def get_dev_user(db_session: AsyncSession) -> User:
    """The DEV_MODE user, created by the first authenticated request."""
    result = await db_session.execute(
        select(User).where(User.github_id == DEV_USER_GITHUB_ID),
    )
    return result.scalar_one()


# Constant for non-existent entity ID
FAKE_UUID = "00000000-0000-0000-0000-000000000000"
