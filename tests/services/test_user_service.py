"""Tests for user service."""
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import UserRole
from services import user_service
from services.github_client import GitHubUser


def profile(**overrides) -> GitHubUser:  # noqa: ANN003
    data = {
        'id': 583231,
        'login': 'octocat',
        'name': 'The Octocat',
        'email': None,
        'avatar_url': 'https://avatars.githubusercontent.com/u/583231',
    }
    data.update(overrides)
    return GitHubUser(**data)


async def test_first_login_creates_user(db_session: AsyncSession) -> None:
    user = await user_service.get_or_create_from_github(db_session, profile())
    assert user.id is not None
    assert user.github_id == 583231
    assert user.login == 'octocat'
    assert user.role == UserRole.USER
    assert user.avatar_url.endswith('/583231')


async def test_later_login_refreshes_profile(db_session: AsyncSession) -> None:
    created = await user_service.get_or_create_from_github(db_session, profile())
    updated = await user_service.get_or_create_from_github(
        db_session, profile(login='octocat-renamed', email='octo@example.com'),
    )
    assert updated.id == created.id
    assert updated.login == 'octocat-renamed'
    assert updated.email == 'octo@example.com'


async def test_get_by_github_id_missing(db_session: AsyncSession) -> None:
    assert await user_service.get_by_github_id(db_session, 1) is None
