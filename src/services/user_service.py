"""Service layer for users."""
import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from services.github_client import GitHubUser

logger = logging.getLogger(__name__)


async def get_by_github_id(db: AsyncSession, github_id: int) -> User | None:
    """User linked to a GitHub account, or None."""
    result = await db.execute(select(User).where(User.github_id == github_id))
    return result.scalar_one_or_none()


def _apply_profile(user: User, profile: GitHubUser) -> None:
    user.login = profile.login
    user.name = profile.name
    user.avatar_url = profile.avatar_url
    if profile.email:
        user.email = profile.email


async def get_or_create_from_github(db: AsyncSession, profile: GitHubUser) -> User:
    """
    Find the user for a GitHub account, creating it on first login.

    The stored profile (login, name, avatar, email) is refreshed on every
    login. Two first logins racing on the unique github_id are resolved by
    re-reading the row the other request inserted.
    """
    user = await get_by_github_id(db, profile.id)
    if user is not None:
        _apply_profile(user, profile)
        await db.flush()
        return user

    user = User(github_id=profile.id, login=profile.login)
    _apply_profile(user, profile)
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Called first thing in the login request, so the rollback discards nothing else
        await db.rollback()
        user = await get_by_github_id(db, profile.id)
        if user is None:
            raise
        _apply_profile(user, profile)
        await db.flush()
        return user

    logger.info("user_created", extra={"user_id": str(user.id), "login": profile.login})
    return user
