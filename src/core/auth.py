"""
Authentication: bearer personal access tokens, GitHub OAuth state, DEV_MODE.

Every authenticated request is also counted against the caller's rate limit.
"""
import logging
import secrets
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import Settings, get_settings
from core.rate_limit_config import AuthType, RateLimitExceededError, get_operation_type
from core.rate_limiter import check_rate_limit
from db.session import get_async_session
from models.enums import UserRole
from models.user import User
from services import token_service

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# GitHub ids are positive, so 0 can never collide with a real account
DEV_USER_GITHUB_ID = 0

OAUTH_STATE_ALGORITHM = "HS256"
OAUTH_STATE_TTL = timedelta(minutes=10)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_or_create_dev_user(db: AsyncSession) -> User:
    """
    The local development user used in DEV_MODE (an admin).

    Concurrent first requests may both try to insert it; the loser re-reads
    the row the winner created.
    """
    query = select(User).where(User.github_id == DEV_USER_GITHUB_ID)
    user = (await db.execute(query)).scalar_one_or_none()
    if user is not None:
        return user

    user = User(
        github_id=DEV_USER_GITHUB_ID,
        login="dev",
        name="Local Developer",
        email="dev@localhost",
        role=UserRole.ADMIN,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        # Runs before any other work in the request, so rolling back loses nothing
        await db.rollback()
        user = (await db.execute(query)).scalar_one()
    return user


async def validate_pat(db: AsyncSession, token: str) -> tuple[User, AuthType]:
    """
    Resolve a bearer token to its user.

    Returns:
        Tuple of (user, auth type). Tokens issued by the GitHub login count as
        GITHUB, tokens the user created as PAT.

    Raises:
        HTTPException: 401 if the token is unknown, expired or orphaned.
    """
    api_token = await token_service.validate_token(db, token)
    if api_token is None:
        raise _unauthorized("Invalid or expired token")

    user = await db.get(User, api_token.user_id)
    if user is None:
        raise _unauthorized("User not found")

    auth_type = AuthType.GITHUB if api_token.issued_at_login else AuthType.PAT
    return user, auth_type


async def _enforce_rate_limit(request: Request, user: User, auth_type: AuthType) -> None:
    """Count the request and expose the result to RateLimitHeadersMiddleware."""
    operation_type = get_operation_type(request.method, request.url.path)
    result = await check_rate_limit(user.id, auth_type, operation_type)
    if not result.allowed:
        raise RateLimitExceededError(result)
    request.state.rate_limit_info = {
        "limit": result.limit,
        "remaining": result.remaining,
        "reset": result.reset,
    }


async def _authenticate(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
    db: AsyncSession,
    settings: Settings,
) -> User | None:
    """The calling user, or None when no credentials were sent."""
    if settings.dev_mode:
        return await get_or_create_dev_user(db)
    if credentials is None:
        return None

    token = credentials.credentials
    if not token.startswith(token_service.TOKEN_PREFIX):
        raise _unauthorized("Invalid token")

    user, auth_type = await validate_pat(db, token)
    await _enforce_rate_limit(request, user, auth_type)
    return user


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User:
    """
    Dependency returning the authenticated user.

    In DEV_MODE authentication is bypassed and the local dev user is returned.
    """
    user = await _authenticate(request, credentials, db, settings)
    if user is None:
        raise _unauthorized("Not authenticated")
    return user


async def get_current_user_optional(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> User | None:
    """Like get_current_user, but anonymous callers get None instead of a 401."""
    return await _authenticate(request, credentials, db, settings)


async def require_admin(user: User = Depends(get_current_user)) -> User:
    """Dependency restricting a route to administrators."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator access required",
        )
    return user


def create_oauth_state(settings: Settings) -> str:
    """Signed, short-lived `state` value for the GitHub authorize redirect."""
    now = datetime.now(UTC)
    payload = {
        "nonce": secrets.token_urlsafe(16),
        "iat": now,
        "exp": now + OAUTH_STATE_TTL,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=OAUTH_STATE_ALGORITHM)


def verify_oauth_state(state: str, settings: Settings) -> None:
    """
    Check a `state` value returned by GitHub.

    Raises:
        HTTPException: 400 if the state is missing, forged or expired.
    """
    try:
        jwt.decode(state, settings.secret_key, algorithms=[OAUTH_STATE_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Login expired, please try again",
        ) from e
    except jwt.PyJWTError as e:
        logger.warning("github_oauth_failed", extra={"step": "state", "error": str(e)})
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid OAuth state",
        ) from e
