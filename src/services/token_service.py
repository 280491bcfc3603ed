"""Service layer for personal access token (PAT) operations."""
import hashlib
import secrets
from datetime import UTC, datetime, timedelta
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_token import ApiToken
from schemas.token import TokenCreate

TOKEN_PREFIX = "cp_"


def generate_token() -> tuple[str, str, str]:
    """
    Generate a new random token.

    Returns:
        Tuple of (plaintext_token, token_hash, token_prefix). The plaintext is
        shown to the user once and never stored.
    """
    plaintext = f"{TOKEN_PREFIX}{secrets.token_urlsafe(32)}"
    return plaintext, hash_token(plaintext), plaintext[:12]


def hash_token(token: str) -> str:
    """SHA-256 hex digest used to store and look up tokens."""
    return hashlib.sha256(token.encode()).hexdigest()


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    return value if value.tzinfo is not None else value.replace(tzinfo=UTC)


async def create_token(
    db: AsyncSession,
    user_id: UUID,
    data: TokenCreate,
    issued_at_login: bool = False,
) -> tuple[ApiToken, str]:
    """
    Create a token for a user.

    Returns:
        Tuple of (ApiToken, plaintext_token).

    Note:
        Does not commit. The request's session dependency commits at the end.
    """
    plaintext, token_hash, token_prefix = generate_token()

    expires_at = None
    if data.expires_in_days is not None:
        expires_at = datetime.now(UTC) + timedelta(days=data.expires_in_days)

    api_token = ApiToken(
        user_id=user_id,
        name=data.name,
        token_hash=token_hash,
        token_prefix=token_prefix,
        expires_at=expires_at,
        issued_at_login=issued_at_login,
    )
    db.add(api_token)
    await db.flush()
    await db.refresh(api_token)
    return api_token, plaintext


async def get_tokens(db: AsyncSession, user_id: UUID) -> list[ApiToken]:
    """A user's tokens, newest first."""
    result = await db.execute(
        select(ApiToken)
        .where(ApiToken.user_id == user_id)
        .order_by(ApiToken.created_at.desc()),
    )
    return list(result.scalars().all())


async def delete_token(db: AsyncSession, user_id: UUID, token_id: UUID) -> bool:
    """
    Revoke one of the user's tokens.

    Returns:
        True if deleted, False if the user has no token with this id.
    """
    result = await db.execute(
        select(ApiToken).where(ApiToken.id == token_id, ApiToken.user_id == user_id),
    )
    token = result.scalar_one_or_none()
    if token is None:
        return False
    await db.delete(token)
    return True


async def validate_token(db: AsyncSession, plaintext_token: str) -> ApiToken | None:
    """
    Look up a plaintext token by its hash.

    Returns:
        The ApiToken if it exists and has not expired, None otherwise.
        `last_used_at` is updated on success.
    """
    result = await db.execute(
        select(ApiToken).where(ApiToken.token_hash == hash_token(plaintext_token)),
    )
    api_token = result.scalar_one_or_none()
    if api_token is None:
        return None

    now = datetime.now(UTC)
    if api_token.expires_at is not None and now > _as_utc(api_token.expires_at):
        return None

    api_token.last_used_at = now
    await db.flush()
    return api_token
