"""Tests for personal access token service."""
from datetime import UTC, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from models.user import User
from schemas.token import TokenCreate
from services import token_service


def test_generate_token_format() -> None:
    plaintext, token_hash, prefix = token_service.generate_token()
    assert plaintext.startswith('cp_')
    assert prefix == plaintext[:12]
    assert token_hash == token_service.hash_token(plaintext)
    assert token_hash != plaintext
    assert len(token_hash) == 64


def test_generate_token_unique() -> None:
    assert token_service.generate_token()[0] != token_service.generate_token()[0]


async def test_validate_token_updates_last_used(db_session: AsyncSession, test_user: User) -> None:
    api_token, plaintext = await token_service.create_token(
        db_session, test_user.id, TokenCreate(name='cli'),
    )
    assert api_token.last_used_at is None

    validated = await token_service.validate_token(db_session, plaintext)
    assert validated is not None
    assert validated.id == api_token.id
    assert validated.last_used_at is not None


async def test_validate_token_rejects_expired(db_session: AsyncSession, test_user: User) -> None:
    api_token, plaintext = await token_service.create_token(
        db_session, test_user.id, TokenCreate(name='short', expires_in_days=1),
    )
    api_token.expires_at = datetime.now(UTC) - timedelta(seconds=1)
    await db_session.flush()

    assert await token_service.validate_token(db_session, plaintext) is None


async def test_validate_token_unknown(db_session: AsyncSession) -> None:
    assert await token_service.validate_token(db_session, 'cp_nope') is None


async def test_delete_token_scoped_to_owner(db_session: AsyncSession, test_user: User) -> None:
    other = User(github_id=2002, login='other')
    db_session.add(other)
    await db_session.flush()
    api_token, _ = await token_service.create_token(db_session, test_user.id, TokenCreate(name='x'))

    assert await token_service.delete_token(db_session, other.id, api_token.id) is False
    assert await token_service.delete_token(db_session, test_user.id, api_token.id) is True
    await db_session.flush()
    assert await token_service.get_tokens(db_session, test_user.id) == []
