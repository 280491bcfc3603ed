"""
Tests for API token (PAT) endpoints.

Tests cover token creation, listing, deletion, and authentication flow.
"""
from datetime import UTC, datetime, timedelta

from httpx import AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from models.api_token import ApiToken
from models.user import User
from services.token_service import hash_token
from tests.api.conftest import FAKE_UUID, create_user2_client


async def test_create_token(client: AsyncClient, db_session: AsyncSession) -> None:
    """Test creating a new API token returns plaintext and metadata."""
    response = await client.post('/tokens/', json={'name': 'CLI Token'})
    assert response.status_code == 201

    data = response.json()
    assert data['name'] == 'CLI Token'
    assert data['token'].startswith('cp_')
    assert data['token_prefix'] == data['token'][:12]
    assert data['expires_at'] is None

    # Only the hash is stored
    result = await db_session.execute(select(ApiToken).where(ApiToken.name == 'CLI Token'))
    api_token = result.scalar_one()
    assert api_token.token_hash == hash_token(data['token'])
    assert api_token.issued_at_login is False


async def test_create_token_with_expiration(client: AsyncClient) -> None:
    response = await client.post('/tokens/', json={'name': 'Expiring', 'expires_in_days': 30})
    assert response.status_code == 201

    expires_at = datetime.fromisoformat(response.json()['expires_at'].replace('Z', '+00:00'))
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    expected = datetime.now(UTC) + timedelta(days=30)
    assert abs((expires_at - expected).total_seconds()) < 60


async def test_create_token_validates_input(client: AsyncClient) -> None:
    assert (await client.post('/tokens/', json={'name': ''})).status_code == 422
    assert (await client.post(
        '/tokens/', json={'name': 'Too long', 'expires_in_days': 366},
    )).status_code == 422


async def test_list_tokens_hides_plaintext(client: AsyncClient) -> None:
    await client.post('/tokens/', json={'name': 'First'})
    await client.post('/tokens/', json={'name': 'Second'})

    response = await client.get('/tokens/')
    assert response.status_code == 200
    tokens = response.json()
    assert {t['name'] for t in tokens} == {'First', 'Second'}
    assert all('token' not in t for t in tokens)


async def test_delete_token(client: AsyncClient) -> None:
    created = (await client.post('/tokens/', json={'name': 'Disposable'})).json()

    assert (await client.delete(f"/tokens/{created['id']}")).status_code == 204
    assert (await client.get('/tokens/')).json() == []
    assert (await client.delete(f"/tokens/{created['id']}")).status_code == 404


async def test_pat_authenticates_requests(db_session: AsyncSession) -> None:
    async with create_user2_client(db_session, 6001, 'pat-user') as pat_client:
        response = await pat_client.get('/users/me')
    assert response.status_code == 200
    assert response.json()['login'] == 'pat-user'
    assert response.json()['role'] == 'USER'


async def test_revoked_or_expired_token_rejected(db_session: AsyncSession) -> None:
    async with create_user2_client(db_session, 6002, 'expiring-user') as pat_client:
        result = await db_session.execute(
            select(ApiToken).join(User).where(User.login == 'expiring-user'),
        )
        api_token = result.scalar_one()
        api_token.expires_at = datetime.now(UTC) - timedelta(minutes=1)
        await db_session.flush()

        response = await pat_client.get('/users/me')
    assert response.status_code == 401


async def test_malformed_token_rejected(db_session: AsyncSession) -> None:
    async with create_user2_client(db_session, 6003, 'someone') as pat_client:
        response = await pat_client.get(
            '/users/me', headers={'Authorization': 'Bearer not-a-real-token'},
        )
        unknown = await pat_client.get(
            '/users/me', headers={'Authorization': 'Bearer cp_unknown'},
        )
    assert response.status_code == 401
    assert unknown.status_code == 401


async def test_other_users_token_cannot_be_deleted(
    client: AsyncClient, db_session: AsyncSession,
) -> None:
    created = (await client.post('/tokens/', json={'name': 'Dev token'})).json()
    async with create_user2_client(db_session, 6004, 'other') as other_client:
        response = await other_client.delete(f"/tokens/{created['id']}")
        missing = await other_client.delete(f'/tokens/{FAKE_UUID}')
    assert response.status_code == 404
    assert missing.status_code == 404
