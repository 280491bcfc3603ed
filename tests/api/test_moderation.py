"""Tests for moderation endpoints."""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.api.conftest import FAKE_UUID, create_user2_client

SUBMISSION = {
    'title': 'Needs review',
    'description': 'A submission waiting for a moderator.',
    'content': 'Content of the submission that needs review.',
    'tags': ['review'],
}


async def test_pending_lists_oldest_first(client: AsyncClient) -> None:
    first = (await client.post('/prompts/', json={**SUBMISSION, 'title': 'First submission'})).json()
    second = (await client.post('/prompts/', json={**SUBMISSION, 'title': 'Second submission'})).json()

    response = await client.get('/moderation/pending', params={'type': 'PROMPT'})
    assert response.status_code == 200
    data = response.json()
    assert data['total'] == 2
    assert [item['id'] for item in data['items']] == [first['id'], second['id']]
    assert all(item['type'] == 'PROMPT' for item in data['items'])
    assert all(item['status'] == 'PENDING' for item in data['items'])


async def test_approve_and_feature(client: AsyncClient) -> None:
    created = (await client.post('/prompts/', json=SUBMISSION)).json()

    response = await client.post(
        f"/moderation/PROMPT/{created['id']}", json={'status': 'APPROVED', 'featured': True},
    )
    assert response.status_code == 200
    data = response.json()
    assert data['status'] == 'APPROVED'
    assert data['featured'] is True
    assert data['slug'] == created['slug']

    pending = (await client.get('/moderation/pending', params={'type': 'PROMPT'})).json()
    assert pending['total'] == 0


async def test_cannot_feature_unapproved(client: AsyncClient) -> None:
    created = (await client.post('/prompts/', json=SUBMISSION)).json()
    response = await client.post(
        f"/moderation/PROMPT/{created['id']}", json={'status': 'REJECTED', 'featured': True},
    )
    assert response.status_code == 400


async def test_moderate_unknown_item_returns_404(client: AsyncClient) -> None:
    response = await client.post(f'/moderation/TOOL/{FAKE_UUID}', json={'status': 'APPROVED'})
    assert response.status_code == 404


async def test_moderation_requires_admin(db_session: AsyncSession) -> None:
    async with create_user2_client(db_session, 5001, 'regular') as regular:
        response = await regular.get('/moderation/pending', params={'type': 'PROMPT'})
        assert response.status_code == 403
        response = await regular.post(f'/moderation/PROMPT/{FAKE_UUID}', json={'status': 'APPROVED'})
        assert response.status_code == 403
