"""Tests for vote endpoints."""
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from models.enums import TargetType
from models.user import User
from tests.api.conftest import FAKE_UUID, create_user2_client


async def test_cast_vote_creates_then_updates(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    """The first vote returns 201; voting again changes the value and returns 200."""
    prompt = await make_approved(TargetType.PROMPT, test_user)
    body = {'target_type': 'PROMPT', 'target_id': str(prompt.id), 'value': 1}

    response = await client.post('/votes/', json=body)
    assert response.status_code == 201
    assert response.json()['value'] == 1

    response = await client.post('/votes/', json={**body, 'value': -1})
    assert response.status_code == 200
    assert response.json()['value'] == -1

    summary = await client.get(
        '/votes/summary', params={'target_type': 'PROMPT', 'target_id': str(prompt.id)},
    )
    assert summary.json() == {'vote_count': -1, 'upvotes': 0, 'downvotes': 1}


async def test_vote_count_is_sum_of_one_vote_per_user(
    client: AsyncClient,
    db_session: AsyncSession,
    test_user: User,
    make_approved,  # noqa: ANN001
) -> None:
    """Each user contributes at most one vote; the item's vote_count is their sum."""
    prompt = await make_approved(TargetType.PROMPT, test_user)
    body = {'target_type': 'PROMPT', 'target_id': str(prompt.id), 'value': 1}

    await client.post('/votes/', json=body)
    await client.post('/votes/', json=body)
    async with create_user2_client(db_session, 3001, 'voter2') as voter2:
        await voter2.post('/votes/', json=body)
    async with create_user2_client(db_session, 3002, 'voter3') as voter3:
        await voter3.post('/votes/', json={**body, 'value': -1})

    detail = await client.get(f'/prompts/{prompt.slug}')
    assert detail.json()['vote_count'] == 1

    summary = await client.get(
        '/votes/summary', params={'target_type': 'PROMPT', 'target_id': str(prompt.id)},
    )
    assert summary.json() == {'vote_count': 1, 'upvotes': 2, 'downvotes': 1}


async def test_get_my_vote(client: AsyncClient, test_user: User, make_approved) -> None:  # noqa: ANN001
    prompt = await make_approved(TargetType.PROMPT, test_user)
    params = {'target_type': 'PROMPT', 'target_id': str(prompt.id)}

    response = await client.get('/votes/', params=params)
    assert response.status_code == 200
    assert response.json() is None

    await client.post('/votes/', json={**params, 'value': 1})
    response = await client.get('/votes/', params=params)
    assert response.json() == {'value': 1}


async def test_remove_vote_always_succeeds(
    client: AsyncClient, test_user: User, make_approved,  # noqa: ANN001
) -> None:
    prompt = await make_approved(TargetType.PROMPT, test_user)
    params = {'target_type': 'PROMPT', 'target_id': str(prompt.id)}
    await client.post('/votes/', json={**params, 'value': 1})

    response = await client.delete('/votes/', params=params)
    assert response.status_code == 200
    assert response.json() == {'success': True}
    assert (await client.get('/votes/', params=params)).json() is None

    # Removing a vote that no longer exists is not an error
    response = await client.delete('/votes/', params=params)
    assert response.status_code == 200


async def test_vote_rejects_invalid_value(client: AsyncClient, test_user: User, make_approved) -> None:  # noqa: ANN001
    prompt = await make_approved(TargetType.PROMPT, test_user)
    response = await client.post(
        '/votes/', json={'target_type': 'PROMPT', 'target_id': str(prompt.id), 'value': 2},
    )
    assert response.status_code == 422


async def test_vote_on_missing_target_returns_404(client: AsyncClient) -> None:
    response = await client.post(
        '/votes/', json={'target_type': 'TOOL', 'target_id': FAKE_UUID, 'value': 1},
    )
    assert response.status_code == 404


async def test_vote_on_pending_target_returns_404(client: AsyncClient) -> None:
    """Votes can only be cast on approved content."""
    created = (await client.post('/prompts/', json={
        'title': 'Pending prompt',
        'description': 'Waiting for a moderator to review it.',
        'content': 'This prompt has not been approved yet.',
        'tags': ['pending'],
    })).json()
    response = await client.post(
        '/votes/', json={'target_type': 'PROMPT', 'target_id': created['id'], 'value': 1},
    )
    assert response.status_code == 404


async def test_vote_unknown_target_type_rejected(client: AsyncClient) -> None:
    response = await client.post(
        '/votes/', json={'target_type': 'BOOKMARK', 'target_id': FAKE_UUID, 'value': 1},
    )
    assert response.status_code == 422
