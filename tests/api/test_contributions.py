"""Tests for the pull request contribution endpoint."""
import base64
import json
from collections.abc import Iterator

import httpx
import pytest
import respx
from httpx import AsyncClient

from api.main import app
from core.config import Settings, get_settings

CONTRIBUTION = {
    'type': 'PROMPT',
    'title': 'Summarize a Diff',
    'description': 'Ask for a short summary of a diff.',
    'content': 'Summarize this diff in three bullet points.',
    'tags': ['git'],
    'extra': {'category': 'review'},
}

REPO = 'octo-org/directory-content'


@pytest.fixture
def contributions_enabled(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    settings = Settings(
        database_url='sqlite+aiosqlite://',
        dev_mode=True,
        contribution_repo=REPO,
        contribution_token='ghp_test',
    )
    monkeypatch.setitem(app.dependency_overrides, get_settings, lambda: settings)
    yield


async def test__contribution__not_configured_returns_503(client: AsyncClient) -> None:
    response = await client.post('/contributions/', json=CONTRIBUTION)
    assert response.status_code == 503


async def test__contribution__opens_pull_request(
    client: AsyncClient, contributions_enabled: None,
) -> None:
    with respx.mock(base_url='https://api.github.com') as respx_mock:
        respx_mock.get(f'/repos/{REPO}/git/ref/heads/main').mock(
            return_value=httpx.Response(200, json={'object': {'sha': 'abc123'}}),
        )
        create_ref = respx_mock.post(f'/repos/{REPO}/git/refs').mock(
            return_value=httpx.Response(201, json={}),
        )
        put_file = respx_mock.put(f'/repos/{REPO}/contents/content/prompts/summarize-a-diff.md').mock(
            return_value=httpx.Response(201, json={}),
        )
        respx_mock.post(f'/repos/{REPO}/pulls').mock(
            return_value=httpx.Response(201, json={'html_url': f'https://github.com/{REPO}/pull/7'}),
        )

        response = await client.post('/contributions/', json=CONTRIBUTION)

    assert response.status_code == 201
    data = response.json()
    assert data['pr_url'] == f'https://github.com/{REPO}/pull/7'
    assert data['path'] == 'content/prompts/summarize-a-diff.md'
    assert data['branch'].startswith('contrib/prompts-summarize-a-diff-')

    ref_body = json.loads(create_ref.calls.last.request.content)
    assert ref_body['sha'] == 'abc123'
    assert ref_body['ref'] == f"refs/heads/{data['branch']}"

    file_body = json.loads(put_file.calls.last.request.content)
    markdown = base64.b64decode(file_body['content']).decode()
    assert markdown.startswith('---\ntitle: Summarize a Diff\n')
    assert 'category: review' in markdown
    assert 'author: dev' in markdown
    assert markdown.endswith('Summarize this diff in three bullet points.\n')


async def test__contribution__github_failure_returns_502(
    client: AsyncClient, contributions_enabled: None,
) -> None:
    with respx.mock(base_url='https://api.github.com') as respx_mock:
        respx_mock.get(f'/repos/{REPO}/git/ref/heads/main').mock(
            return_value=httpx.Response(404, json={'message': 'Not Found'}),
        )
        response = await client.post('/contributions/', json=CONTRIBUTION)

    assert response.status_code == 502


async def test__contribution__requires_content(client: AsyncClient) -> None:
    response = await client.post(
        '/contributions/', json={**CONTRIBUTION, 'content': ''},
    )
    assert response.status_code == 422
