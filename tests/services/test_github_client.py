"""Tests for the GitHub OAuth client."""
from urllib.parse import parse_qs, urlparse

import httpx
import pytest
import respx

from core.config import Settings
from services import github_client
from services.exceptions import GitHubAuthError


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        database_url='sqlite+aiosqlite://',
        github_client_id='client-id',
        github_client_secret='client-secret',
        github_redirect_uri='https://api.example.com/auth/github/callback',
    )


def test_authorize_url(settings: Settings) -> None:
    url = urlparse(github_client.authorize_url(settings, 'state-value'))
    assert f'{url.scheme}://{url.netloc}{url.path}' == github_client.AUTHORIZE_URL
    assert parse_qs(url.query) == {
        'client_id': ['client-id'],
        'redirect_uri': ['https://api.example.com/auth/github/callback'],
        'scope': ['read:user user:email'],
        'state': ['state-value'],
    }


async def test_exchange_code(settings: Settings) -> None:
    with respx.mock() as respx_mock:
        route = respx_mock.post(github_client.ACCESS_TOKEN_URL).mock(
            return_value=httpx.Response(200, json={'access_token': 'gho_token'}),
        )
        token = await github_client.exchange_code(settings, 'the-code')

    assert token == 'gho_token'
    body = parse_qs(route.calls.last.request.content.decode())
    assert body['code'] == ['the-code']
    assert body['client_secret'] == ['client-secret']


async def test_exchange_code_error_payload(settings: Settings) -> None:
    with respx.mock() as respx_mock:
        respx_mock.post(github_client.ACCESS_TOKEN_URL).mock(
            return_value=httpx.Response(200, json={
                'error': 'bad_verification_code',
                'error_description': 'The code passed is incorrect or expired.',
            }),
        )
        with pytest.raises(GitHubAuthError, match='incorrect or expired'):
            await github_client.exchange_code(settings, 'stale')


async def test_exchange_code_unreachable(settings: Settings) -> None:
    with respx.mock() as respx_mock:
        respx_mock.post(github_client.ACCESS_TOKEN_URL).mock(
            side_effect=httpx.ConnectTimeout('timed out'),
        )
        with pytest.raises(GitHubAuthError, match='Could not reach GitHub'):
            await github_client.exchange_code(settings, 'code')


async def test_fetch_user() -> None:
    with respx.mock(base_url=github_client.API_BASE_URL) as respx_mock:
        route = respx_mock.get('/user').mock(
            return_value=httpx.Response(200, json={
                'id': 1,
                'login': 'octocat',
                'name': None,
                'avatar_url': 'https://avatars.example.com/1',
            }),
        )
        user = await github_client.fetch_user('gho_token')

    assert user == github_client.GitHubUser(
        id=1, login='octocat', name=None, email=None, avatar_url='https://avatars.example.com/1',
    )
    assert route.calls.last.request.headers['Authorization'] == 'Bearer gho_token'


async def test_fetch_user_unauthorized() -> None:
    with respx.mock(base_url=github_client.API_BASE_URL) as respx_mock:
        respx_mock.get('/user').mock(return_value=httpx.Response(401, json={'message': 'Bad credentials'}))
        with pytest.raises(GitHubAuthError):
            await github_client.fetch_user('revoked')
