"""GitHub OAuth login endpoints."""
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_settings
from core.auth import create_oauth_state, verify_oauth_state
from core.config import Settings
from schemas.token import TokenCreate
from schemas.user import LoginResponse, UserResponse
from services import github_client, token_service, user_service
from services.exceptions import GitHubAuthError

router = APIRouter(prefix="/auth", tags=["auth"])

LOGIN_TOKEN_NAME = "GitHub login"
LOGIN_TOKEN_DAYS = 30


@router.get("/github/login")
async def github_login(settings: Settings = Depends(get_settings)) -> RedirectResponse:
    """Redirect to GitHub's authorization page."""
    if not settings.github_client_id:
        raise HTTPException(status_code=503, detail="GitHub login is not configured")
    state = create_oauth_state(settings)
    return RedirectResponse(github_client.authorize_url(settings, state), status_code=302)


@router.get("/github/callback", response_model=LoginResponse)
async def github_callback(
    code: str = Query(..., min_length=1),
    state: str = Query(..., min_length=1),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_async_session),
) -> LoginResponse:
    """
    Complete a GitHub login.

    Creates the user on first login and returns a bearer token for the API.
    """
    verify_oauth_state(state, settings)
    try:
        access_token = await github_client.exchange_code(settings, code)
        profile = await github_client.fetch_user(access_token)
    except GitHubAuthError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e

    user = await user_service.get_or_create_from_github(db, profile)
    _, plaintext = await token_service.create_token(
        db,
        user.id,
        TokenCreate(name=LOGIN_TOKEN_NAME, expires_in_days=LOGIN_TOKEN_DAYS),
        issued_at_login=True,
    )
    return LoginResponse(token=plaintext, user=UserResponse.model_validate(user))
