"""Contribute content as a GitHub pull request."""
from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_current_user, get_settings
from core.config import Settings
from models.user import User
from schemas.contribution import ContributionCreate, ContributionResponse
from services import contribution_service
from services.exceptions import ContributionError, ContributionNotConfiguredError

router = APIRouter(prefix="/contributions", tags=["contributions"])


@router.post("/", response_model=ContributionResponse, status_code=201)
async def create_contribution(
    data: ContributionCreate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> ContributionResponse:
    """Open a pull request adding the content to the directory's repository."""
    try:
        result = await contribution_service.create_contribution_pr(settings, current_user, data)
    except ContributionNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except ContributionError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e
    return ContributionResponse(pr_url=result.pr_url, branch=result.branch, path=result.path)
