"""Vote endpoints."""
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.enums import TargetType
from models.user import User
from schemas.vote import SuccessResponse, VoteCreate, VoteResponse, VoteSummary, VoteValue
from services import vote_service
from services.exceptions import InvalidTargetError

router = APIRouter(prefix="/votes", tags=["votes"])


@router.post("/", response_model=VoteResponse, status_code=201)
async def cast_vote(
    data: VoteCreate,
    response: Response,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> VoteResponse:
    """
    Vote on an item.

    Returns 201 when the vote is new and 200 when an existing vote changed.
    """
    try:
        vote, created = await vote_service.cast_vote(
            db, current_user, data.target_type, data.target_id, data.value,
        )
    except InvalidTargetError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    if not created:
        response.status_code = 200
    return VoteResponse.model_validate(vote)


@router.get("/", response_model=VoteValue | None)
async def get_my_vote(
    target_type: TargetType = Query(...),
    target_id: UUID = Query(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> VoteValue | None:
    """The caller's vote on an item, or null."""
    vote = await vote_service.get_user_vote(db, current_user.id, target_type, target_id)
    if vote is None:
        return None
    return VoteValue(value=vote.value)


@router.delete("/", response_model=SuccessResponse)
async def remove_vote(
    target_type: TargetType = Query(...),
    target_id: UUID = Query(...),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SuccessResponse:
    """Withdraw the caller's vote. Succeeds even if there was none."""
    await vote_service.remove_vote(db, current_user.id, target_type, target_id)
    return SuccessResponse()


@router.get("/summary", response_model=VoteSummary)
async def get_vote_summary(
    target_type: TargetType = Query(...),
    target_id: UUID = Query(...),
    db: AsyncSession = Depends(get_async_session),
) -> VoteSummary:
    """Vote score and up/down counts for an item."""
    summary = await vote_service.get_vote_summary(db, target_type, target_id)
    return VoteSummary(**summary)
