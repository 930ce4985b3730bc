"""Hole score entry endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from database.exceptions import IntegrityError, NotFoundError
from api.dependencies import get_score_service
from services import ScoreChanges, ScoreService, ScoreSubmission, SubmissionResult

router = APIRouter()


@router.post("", response_model=SubmissionResult, status_code=201)
async def submit_score(
    req: ScoreSubmission,
    service: ScoreService = Depends(get_score_service),
):
    """Record one hole. Re-submitting a hole replaces the earlier entry."""
    try:
        return await service.submit_score(req)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except IntegrityError as e:
        raise HTTPException(409, str(e))


@router.put("/{score_id}", response_model=SubmissionResult)
async def update_score(
    score_id: str,
    req: ScoreChanges,
    service: ScoreService = Depends(get_score_service),
):
    try:
        return await service.update_score(score_id, req)
    except NotFoundError as e:
        raise HTTPException(404, str(e))
    except IntegrityError as e:
        raise HTTPException(409, str(e))
