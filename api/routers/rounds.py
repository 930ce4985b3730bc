"""Round API endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from typing import List
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from api.schemas import RoundResponse
from models import HoleScore, Round
from analytics.stats import round_summary

router = APIRouter()


def _round_response(r: Round) -> RoundResponse:
    return RoundResponse(
        id=r.id,
        tournament_id=r.tournament_id,
        player_id=r.player_id,
        round_number=r.round_number,
        created_at=r.created_at,
        hole_scores=r.hole_scores,
        totals=r.totals(),
    )


@router.get("/{round_id}", response_model=RoundResponse)
async def get_round(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return _round_response(round_)


@router.get("/{round_id}/scores", response_model=List[HoleScore])
async def get_round_scores(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_.hole_scores


@router.get("/{round_id}/summary")
async def get_round_summary(round_id: str, db: DatabaseManager = Depends(get_db)):
    round_ = await db.rounds.get_round(round_id)
    if not round_:
        raise HTTPException(404, "Round not found")
    return round_summary(round_)


@router.get("/tournament/{tournament_id}", response_model=List[RoundResponse])
async def get_tournament_rounds(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    rounds = await db.rounds.get_tournament_rounds(tournament_id)
    return [_round_response(r) for r in rounds]
