"""Tournament API endpoints."""

from datetime import datetime
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing import List, Optional
from database.db_manager import DatabaseManager
from database.exceptions import DuplicateError, IntegrityError, NotFoundError
from api.dependencies import get_db, get_tournament_service
from models import Tournament, TournamentPlayer
from models.tournament import ScoringFormat, TeeColor, TournamentStatus
from scoring.leaderboard import LeaderboardEntry, PlayerScoreRow
from services import TournamentService

router = APIRouter()


class CreateTournamentRequest(BaseModel):
    name: str
    description: Optional[str] = None
    course_id: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    max_players: Optional[int] = Field(None, ge=1)
    number_of_rounds: int = Field(1, ge=1)
    scoring_format: ScoringFormat = ScoringFormat.STROKE_PLAY
    handicap_allowance: Decimal = Field(Decimal("1.00"), ge=0, le=1)
    created_by: Optional[str] = None


class UpdateTournamentRequest(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: Optional[TournamentStatus] = None
    max_players: Optional[int] = Field(None, ge=1)
    handicap_allowance: Optional[Decimal] = Field(None, ge=0, le=1)


class JoinTournamentRequest(BaseModel):
    player_id: str
    name: Optional[str] = None
    handicap: Optional[Decimal] = Field(None, ge=-10, le=54)
    tee_selection: TeeColor = TeeColor.WHITE


@router.get("", response_model=List[Tournament])
async def list_tournaments(
    status: Optional[TournamentStatus] = Query(None),
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: DatabaseManager = Depends(get_db),
):
    return await db.tournaments.list_tournaments(status=status, limit=limit, offset=offset)


@router.get("/{tournament_id}", response_model=Tournament)
async def get_tournament(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    tournament = await db.tournaments.get_tournament(tournament_id)
    if not tournament:
        raise HTTPException(404, "Tournament not found")
    return tournament


@router.post("", response_model=Tournament, status_code=201)
async def create_tournament(req: CreateTournamentRequest, db: DatabaseManager = Depends(get_db)):
    tournament = Tournament(**req.model_dump())
    try:
        return await db.tournaments.create_tournament(tournament)
    except IntegrityError:
        raise HTTPException(404, "Course not found")


@router.put("/{tournament_id}", response_model=Tournament)
async def update_tournament(
    tournament_id: str,
    req: UpdateTournamentRequest,
    db: DatabaseManager = Depends(get_db),
):
    updates = {k: v for k, v in req.model_dump().items() if v is not None}
    updated = await db.tournaments.update_tournament(tournament_id, **updates)
    if not updated:
        raise HTTPException(404, "Tournament not found")
    return updated


# ================================================================
# Players
# ================================================================

@router.get("/{tournament_id}/players", response_model=List[TournamentPlayer])
async def get_players(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    return await db.tournaments.get_players(tournament_id)


@router.post("/{tournament_id}/join", response_model=TournamentPlayer, status_code=201)
async def join_tournament(
    tournament_id: str,
    req: JoinTournamentRequest,
    service: TournamentService = Depends(get_tournament_service),
):
    player = TournamentPlayer(tournament_id=tournament_id, **req.model_dump())
    try:
        return await service.join(tournament_id, player)
    except NotFoundError:
        raise HTTPException(404, "Tournament not found")
    except DuplicateError:
        raise HTTPException(409, "Player already joined this tournament")
    except IntegrityError as e:
        raise HTTPException(409, str(e))


@router.get("/{tournament_id}/player-scores", response_model=List[PlayerScoreRow])
async def get_player_scores(tournament_id: str, db: DatabaseManager = Depends(get_db)):
    """Flat per-hole score rows for every player in the tournament."""
    return await db.rounds.get_tournament_score_rows(tournament_id)


# ================================================================
# Leaderboard
# ================================================================

@router.get("/{tournament_id}/leaderboard", response_model=List[LeaderboardEntry])
async def get_leaderboard(
    tournament_id: str,
    service: TournamentService = Depends(get_tournament_service),
):
    try:
        return await service.leaderboard(tournament_id)
    except NotFoundError:
        raise HTTPException(404, "Tournament not found")


@router.get("/{tournament_id}/leaderboard/{round_number}", response_model=List[LeaderboardEntry])
async def get_round_leaderboard(
    tournament_id: str,
    round_number: int,
    service: TournamentService = Depends(get_tournament_service),
):
    try:
        return await service.leaderboard(tournament_id, round_number)
    except NotFoundError as e:
        raise HTTPException(404, str(e))


@router.post("/{tournament_id}/complete", response_model=Tournament)
async def complete_tournament(
    tournament_id: str,
    service: TournamentService = Depends(get_tournament_service),
):
    try:
        return await service.complete(tournament_id)
    except NotFoundError:
        raise HTTPException(404, "Tournament not found")
