"""API-specific response models for list views and aggregated data."""

from datetime import datetime
from pydantic import BaseModel
from typing import Any, Dict, List, Optional

from models import HoleScore, PlayerAchievement
from scoring.aggregator import RoundTotals


class CourseSummaryResponse(BaseModel):
    """Course for card/list views."""
    id: str
    name: Optional[str] = None
    location: Optional[str] = None
    par: Optional[int] = None
    total_holes: int = 0


class RoundResponse(BaseModel):
    """A round with its scores and derived totals."""
    id: str
    tournament_id: str
    player_id: str
    round_number: int
    created_at: Optional[datetime] = None
    hole_scores: List[HoleScore]
    totals: RoundTotals


class PlayerStatsResponse(BaseModel):
    """Achievement totals plus career scoring stats."""
    player_id: str
    total_achievements: int = 0
    achievement_points: int = 0
    birdies: int = 0
    eagles: int = 0
    holes_in_one: int = 0
    tournaments_played: int = 0
    tournaments_won: int = 0
    scoring: Dict[str, Any]
    score_types: List[Dict[str, Any]] = []


class PlayerAchievementsResponse(BaseModel):
    player_id: str
    achievements: List[PlayerAchievement]
