from datetime import datetime
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class AchievementCondition(str, Enum):
    """Closed catalog of unlock conditions."""
    HOLE_IN_ONE = "hole_in_one"
    EAGLE = "eagle"
    BIRDIE = "birdie"
    UNDER_PAR_ROUND = "under_par_round"
    SCORE_UNDER_THRESHOLD = "score_under_threshold"
    FAIRWAY_STREAK = "fairway_streak"
    BIRDIE_MILESTONE = "birdie_milestone"
    ROUNDS_COMPLETED = "rounds_completed"
    FIRST_TOURNAMENT = "first_tournament"
    TOURNAMENT_WIN = "tournament_win"


class Rarity(str, Enum):
    COMMON = "common"
    RARE = "rare"
    EPIC = "epic"
    LEGENDARY = "legendary"


class Achievement(BaseGolfModel):
    """An unlockable condition definition."""
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    condition: AchievementCondition
    rarity: Rarity = Rarity.COMMON
    category: str = "scoring"
    points: int = Field(0, ge=0)
    threshold: Optional[int] = None
    is_active: bool = True


class PlayerAchievement(BaseGolfModel):
    """Unlock record. At most one per (player, achievement)."""
    id: Optional[str] = None
    player_id: str
    achievement_id: str
    tournament_id: Optional[str] = None
    round_id: Optional[str] = None
    unlocked_at: Optional[datetime] = None


class PlayerStats(BaseGolfModel):
    """Running achievement totals for a player.

    Birdie, eagle and ace counts are derived from stored scores on read.
    """
    player_id: str
    total_achievements: int = 0
    achievement_points: int = 0
    birdies: int = 0
    eagles: int = 0
    holes_in_one: int = 0
    last_updated: Optional[datetime] = None
