from .base import BaseGolfModel
from .achievement import (
    Achievement,
    AchievementCondition,
    PlayerAchievement,
    PlayerStats,
    Rarity,
)
from .course import Course
from .hole import Hole
from .hole_score import HoleScore
from .round import Round
from .tournament import ScoringFormat, TeeColor, Tournament, TournamentPlayer, TournamentStatus

__all__ = [
    "BaseGolfModel",
    "Achievement",
    "AchievementCondition",
    "PlayerAchievement",
    "PlayerStats",
    "Rarity",
    "Course",
    "Hole",
    "HoleScore",
    "Round",
    "ScoringFormat",
    "TeeColor",
    "Tournament",
    "TournamentPlayer",
    "TournamentStatus",
]
