"""Application services over the scoring engine and the database."""

from services.score_service import (
    ScoreChanges,
    ScoreService,
    ScoreSubmission,
    SubmissionResult,
    UnlockedAchievement,
)
from services.tournament_service import TournamentService

__all__ = [
    "ScoreChanges",
    "ScoreService",
    "ScoreSubmission",
    "SubmissionResult",
    "UnlockedAchievement",
    "TournamentService",
]
