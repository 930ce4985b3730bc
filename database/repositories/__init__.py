from .course_repo import CourseRepositoryDB
from .tournament_repo import TournamentRepositoryDB
from .round_repo import RoundRepositoryDB
from .achievement_repo import AchievementRepositoryDB

__all__ = [
    "CourseRepositoryDB",
    "TournamentRepositoryDB",
    "RoundRepositoryDB",
    "AchievementRepositoryDB",
]
