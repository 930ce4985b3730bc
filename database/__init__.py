from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import (
    AchievementRepositoryDB,
    CourseRepositoryDB,
    RoundRepositoryDB,
    TournamentRepositoryDB,
)
from database.exceptions import DatabaseError, NotFoundError, DuplicateError, IntegrityError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "TournamentRepositoryDB",
    "RoundRepositoryDB",
    "AchievementRepositoryDB",
    "DatabaseError",
    "NotFoundError",
    "DuplicateError",
    "IntegrityError",
]
