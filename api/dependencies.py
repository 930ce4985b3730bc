from fastapi import Depends, Request

from database.db_manager import DatabaseManager
from services import ScoreService, TournamentService


def get_db(request: Request) -> DatabaseManager:
    """FastAPI dependency that provides the DatabaseManager."""
    return request.app.state.db_manager


def get_score_service(db: DatabaseManager = Depends(get_db)) -> ScoreService:
    return ScoreService(db)


def get_tournament_service(db: DatabaseManager = Depends(get_db)) -> TournamentService:
    return TournamentService(db)
