"""FastAPI application for the tournament scoring API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from database.connection import db
from database.db_manager import DatabaseManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize DB pool on startup, close on shutdown."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    await db.initialize_from_settings(settings)
    app.state.db_manager = DatabaseManager(db.pool)
    await app.state.db_manager.initialize_schema()
    logger.info("Scoring API started")
    yield
    await db.close()


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(
        title="Golf Tournament Scoring API",
        version="1.0.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from api.routers import achievements, courses, players, rounds, scores, tournaments
    app.include_router(courses.router, prefix="/api/courses", tags=["courses"])
    app.include_router(tournaments.router, prefix="/api/tournaments", tags=["tournaments"])
    app.include_router(rounds.router, prefix="/api/rounds", tags=["rounds"])
    app.include_router(scores.router, prefix="/api/scores", tags=["scores"])
    app.include_router(achievements.router, prefix="/api/achievements", tags=["achievements"])
    app.include_router(players.router, prefix="/api/players", tags=["players"])

    @app.get("/api/health")
    async def health():
        healthy = await db.health_check()
        return {"status": "ok" if healthy else "degraded", "database": healthy}

    return app


app = create_app()
