"""Async data-access facade bundling the repositories over one pool."""

import asyncpg
import logging
from pathlib import Path
from typing import Optional

from database.exceptions import DatabaseError
from database.repositories import (
    AchievementRepositoryDB,
    CourseRepositoryDB,
    RoundRepositoryDB,
    TournamentRepositoryDB,
)

logger = logging.getLogger(__name__)


class DatabaseManager:
    """
    PostgreSQL data-access layer for the scoring service.

    Notes:
    - Repositories use raw SQL (no ORM) against asyncpg.
    - All repositories share the pool handed in at construction.
    """

    def __init__(self, pool: asyncpg.Pool, schema_path: Optional[str] = None) -> None:
        self._pool = pool
        self.schema_path = Path(
            schema_path or Path(__file__).with_name("schema.sql")
        ).resolve()
        self.courses = CourseRepositoryDB(pool)
        self.tournaments = TournamentRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.achievements = AchievementRepositoryDB(pool)

    async def initialize_schema(self) -> None:
        """Create schemas/tables defined in `database/schema.sql`."""
        if not self.schema_path.exists():
            raise DatabaseError(f"Schema file not found: {self.schema_path}")

        sql_text = self.schema_path.read_text(encoding="utf-8")
        async with self._pool.acquire() as conn:
            await conn.execute(sql_text)
        logger.info("Schema applied from %s", self.schema_path.name)
