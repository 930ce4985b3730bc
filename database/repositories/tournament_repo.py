"""CRUD operations for tournaments and their entered players."""

import asyncpg
import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from models import Tournament, TournamentPlayer
from models.tournament import TournamentStatus
from database.converters import (
    tournament_from_row,
    tournament_player_from_row,
    tournament_to_row,
)
from database.exceptions import DuplicateError, IntegrityError, NotFoundError

logger = logging.getLogger(__name__)


class TournamentRepositoryDB:
    """Async CRUD for tournaments.tournaments and tournaments.players."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_tournament(self, tournament_id: str) -> Optional[Tournament]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.tournaments WHERE id = $1",
                UUID(tournament_id),
            )
            return tournament_from_row(row) if row else None

    async def list_tournaments(
        self, *, status: Optional[TournamentStatus] = None, limit: int = 50, offset: int = 0
    ) -> List[Tournament]:
        """List tournaments, newest first, optionally filtered by status."""
        async with self._pool.acquire() as conn:
            if status:
                rows = await conn.fetch(
                    """SELECT * FROM tournaments.tournaments
                       WHERE status = $1
                       ORDER BY start_date DESC NULLS LAST, created_at DESC
                       LIMIT $2 OFFSET $3""",
                    TournamentStatus(status).value, limit, offset,
                )
            else:
                rows = await conn.fetch(
                    """SELECT * FROM tournaments.tournaments
                       ORDER BY start_date DESC NULLS LAST, created_at DESC
                       LIMIT $1 OFFSET $2""",
                    limit, offset,
                )
            return [tournament_from_row(r) for r in rows]

    async def get_players(self, tournament_id: str) -> List[TournamentPlayer]:
        """Roster in join order."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM tournaments.players
                   WHERE tournament_id = $1 ORDER BY joined_at, id""",
                UUID(tournament_id),
            )
            return [tournament_player_from_row(r) for r in rows]

    async def get_player(self, tournament_id: str, player_id: str) -> Optional[TournamentPlayer]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT * FROM tournaments.players
                   WHERE tournament_id = $1 AND player_id = $2""",
                UUID(tournament_id), UUID(player_id),
            )
            return tournament_player_from_row(row) if row else None

    async def count_player_tournaments(self, player_id: str) -> int:
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT COUNT(*) FROM tournaments.players WHERE player_id = $1",
                UUID(player_id),
            )

    async def count_player_wins(self, player_id: str) -> int:
        async with self._pool.acquire() as conn:
            return await conn.fetchval(
                "SELECT COUNT(*) FROM tournaments.tournaments WHERE winner_id = $1",
                UUID(player_id),
            )

    # ================================================================
    # Create
    # ================================================================

    async def create_tournament(self, tournament: Tournament) -> Tournament:
        data = tournament_to_row(tournament)
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.tournaments
                       (name, description, course_id, start_date, end_date, status,
                        max_players, number_of_rounds, scoring_format,
                        handicap_allowance, created_by)
                       VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11)
                       RETURNING *""",
                    data["name"], data["description"], data["course_id"],
                    data["start_date"], data["end_date"], data["status"],
                    data["max_players"], data["number_of_rounds"],
                    data["scoring_format"], data["handicap_allowance"],
                    data["created_by"],
                )
                return tournament_from_row(row)
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Unknown course {tournament.course_id}") from e

    async def add_player(self, tournament_id: str, player: TournamentPlayer) -> TournamentPlayer:
        """Enter a player. Raises DuplicateError if already entered."""
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.players
                       (tournament_id, player_id, name, handicap, tee_selection)
                       VALUES ($1, $2, $3, $4, $5)
                       RETURNING *""",
                    UUID(tournament_id), UUID(player.player_id), player.name,
                    player.handicap, player.tee_selection.value,
                )
                return tournament_player_from_row(row)
        except asyncpg.UniqueViolationError as e:
            raise DuplicateError(
                f"Player {player.player_id} already entered in {tournament_id}"
            ) from e
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Tournament {tournament_id} not found") from e

    # ================================================================
    # Update
    # ================================================================

    async def update_tournament(self, tournament_id: str, **fields) -> Optional[Tournament]:
        """Update tournament-level fields."""
        allowed = {
            "name", "description", "start_date", "end_date", "status",
            "max_players", "handicap_allowance", "winner_id",
        }
        updates = {k: v for k, v in fields.items() if k in allowed}
        if not updates:
            return await self.get_tournament(tournament_id)

        if "status" in updates:
            updates["status"] = TournamentStatus(updates["status"]).value
        if updates.get("winner_id") is not None:
            updates["winner_id"] = UUID(updates["winner_id"])
        if updates.get("handicap_allowance") is not None:
            updates["handicap_allowance"] = Decimal(str(updates["handicap_allowance"]))

        set_clause = ", ".join(f"{k} = ${i+2}" for i, k in enumerate(updates))
        values = [UUID(tournament_id)] + list(updates.values())

        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                f"UPDATE tournaments.tournaments SET {set_clause} WHERE id = $1 RETURNING *",
                *values,
            )
            return tournament_from_row(row) if row else None

    async def complete_tournament(self, tournament_id: str, winner_id: Optional[str]) -> Tournament:
        """Mark completed and record the winner."""
        updated = await self.update_tournament(
            tournament_id, status=TournamentStatus.COMPLETED, winner_id=winner_id
        )
        if not updated:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        logger.info("Tournament %s completed, winner=%s", tournament_id, winner_id)
        return updated
