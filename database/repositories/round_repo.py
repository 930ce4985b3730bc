"""CRUD operations for tournament rounds and their hole scores."""

import asyncpg
import logging
from typing import List, Optional, Tuple
from uuid import UUID

from models import HoleScore, Round
from scoring.aggregator import RoundTotals, aggregate_round
from scoring.leaderboard import PlayerScoreRow
from database.converters import (
    hole_score_from_row,
    hole_score_to_row,
    player_score_row_from_row,
    round_from_rows,
)
from database.exceptions import IntegrityError, NotFoundError

logger = logging.getLogger(__name__)


class RoundRepositoryDB:
    """Async CRUD for tournaments.rounds and tournaments.scores."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble_round(self, conn, round_row) -> Round:
        score_rows = await conn.fetch(
            """SELECT * FROM tournaments.scores
               WHERE round_id = $1 ORDER BY hole_number""",
            round_row["id"],
        )
        return round_from_rows(round_row, score_rows)

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, round_id: str) -> Optional[Round]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.rounds WHERE id = $1", UUID(round_id)
            )
            if not row:
                return None
            return await self._assemble_round(conn, row)

    async def get_rounds_for_player(self, player_id: str) -> List[Round]:
        """Every round a player has started, oldest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM tournaments.rounds
                   WHERE player_id = $1
                   ORDER BY created_at, round_number""",
                UUID(player_id),
            )
            return [await self._assemble_round(conn, r) for r in rows]

    async def get_tournament_rounds(self, tournament_id: str) -> List[Round]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM tournaments.rounds
                   WHERE tournament_id = $1
                   ORDER BY round_number, created_at""",
                UUID(tournament_id),
            )
            return [await self._assemble_round(conn, r) for r in rows]

    async def get_score_by_id(self, score_id: str) -> Optional[HoleScore]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM tournaments.scores WHERE id = $1", UUID(score_id)
            )
            return hole_score_from_row(row) if row else None

    async def get_tournament_score_rows(self, tournament_id: str) -> List[PlayerScoreRow]:
        """Flat per-hole rows for every round of a tournament.

        One row per scored hole, joined to the roster for the display name.
        """
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT r.player_id, p.name AS player_name, r.id AS round_id,
                          r.round_number, s.hole_number, s.par_played, s.strokes,
                          s.putts, s.fairway_hit, s.green_in_regulation
                   FROM tournaments.rounds r
                   JOIN tournaments.scores s ON s.round_id = r.id
                   LEFT JOIN tournaments.players p
                          ON p.tournament_id = r.tournament_id
                         AND p.player_id = r.player_id
                   WHERE r.tournament_id = $1
                   ORDER BY r.round_number, s.hole_number""",
                UUID(tournament_id),
            )
            return [player_score_row_from_row(r) for r in rows]

    # ================================================================
    # Create / Update
    # ================================================================

    async def get_or_create_round(
        self, tournament_id: str, player_id: str, round_number: int
    ) -> Round:
        """Return the player's round, creating it on first score.

        Concurrent first submissions resolve to the same row through the
        (tournament_id, player_id, round_number) unique constraint.
        """
        try:
            async with self._pool.acquire() as conn:
                row = await conn.fetchrow(
                    """INSERT INTO tournaments.rounds (tournament_id, player_id, round_number)
                       VALUES ($1, $2, $3)
                       ON CONFLICT (tournament_id, player_id, round_number)
                       DO UPDATE SET round_number = EXCLUDED.round_number
                       RETURNING *""",
                    UUID(tournament_id), UUID(player_id), round_number,
                )
                return await self._assemble_round(conn, row)
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Tournament {tournament_id} not found") from e

    async def upsert_score(
        self, round_id: str, hole_score: HoleScore, hole_id: Optional[str] = None
    ) -> Tuple[HoleScore, RoundTotals]:
        """Write one hole score and refresh the round's stored totals.

        The round row is locked for the duration so two writers on the same
        round serialize, and totals are recomputed from every stored score.
        """
        round_uuid = UUID(round_id)
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    locked = await conn.fetchval(
                        "SELECT id FROM tournaments.rounds WHERE id = $1 FOR UPDATE",
                        round_uuid,
                    )
                    if locked is None:
                        raise NotFoundError(f"Round {round_id} not found")

                    row = await conn.fetchrow(
                        """INSERT INTO tournaments.scores
                           (round_id, hole_id, hole_number, par_played, strokes,
                            putts, fairway_hit, green_in_regulation,
                            powerup_used, powerup_notes)
                           VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
                           ON CONFLICT (round_id, hole_number) DO UPDATE SET
                               hole_id = EXCLUDED.hole_id,
                               par_played = EXCLUDED.par_played,
                               strokes = EXCLUDED.strokes,
                               putts = EXCLUDED.putts,
                               fairway_hit = EXCLUDED.fairway_hit,
                               green_in_regulation = EXCLUDED.green_in_regulation,
                               powerup_used = EXCLUDED.powerup_used,
                               powerup_notes = EXCLUDED.powerup_notes,
                               updated_at = NOW()
                           RETURNING *""",
                        *hole_score_to_row(
                            hole_score, round_uuid, UUID(hole_id) if hole_id else None
                        ),
                    )

                    score_rows = await conn.fetch(
                        "SELECT * FROM tournaments.scores WHERE round_id = $1",
                        round_uuid,
                    )
                    totals = aggregate_round(hole_score_from_row(r) for r in score_rows)

                    await conn.execute(
                        """UPDATE tournaments.rounds SET
                               total_strokes = $2,
                               total_putts = $3,
                               fairways_hit = $4,
                               greens_in_regulation = $5,
                               holes_completed = $6,
                               is_complete = $7
                           WHERE id = $1""",
                        round_uuid,
                        totals.total_strokes,
                        totals.total_putts,
                        totals.fairways_hit,
                        totals.greens_in_regulation,
                        totals.holes_completed,
                        totals.is_complete,
                    )
        except asyncpg.CheckViolationError as e:
            raise IntegrityError(str(e)) from e

        logger.debug(
            "Round %s hole %d stored; %d holes, %d strokes",
            round_id, hole_score.hole_number, totals.holes_completed, totals.total_strokes,
        )
        return hole_score_from_row(row), totals
