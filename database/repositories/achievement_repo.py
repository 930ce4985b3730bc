"""Achievement catalog, unlock records and per-player achievement stats."""

import asyncpg
import logging
from typing import List, Optional, Set
from uuid import UUID

from models import Achievement, PlayerAchievement, PlayerStats
from database.converters import (
    achievement_from_row,
    achievement_to_row,
    player_achievement_from_row,
    player_stats_from_row,
)

logger = logging.getLogger(__name__)


class AchievementRepositoryDB:
    """Async CRUD for the achievements schema."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Catalog
    # ================================================================

    async def list_achievements(self, *, active_only: bool = True) -> List[Achievement]:
        async with self._pool.acquire() as conn:
            if active_only:
                rows = await conn.fetch(
                    """SELECT * FROM achievements.achievements
                       WHERE is_active ORDER BY points, name"""
                )
            else:
                rows = await conn.fetch(
                    "SELECT * FROM achievements.achievements ORDER BY points, name"
                )
            return [achievement_from_row(r) for r in rows]

    async def get_achievement(self, achievement_id: str) -> Optional[Achievement]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM achievements.achievements WHERE id = $1",
                UUID(achievement_id),
            )
            return achievement_from_row(row) if row else None

    async def create_achievement(self, achievement: Achievement) -> Achievement:
        data = achievement_to_row(achievement)
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """INSERT INTO achievements.achievements
                   (name, description, condition, rarity, category, points,
                    threshold, is_active)
                   VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                   RETURNING *""",
                data["name"], data["description"], data["condition"],
                data["rarity"], data["category"], data["points"],
                data["threshold"], data["is_active"],
            )
            return achievement_from_row(row)

    # ================================================================
    # Unlocks
    # ================================================================

    async def get_player_achievements(self, player_id: str) -> List[PlayerAchievement]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM achievements.player_achievements
                   WHERE player_id = $1 ORDER BY unlocked_at""",
                UUID(player_id),
            )
            return [player_achievement_from_row(r) for r in rows]

    async def get_unlocked_ids(self, player_id: str) -> Set[str]:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT achievement_id FROM achievements.player_achievements
                   WHERE player_id = $1""",
                UUID(player_id),
            )
            return {str(r["achievement_id"]) for r in rows}

    async def unlock_achievement(
        self,
        player_id: str,
        achievement: Achievement,
        *,
        tournament_id: Optional[str] = None,
        round_id: Optional[str] = None,
    ) -> Optional[PlayerAchievement]:
        """Record an unlock at most once per (player, achievement).

        Returns the new unlock, or None if the player already had it. Stats
        are only incremented when a row was actually inserted.
        """
        try:
            async with self._pool.acquire() as conn:
                async with conn.transaction():
                    row = await conn.fetchrow(
                        """INSERT INTO achievements.player_achievements
                           (player_id, achievement_id, tournament_id, round_id)
                           VALUES ($1, $2, $3, $4)
                           ON CONFLICT ON CONSTRAINT uq_player_achievement DO NOTHING
                           RETURNING *""",
                        UUID(player_id), UUID(achievement.id),
                        UUID(tournament_id) if tournament_id else None,
                        UUID(round_id) if round_id else None,
                    )
                    if row is None:
                        logger.debug(
                            "Achievement %s already unlocked for %s",
                            achievement.id, player_id,
                        )
                        return None

                    await conn.execute(
                        """INSERT INTO achievements.player_stats
                           (player_id, total_achievements, achievement_points, last_updated)
                           VALUES ($1, 1, $2, NOW())
                           ON CONFLICT (player_id) DO UPDATE SET
                               total_achievements = achievements.player_stats.total_achievements + 1,
                               achievement_points = achievements.player_stats.achievement_points
                                                    + EXCLUDED.achievement_points,
                               last_updated = NOW()""",
                        UUID(player_id), achievement.points,
                    )
        except asyncpg.UniqueViolationError:
            logger.debug(
                "Concurrent unlock of %s for %s lost the race", achievement.id, player_id
            )
            return None

        logger.info("Player %s unlocked %s", player_id, achievement.name)
        return player_achievement_from_row(row)

    # ================================================================
    # Stats
    # ================================================================

    async def get_player_stats(self, player_id: str) -> PlayerStats:
        """Achievement totals plus scoring counts over every stored score.

        Counts are aggregated from the stored scores on each call.
        Totals are zero if the player has no unlocks yet.
        """
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT $1::uuid AS player_id,
                          COALESCE(ps.total_achievements, 0) AS total_achievements,
                          COALESCE(ps.achievement_points, 0) AS achievement_points,
                          ps.last_updated,
                          sc.birdies, sc.eagles, sc.holes_in_one
                   FROM (
                       SELECT COUNT(*) FILTER (WHERE s.strokes = s.par_played - 1) AS birdies,
                              COUNT(*) FILTER (WHERE s.strokes <= s.par_played - 2) AS eagles,
                              COUNT(*) FILTER (WHERE s.strokes = 1) AS holes_in_one
                       FROM tournaments.scores s
                       JOIN tournaments.rounds r ON r.id = s.round_id
                       WHERE r.player_id = $1
                   ) sc
                   LEFT JOIN achievements.player_stats ps ON ps.player_id = $1""",
                UUID(player_id),
            )
            if not row:
                return PlayerStats(player_id=player_id)
            return player_stats_from_row(row)
