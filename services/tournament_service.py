"""Tournament-level workflows: entry, leaderboard and completion."""

import logging
from typing import List, Optional

from database.db_manager import DatabaseManager
from database.exceptions import IntegrityError, NotFoundError
from models import Tournament, TournamentPlayer
from models.tournament import TournamentStatus
from scoring.achievements import TournamentSnapshot, evaluate_achievements
from scoring.leaderboard import LeaderboardEntry, rank_players
from services.score_service import UnlockedAchievement

logger = logging.getLogger(__name__)


class TournamentService:

    def __init__(self, db: DatabaseManager):
        self._db = db

    async def _require(self, tournament_id: str) -> Tournament:
        tournament = await self._db.tournaments.get_tournament(tournament_id)
        if not tournament:
            raise NotFoundError(f"Tournament {tournament_id} not found")
        return tournament

    async def leaderboard(
        self, tournament_id: str, round_number: Optional[int] = None
    ) -> List[LeaderboardEntry]:
        """Ranked board for the whole tournament or a single round."""
        tournament = await self._require(tournament_id)
        if round_number is not None and round_number > tournament.number_of_rounds:
            raise NotFoundError(f"Tournament {tournament_id} has no round {round_number}")

        course = await self._db.courses.get_course(tournament.course_id)
        hole_pars = list(course.hole_pars().values()) if course and course.holes else None
        roster = await self._db.tournaments.get_players(tournament_id)
        rows = await self._db.rounds.get_tournament_score_rows(tournament_id)
        return rank_players(tournament, roster, rows, hole_pars, round_number)

    async def join(self, tournament_id: str, player: TournamentPlayer) -> TournamentPlayer:
        """Enter a player and award a first-tournament unlock if it applies."""
        tournament = await self._require(tournament_id)
        if tournament.status == TournamentStatus.COMPLETED:
            raise IntegrityError(f"Tournament {tournament_id} is already completed")
        if tournament.max_players is not None:
            roster = await self._db.tournaments.get_players(tournament_id)
            if len(roster) >= tournament.max_players:
                raise IntegrityError(f"Tournament {tournament_id} is full")

        entered = await self._db.tournaments.add_player(tournament_id, player)
        played = await self._db.tournaments.count_player_tournaments(player.player_id)
        await self._award(TournamentSnapshot(
            player_id=player.player_id,
            tournament_id=tournament_id,
            is_first_tournament=played == 1,
        ))
        return entered

    async def complete(self, tournament_id: str) -> Tournament:
        """Rank every configured round, record the winner and close the event."""
        board = await self.leaderboard(tournament_id)
        winner = board[0] if board and board[0].rank == 1 else None
        winner_id = winner.player_id if winner else None

        completed = await self._db.tournaments.complete_tournament(tournament_id, winner_id)
        for entry in board:
            await self._award(TournamentSnapshot(
                player_id=entry.player_id,
                tournament_id=tournament_id,
                is_winner=entry.player_id == winner_id,
            ))
        return completed

    async def _award(self, snapshot: TournamentSnapshot) -> List[UnlockedAchievement]:
        catalog = await self._db.achievements.list_achievements()
        unlocked_ids = set(await self._db.achievements.get_unlocked_ids(snapshot.player_id))
        unlocked = []
        for achievement in evaluate_achievements(snapshot, catalog, unlocked_ids):
            record = await self._db.achievements.unlock_achievement(
                snapshot.player_id, achievement, tournament_id=snapshot.tournament_id
            )
            if record is not None:
                unlocked.append(UnlockedAchievement(
                    achievement_id=achievement.id,
                    name=achievement.name,
                    points=achievement.points,
                ))
        return unlocked
