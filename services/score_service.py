"""Hole-by-hole score entry: normalize, store, re-aggregate, unlock."""

import logging
from typing import List, Optional, Set

from pydantic import BaseModel, Field

from analytics.stats import build_player_history, longest_fairway_streak
from database.db_manager import DatabaseManager
from database.exceptions import NotFoundError
from models import Achievement, Hole, HoleScore
from scoring.achievements import (
    HoleSnapshot,
    RoundSnapshot,
    evaluate_achievements,
)
from scoring.aggregator import RoundTotals
from scoring.validator import HoleEntry, normalize_hole_entry

logger = logging.getLogger(__name__)

_ENTRY_FIELDS = {
    "strokes", "putts", "fairway_hit", "green_in_regulation", "powerup_used", "powerup_notes",
}


class ScoreSubmission(BaseModel):
    """One hole result entered during play."""
    tournament_id: str
    player_id: str
    round_number: int = Field(1, ge=1)
    hole_number: int = Field(..., ge=1, le=18)
    strokes: int = Field(..., ge=1)
    putts: int = Field(0, ge=0)
    fairway_hit: bool = False
    green_in_regulation: bool = False
    powerup_used: bool = False
    powerup_notes: Optional[str] = None


class ScoreChanges(BaseModel):
    """Fields a player may correct on an already-entered hole."""
    strokes: Optional[int] = Field(None, ge=1)
    putts: Optional[int] = Field(None, ge=0)
    fairway_hit: Optional[bool] = None
    green_in_regulation: Optional[bool] = None
    powerup_used: Optional[bool] = None
    powerup_notes: Optional[str] = None


class UnlockedAchievement(BaseModel):
    achievement_id: str
    name: str
    points: int


class SubmissionResult(BaseModel):
    score: HoleScore
    totals: RoundTotals
    unlocked: List[UnlockedAchievement] = []


class ScoreService:
    """Runs a submitted hole through validation, persistence and achievements."""

    def __init__(self, db: DatabaseManager):
        self._db = db

    # ================================================================
    # Public API
    # ================================================================

    async def submit_score(self, submission: ScoreSubmission) -> SubmissionResult:
        tournament = await self._db.tournaments.get_tournament(submission.tournament_id)
        if not tournament:
            raise NotFoundError(f"Tournament {submission.tournament_id} not found")
        if submission.round_number > tournament.number_of_rounds:
            raise NotFoundError(
                f"Tournament {tournament.id} has no round {submission.round_number}"
            )

        hole = await self._resolve_hole(tournament.course_id, submission.hole_number)
        round_obj = await self._db.rounds.get_or_create_round(
            submission.tournament_id, submission.player_id, submission.round_number
        )
        if not round_obj.hole_scores:
            logger.info(
                "Started round %d for player %s in %s",
                submission.round_number, submission.player_id, tournament.id,
            )

        return await self._store(
            tournament_id=tournament.id,
            player_id=submission.player_id,
            round_id=round_obj.id,
            hole=hole,
            **submission.model_dump(include=_ENTRY_FIELDS),
        )

    async def update_score(self, score_id: str, changes: ScoreChanges) -> SubmissionResult:
        """Edit a stored hole. Goes through the same normalization as a new entry."""
        current = await self._db.rounds.get_score_by_id(score_id)
        if not current:
            raise NotFoundError(f"Score {score_id} not found")
        round_obj = await self._db.rounds.get_round(current.round_id)
        if not round_obj:
            raise NotFoundError(f"Round {current.round_id} not found")
        tournament = await self._db.tournaments.get_tournament(round_obj.tournament_id)
        if not tournament:
            raise NotFoundError(f"Tournament {round_obj.tournament_id} not found")

        hole = await self._resolve_hole(tournament.course_id, current.hole_number)
        merged = current.model_dump(include=_ENTRY_FIELDS)
        merged.update(changes.model_dump(exclude_none=True))

        return await self._store(
            tournament_id=tournament.id,
            player_id=round_obj.player_id,
            round_id=round_obj.id,
            hole=hole,
            **merged,
        )

    # ================================================================
    # Pipeline
    # ================================================================

    async def _resolve_hole(self, course_id: str, hole_number: int) -> Hole:
        hole = await self._db.courses.get_hole(course_id, hole_number)
        if not hole:
            raise NotFoundError(f"Course {course_id} has no hole {hole_number}")
        return hole

    async def _store(
        self,
        *,
        tournament_id: str,
        player_id: str,
        round_id: str,
        hole: Hole,
        strokes: int,
        putts: int,
        fairway_hit: bool,
        green_in_regulation: bool,
        powerup_used: bool,
        powerup_notes: Optional[str],
    ) -> SubmissionResult:
        entry = normalize_hole_entry(HoleEntry(
            par=hole.par,
            strokes=strokes,
            putts=putts,
            fairway_hit=fairway_hit,
            green_in_regulation=green_in_regulation,
        ))
        hole_score = HoleScore(
            round_id=round_id,
            hole_number=hole.number,
            powerup_used=powerup_used,
            powerup_notes=powerup_notes,
            **entry.model_dump(),
        )
        stored, totals = await self._db.rounds.upsert_score(round_id, hole_score, hole.id)

        catalog = await self._db.achievements.list_achievements()
        unlocked_ids = set(await self._db.achievements.get_unlocked_ids(player_id))

        hole_snapshot = HoleSnapshot(
            player_id=player_id,
            tournament_id=tournament_id,
            round_id=round_id,
            hole_number=stored.hole_number,
            par=stored.par,
            strokes=stored.strokes,
            putts=stored.putts,
            fairway_hit=stored.fairway_hit,
            green_in_regulation=stored.green_in_regulation,
        )
        unlocked = await self._unlock(hole_snapshot, catalog, unlocked_ids)

        if totals.is_complete:
            round_snapshot = await self._round_snapshot(player_id, tournament_id, round_id, totals)
            unlocked += await self._unlock(round_snapshot, catalog, unlocked_ids)

        return SubmissionResult(score=stored, totals=totals, unlocked=unlocked)

    async def _round_snapshot(
        self, player_id: str, tournament_id: str, round_id: str, totals: RoundTotals
    ) -> RoundSnapshot:
        rounds = await self._db.rounds.get_rounds_for_player(player_id)
        history = build_player_history(
            rounds,
            tournaments_played=await self._db.tournaments.count_player_tournaments(player_id),
            tournaments_won=await self._db.tournaments.count_player_wins(player_id),
        )
        this_round = next((r for r in rounds if r.id == round_id), None)
        scores = sorted(this_round.hole_scores, key=lambda s: s.hole_number) if this_round else []
        return RoundSnapshot(
            player_id=player_id,
            tournament_id=tournament_id,
            round_id=round_id,
            totals=totals,
            course_par=totals.total_par_for_completed_holes,
            longest_fairway_streak=longest_fairway_streak(scores),
            history=history,
        )

    async def _unlock(
        self, snapshot, catalog: List[Achievement], unlocked_ids: Set[str]
    ) -> List[UnlockedAchievement]:
        unlocked = []
        for achievement in evaluate_achievements(snapshot, catalog, unlocked_ids):
            record = await self._db.achievements.unlock_achievement(
                snapshot.player_id,
                achievement,
                tournament_id=snapshot.tournament_id,
                round_id=getattr(snapshot, "round_id", None),
            )
            unlocked_ids.add(achievement.id)
            if record is None:
                continue
            unlocked.append(UnlockedAchievement(
                achievement_id=achievement.id,
                name=achievement.name,
                points=achievement.points,
            ))
        return unlocked
