"""Conversion between asyncpg database rows and Pydantic domain models.

Centralizes all mapping logic between the normalized DB schema
and the domain models.
"""

import json
from decimal import Decimal
from typing import Optional
from uuid import UUID

from models import (
    Achievement,
    Course,
    Hole,
    HoleScore,
    PlayerAchievement,
    PlayerStats,
    Round,
    Tournament,
    TournamentPlayer,
)
from scoring.leaderboard import PlayerScoreRow


def _str_id(value) -> Optional[str]:
    return str(value) if value is not None else None


def _uuid(value: Optional[str]) -> Optional[UUID]:
    return UUID(value) if value else None


# ================================================================
# Row -> Model (reads)
# ================================================================

def hole_from_row(row) -> Hole:
    """courses.holes row -> Hole model."""
    yardages = row["yardages"] or {}
    if isinstance(yardages, str):
        yardages = json.loads(yardages)
    return Hole(
        id=_str_id(row["id"]),
        course_id=_str_id(row["course_id"]),
        number=row["hole_number"],
        par=row["par"],
        handicap=row["handicap"],
        yardages=yardages,
    )


def course_from_rows(course_row, hole_rows: list) -> Course:
    """Assemble a Course from its row and hole rows."""
    holes = sorted((hole_from_row(r) for r in hole_rows), key=lambda h: h.number)
    return Course(
        id=str(course_row["id"]),
        name=course_row["name"],
        location=course_row["location"],
        description=course_row["description"],
        holes=holes,
        created_at=course_row["created_at"],
    )


def tournament_from_row(row) -> Tournament:
    """tournaments.tournaments row -> Tournament model."""
    return Tournament(
        id=str(row["id"]),
        name=row["name"],
        description=row["description"],
        course_id=str(row["course_id"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        status=row["status"],
        max_players=row["max_players"],
        number_of_rounds=row["number_of_rounds"],
        scoring_format=row["scoring_format"],
        handicap_allowance=Decimal(row["handicap_allowance"]),
        created_by=_str_id(row["created_by"]),
        winner_id=_str_id(row["winner_id"]),
        created_at=row["created_at"],
    )


def tournament_player_from_row(row) -> TournamentPlayer:
    """tournaments.players row -> TournamentPlayer model."""
    return TournamentPlayer(
        id=str(row["id"]),
        tournament_id=str(row["tournament_id"]),
        player_id=str(row["player_id"]),
        name=row["name"],
        handicap=Decimal(row["handicap"]) if row["handicap"] is not None else None,
        tee_selection=row["tee_selection"],
        joined_at=row["joined_at"],
    )


def hole_score_from_row(row) -> HoleScore:
    """tournaments.scores row -> HoleScore model."""
    return HoleScore(
        id=str(row["id"]),
        round_id=str(row["round_id"]),
        hole_number=row["hole_number"],
        par=row["par_played"],
        strokes=row["strokes"],
        putts=row["putts"],
        fairway_hit=row["fairway_hit"],
        green_in_regulation=row["green_in_regulation"],
        powerup_used=row["powerup_used"],
        powerup_notes=row["powerup_notes"],
    )


def round_from_rows(round_row, score_rows: list) -> Round:
    """Assemble a Round from its row and score rows."""
    hole_scores = sorted(
        (hole_score_from_row(r) for r in score_rows),
        key=lambda hs: hs.hole_number,
    )
    return Round(
        id=str(round_row["id"]),
        tournament_id=str(round_row["tournament_id"]),
        player_id=str(round_row["player_id"]),
        round_number=round_row["round_number"],
        hole_scores=hole_scores,
        is_complete=round_row["is_complete"],
        created_at=round_row["created_at"],
    )


def player_score_row_from_row(row) -> PlayerScoreRow:
    """Tournament-wide score join row -> PlayerScoreRow."""
    return PlayerScoreRow(
        player_id=str(row["player_id"]),
        player_name=row["player_name"],
        round_id=str(row["round_id"]),
        round_number=row["round_number"],
        hole_number=row["hole_number"],
        par=row["par_played"],
        strokes=row["strokes"],
        putts=row["putts"],
        fairway_hit=row["fairway_hit"],
        green_in_regulation=row["green_in_regulation"],
    )


def achievement_from_row(row) -> Achievement:
    """achievements.achievements row -> Achievement model."""
    return Achievement(
        id=str(row["id"]),
        name=row["name"],
        description=row["description"],
        condition=row["condition"],
        rarity=row["rarity"],
        category=row["category"],
        points=row["points"],
        threshold=row["threshold"],
        is_active=row["is_active"],
    )


def player_achievement_from_row(row) -> PlayerAchievement:
    """achievements.player_achievements row -> PlayerAchievement model."""
    return PlayerAchievement(
        id=str(row["id"]),
        player_id=str(row["player_id"]),
        achievement_id=str(row["achievement_id"]),
        tournament_id=_str_id(row["tournament_id"]),
        round_id=_str_id(row["round_id"]),
        unlocked_at=row["unlocked_at"],
    )


def player_stats_from_row(row) -> PlayerStats:
    """achievements.player_stats row -> PlayerStats model."""
    return PlayerStats(
        player_id=str(row["player_id"]),
        total_achievements=row["total_achievements"],
        achievement_points=row["achievement_points"],
        birdies=row["birdies"],
        eagles=row["eagles"],
        holes_in_one=row["holes_in_one"],
        last_updated=row["last_updated"],
    )


# ================================================================
# Model -> Row (writes)
# ================================================================

def hole_to_row(hole: Hole, course_id: UUID) -> tuple:
    """Hole -> tuple for courses.holes INSERT (for executemany)."""
    return (course_id, hole.number, hole.par, hole.handicap, json.dumps(hole.yardages))


def tournament_to_row(tournament: Tournament) -> dict:
    """Tournament -> dict for tournaments.tournaments INSERT."""
    return {
        "name": tournament.name,
        "description": tournament.description,
        "course_id": UUID(tournament.course_id),
        "start_date": tournament.start_date,
        "end_date": tournament.end_date,
        "status": tournament.status.value,
        "max_players": tournament.max_players,
        "number_of_rounds": tournament.number_of_rounds,
        "scoring_format": tournament.scoring_format.value,
        "handicap_allowance": tournament.handicap_allowance,
        "created_by": _uuid(tournament.created_by),
    }


def hole_score_to_row(hs: HoleScore, round_id: UUID, hole_id: Optional[UUID]) -> tuple:
    """HoleScore -> tuple for tournaments.scores upsert (hole_id may be None)."""
    return (
        round_id, hole_id, hs.hole_number, hs.par,
        hs.strokes, hs.putts, hs.fairway_hit, hs.green_in_regulation,
        hs.powerup_used, hs.powerup_notes,
    )


def achievement_to_row(achievement: Achievement) -> dict:
    """Achievement -> dict for achievements.achievements INSERT."""
    return {
        "name": achievement.name,
        "description": achievement.description,
        "condition": achievement.condition.value,
        "rarity": achievement.rarity.value,
        "category": achievement.category,
        "points": achievement.points,
        "threshold": achievement.threshold,
        "is_active": achievement.is_active,
    }
