"""Player achievement and statistics endpoints."""

from fastapi import APIRouter, Depends
from database.db_manager import DatabaseManager
from api.dependencies import get_db
from api.schemas import PlayerAchievementsResponse, PlayerStatsResponse
from analytics.stats import player_detailed_stats, score_type_distribution

router = APIRouter()


@router.get("/{player_id}/achievements", response_model=PlayerAchievementsResponse)
async def get_player_achievements(player_id: str, db: DatabaseManager = Depends(get_db)):
    achievements = await db.achievements.get_player_achievements(player_id)
    return PlayerAchievementsResponse(player_id=player_id, achievements=achievements)


@router.get("/{player_id}/stats", response_model=PlayerStatsResponse)
async def get_player_stats(player_id: str, db: DatabaseManager = Depends(get_db)):
    stats = await db.achievements.get_player_stats(player_id)
    rounds = await db.rounds.get_rounds_for_player(player_id)
    return PlayerStatsResponse(
        player_id=player_id,
        total_achievements=stats.total_achievements,
        achievement_points=stats.achievement_points,
        birdies=stats.birdies,
        eagles=stats.eagles,
        holes_in_one=stats.holes_in_one,
        tournaments_played=await db.tournaments.count_player_tournaments(player_id),
        tournaments_won=await db.tournaments.count_player_wins(player_id),
        scoring=player_detailed_stats(rounds),
        score_types=score_type_distribution(rounds),
    )
