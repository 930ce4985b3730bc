from .stats import (
    build_player_history,
    count_birdies,
    estimated_handicap,
    longest_fairway_streak,
    player_detailed_stats,
    round_summary,
    score_type_distribution,
)

__all__ = [
    "build_player_history",
    "count_birdies",
    "estimated_handicap",
    "longest_fairway_streak",
    "player_detailed_stats",
    "round_summary",
    "score_type_distribution",
]
