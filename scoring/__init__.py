from .achievements import (
    HoleSnapshot,
    PlayerHistory,
    RoundSnapshot,
    TournamentSnapshot,
    evaluate_achievements,
)
from .aggregator import RoundTotals, aggregate_round
from .callaway import callaway_score
from .formats import calculate_net_score, higher_is_better
from .leaderboard import LeaderboardEntry, PlayerScoreRow, rank_players
from .validator import HoleEntry, normalize_hole_entry

__all__ = [
    "HoleSnapshot",
    "PlayerHistory",
    "RoundSnapshot",
    "TournamentSnapshot",
    "evaluate_achievements",
    "RoundTotals",
    "aggregate_round",
    "callaway_score",
    "calculate_net_score",
    "higher_is_better",
    "LeaderboardEntry",
    "PlayerScoreRow",
    "rank_players",
    "HoleEntry",
    "normalize_hole_entry",
]
