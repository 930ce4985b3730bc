from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from models.hole_score import HoleScore
from models.round import Round
from scoring.achievements import PlayerHistory

# Standard rating and slope used when the course's own are unknown.
STANDARD_COURSE_RATING = 72.0
STANDARD_SLOPE_RATING = 113
HANDICAP_LIMITS = (-5.0, 36.0)


def _ordered_scores(round_obj: Round) -> List[HoleScore]:
    return sorted(round_obj.hole_scores, key=lambda s: s.hole_number)


def longest_fairway_streak(scores: Iterable[HoleScore]) -> int:
    """Longest run of consecutive fairways hit. Par 3s neither extend nor break it."""
    current = 0
    longest = 0
    for score in scores:
        if score.par == 3:
            continue
        if score.fairway_hit:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest


def count_birdies(scores: Iterable[HoleScore]) -> int:
    return sum(1 for s in scores if s.to_par() == -1)


def estimated_handicap(
    average_score: Optional[float],
    course_rating: float = STANDARD_COURSE_RATING,
    slope_rating: int = STANDARD_SLOPE_RATING,
) -> Optional[float]:
    """
    Rough handicap from a scoring average.

    Formula: (Average - Course Rating) x 113 / Slope Rating, to one decimal
    and kept within HANDICAP_LIMITS. None when there is no average.
    """
    if average_score is None:
        return None
    differential = (average_score - course_rating) * 113 / slope_rating
    low, high = HANDICAP_LIMITS
    return max(low, min(high, round(differential, 1)))


def round_summary(round_obj: Round) -> Dict[str, Optional[float]]:
    """Compute summary metrics for a single round."""
    totals = round_obj.totals()
    holes_played = totals.holes_completed

    gir_percentage: Optional[float] = None
    putts_per_hole: Optional[float] = None
    if holes_played:
        gir_percentage = (totals.greens_in_regulation / holes_played) * 100
        putts_per_hole = totals.total_putts / holes_played

    return {
        "holes_played": float(holes_played),
        "total_strokes": float(totals.total_strokes),
        "total_putts": float(totals.total_putts),
        "total_gir": float(totals.greens_in_regulation),
        "gir_percentage": gir_percentage,
        "putts_per_hole": putts_per_hole,
    }


def build_player_history(
    rounds: Iterable[Round],
    *,
    tournaments_played: int = 0,
    tournaments_won: int = 0,
) -> PlayerHistory:
    """Career aggregates used by milestone achievements."""
    rounds = list(rounds)
    return PlayerHistory(
        rounds_completed=sum(1 for r in rounds if r.totals().is_complete),
        career_birdies=sum(count_birdies(r.hole_scores) for r in rounds),
        tournaments_played=tournaments_played,
        tournaments_won=tournaments_won,
    )


def _percentage(part: int, whole: int) -> Optional[float]:
    if not whole:
        return None
    return round(part / whole * 100, 1)


def player_detailed_stats(rounds: Iterable[Round]) -> Dict[str, Any]:
    """
    Career statistics for a player across all their tournament rounds.

    Rounds are expected oldest first; the fairway streak runs across rounds
    in that order.
    """
    rounds = [r for r in rounds if r.hole_scores]
    if not rounds:
        return {
            "total_rounds": 0,
            "average_score": None,
            "best_round": None,
            "best_hole": None,
            "longest_fairway_streak": 0,
            "fewest_putts": None,
            "total_birdies": 0,
            "gir_percentage": None,
            "fairway_percentage": None,
            "putts_per_round": None,
            "birdie_percentage": None,
            "estimated_handicap": None,
        }

    totals = [(r, r.totals()) for r in rounds]
    all_scores = [s for r in rounds for s in _ordered_scores(r)]

    best_round, best_totals = min(totals, key=lambda rt: rt[1].total_strokes)
    best_hole = min(all_scores, key=lambda s: s.to_par())
    birdies = count_birdies(all_scores)
    total_putts = sum(t.total_putts for _, t in totals)
    holes = len(all_scores)
    average = sum(t.total_strokes for _, t in totals) / len(rounds)

    return {
        "total_rounds": len(rounds),
        "average_score": round(average, 1),
        "best_round": {
            "round_id": best_round.id,
            "tournament_id": best_round.tournament_id,
            "score": best_totals.total_strokes,
        },
        "best_hole": {
            "hole_number": best_hole.hole_number,
            "score": best_hole.strokes,
            "par": best_hole.par,
            "relative_to_par": best_hole.to_par(),
        },
        "longest_fairway_streak": longest_fairway_streak(all_scores),
        "fewest_putts": min(t.total_putts for _, t in totals),
        "total_birdies": birdies,
        "gir_percentage": _percentage(sum(1 for s in all_scores if s.green_in_regulation), holes),
        "fairway_percentage": _percentage(sum(1 for s in all_scores if s.fairway_hit), holes),
        "putts_per_round": round(total_putts / len(rounds), 1),
        "birdie_percentage": _percentage(birdies, holes),
        "estimated_handicap": estimated_handicap(average),
    }


def score_type_distribution(rounds: Iterable[Round]) -> List[Dict[str, Any]]:
    """Count of each score type (birdie, par, bogey, ...) across rounds."""
    counts: Dict[str, int] = {}
    for round_obj in rounds:
        for score in round_obj.hole_scores:
            name = score.get_score_type()
            counts[name] = counts.get(name, 0) + 1
    return [{"score_type": k, "count": v} for k, v in sorted(counts.items(), key=lambda kv: -kv[1])]
