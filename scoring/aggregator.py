"""Fold a round's hole scores into nine-hole and round totals."""

from typing import Dict, Iterable

from pydantic import BaseModel

from models.hole_score import HoleScore

HOLES_PER_ROUND = 18


class RoundTotals(BaseModel):
    """Aggregate view of one round, always derived from the full score set."""
    front_nine_total: int = 0
    back_nine_total: int = 0
    total_strokes: int = 0
    holes_completed: int = 0
    total_par_for_completed_holes: int = 0
    score_to_par: int = 0
    total_putts: int = 0
    fairways_hit: int = 0
    greens_in_regulation: int = 0
    is_complete: bool = False


def latest_by_hole(scores: Iterable[HoleScore]) -> Dict[int, HoleScore]:
    latest: Dict[int, HoleScore] = {}
    for score in scores:
        latest[score.hole_number] = score
    return latest


def aggregate_round(scores: Iterable[HoleScore]) -> RoundTotals:
    """Recompute round totals from scratch.

    Later entries for the same hole replace earlier ones, matching
    upsert-by-hole persistence.
    """
    by_hole = latest_by_hole(s for s in scores if s.strokes >= 1)

    front = sum(s.strokes for n, s in by_hole.items() if 1 <= n <= 9)
    back = sum(s.strokes for n, s in by_hole.items() if 10 <= n <= 18)
    total = front + back
    holes_completed = len(by_hole)
    par_played = sum(s.par for s in by_hole.values())

    return RoundTotals(
        front_nine_total=front,
        back_nine_total=back,
        total_strokes=total,
        holes_completed=holes_completed,
        total_par_for_completed_holes=par_played,
        score_to_par=total - par_played if holes_completed > 0 else 0,
        total_putts=sum(s.putts for s in by_hole.values()),
        fairways_hit=sum(1 for s in by_hole.values() if s.fairway_hit),
        greens_in_regulation=sum(1 for s in by_hole.values() if s.green_in_regulation),
        is_complete=holes_completed == HOLES_PER_ROUND,
    )
