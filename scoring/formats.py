"""Net score calculation for the selectable tournament scoring formats."""

from decimal import Decimal
from typing import Iterable, Optional

from models.hole_score import HoleScore
from models.tournament import ScoringFormat
from scoring.aggregator import HOLES_PER_ROUND, latest_by_hole
from scoring.callaway import callaway_score
from scoring.rounding import Number, round_half_up, to_decimal

# Points for playing exactly to handicap.
STABLEFORD_BASELINE = 36


def higher_is_better(scoring_format: ScoringFormat) -> bool:
    """Stableford ranks by points, everything else by fewest strokes."""
    return ScoringFormat(scoring_format) is ScoringFormat.STABLEFORD


def stableford_points(gross_total: int, handicap: Decimal, total_par: int) -> int:
    net = Decimal(gross_total) - handicap
    diff = Decimal(total_par) - net
    return max(0, round_half_up(STABLEFORD_BASELINE + diff))


def calculate_net_score(
    gross_total: int,
    handicap: Optional[Number],
    scoring_format: ScoringFormat,
    hole_scores: Iterable[HoleScore] = (),
    hole_pars: Optional[Iterable[int]] = None,
) -> Optional[int]:
    """Net score (Stableford: points) for one round.

    Returns None when nothing has been scored yet. A Callaway round that is
    not complete gets its unadjusted gross back.
    """
    if gross_total == 0:
        return None

    scoring_format = ScoringFormat(scoring_format)
    handicap = to_decimal(handicap)
    scores = list(latest_by_hole(hole_scores).values())

    if scoring_format in (ScoringFormat.STROKE_PLAY, ScoringFormat.HANDICAP):
        return round_half_up(Decimal(gross_total) - handicap)

    if scoring_format is ScoringFormat.STABLEFORD:
        if hole_pars is not None:
            total_par = sum(hole_pars)
        else:
            total_par = sum(s.par for s in scores)
        return stableford_points(gross_total, handicap, total_par)

    if len(scores) != HOLES_PER_ROUND:
        return gross_total
    return callaway_score(scores, handicap)
