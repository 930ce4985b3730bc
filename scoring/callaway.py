"""Callaway handicap system.

Used when players have no official handicap: each hole is capped at double
par, and a number of the player's own worst holes (scaled to the capped
gross) is deducted.
"""

from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from models.hole_score import HoleScore
from scoring.rounding import Number, round_half_up, to_decimal

# (adjusted gross ceiling, worst holes deducted)
DEDUCTION_TABLE: Tuple[Tuple[int, Decimal], ...] = (
    (72, Decimal("0")),
    (75, Decimal("0.5")),
    (80, Decimal("1")),
    (85, Decimal("1.5")),
    (90, Decimal("2")),
    (95, Decimal("2.5")),
    (100, Decimal("3")),
    (105, Decimal("3.5")),
    (110, Decimal("4")),
    (115, Decimal("4.5")),
    (120, Decimal("5")),
    (125, Decimal("5.5")),
)
MAX_DEDUCTION = Decimal("6")


def capped_strokes(score: HoleScore) -> int:
    """Strokes on a hole, capped at double par."""
    return min(score.strokes, 2 * score.par)


def adjusted_gross(scores: Iterable[HoleScore]) -> int:
    return sum(capped_strokes(s) for s in scores)


def deduction_for(adjusted: int) -> Decimal:
    """Look up the number of worst holes to deduct for an adjusted gross."""
    for ceiling, worst_holes in DEDUCTION_TABLE:
        if adjusted <= ceiling:
            return worst_holes
    return MAX_DEDUCTION


def worst_hole_deficits(scores: Iterable[HoleScore]) -> List[int]:
    """Over-par deficits, worst first.

    Ties on deficit go to the hole with more capped strokes.
    """
    over_par = [
        (capped_strokes(s) - s.par, capped_strokes(s))
        for s in scores
        if capped_strokes(s) > s.par
    ]
    over_par.sort(key=lambda d: (d[0], d[1]), reverse=True)
    return [deficit for deficit, _ in over_par]


def total_deduction(scores: List[HoleScore], deduction: Decimal) -> int:
    """Strokes removed for a given worst-hole count (e.g. 2.5 holes)."""
    if deduction <= 0:
        return 0

    deficits = worst_hole_deficits(scores)
    whole_holes = int(deduction)
    total = sum(deficits[:whole_holes])

    if deduction % 1 and len(deficits) > whole_holes:
        total += deficits[whole_holes] // 2
    return total


def callaway_score(scores: Iterable[HoleScore], handicap: Optional[Number] = None) -> int:
    """Final Callaway net score for a complete round.

    The handicap is added here, unlike the subtractive stroke-play formats.
    """
    scores = list(scores)
    adjusted = adjusted_gross(scores)
    deduction = deduction_for(adjusted)
    removed = total_deduction(scores, deduction)
    return round_half_up(Decimal(adjusted - removed) + to_decimal(handicap))
