from datetime import datetime
from pydantic import Field
from typing import List, Optional, TYPE_CHECKING

from .base import BaseGolfModel
from .hole_score import HoleScore

if TYPE_CHECKING:
    from scoring.aggregator import RoundTotals


class Round(BaseGolfModel):
    """One player's play of one numbered round in a tournament."""
    id: Optional[str] = None
    tournament_id: Optional[str] = None
    player_id: Optional[str] = None
    round_number: int = Field(1, ge=1)
    hole_scores: List[HoleScore] = Field(default_factory=list)
    is_complete: bool = False
    created_at: Optional[datetime] = None

    def get_hole_score(self, hole_number: int) -> Optional[HoleScore]:
        """Get score for a specific hole by number."""
        for score in self.hole_scores:
            if score.hole_number == hole_number:
                return score
        return None

    def totals(self) -> "RoundTotals":
        """Fresh aggregate of the round's scores."""
        from scoring.aggregator import aggregate_round
        return aggregate_round(self.hole_scores)
