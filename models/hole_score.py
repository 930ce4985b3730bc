from pydantic import Field, model_validator
from typing import Optional

from .base import BaseGolfModel


SCORE_NAMES = {
    -2: "eagle",
    -1: "birdie",
    0: "par",
    1: "bogey",
    2: "double bogey",
    3: "triple bogey",
    4: "quadruple bogey",
}


class HoleScore(BaseGolfModel):
    """A player's persisted result on a single hole of a round."""
    id: Optional[str] = None
    round_id: Optional[str] = None
    hole_number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=5)
    strokes: int = Field(..., ge=1)
    putts: int = Field(0, ge=0)
    fairway_hit: bool = False
    green_in_regulation: bool = False
    powerup_used: bool = False
    powerup_notes: Optional[str] = None

    @model_validator(mode='after')
    def validate_score_consistency(self):
        if self.putts > self.strokes:
            raise ValueError(f"Putts ({self.putts}) cannot exceed strokes ({self.strokes})")
        if self.par == 3 and self.fairway_hit:
            raise ValueError("Fairway hit must be false for par 3 holes")
        return self

    def to_par(self) -> int:
        """Score relative to par (+2, -1, etc.)."""
        return self.strokes - self.par

    def get_score_type(self) -> str:
        """Get the name for this score (eagle, birdie, par, bogey, etc.)."""
        if self.strokes == 1:
            return "hole in one"
        relative = self.to_par()
        if relative <= -3:
            return "albatross"
        if relative >= 5:
            return "5+ over"
        return SCORE_NAMES[relative]
