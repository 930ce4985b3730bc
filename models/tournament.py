from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import Field
from typing import Optional

from .base import BaseGolfModel


class ScoringFormat(str, Enum):
    """How net standings are computed for a tournament."""
    STROKE_PLAY = "stroke_play"
    HANDICAP = "handicap"
    STABLEFORD = "stableford"
    CALLAWAY = "callaway"


class TournamentStatus(str, Enum):
    UPCOMING = "upcoming"
    ACTIVE = "active"
    COMPLETED = "completed"


class TeeColor(str, Enum):
    WHITE = "white"
    BLUE = "blue"
    RED = "red"
    GOLD = "gold"


class Tournament(BaseGolfModel):
    """A tournament played on one course over one or more rounds."""
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    course_id: str
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    status: TournamentStatus = TournamentStatus.UPCOMING
    max_players: Optional[int] = Field(None, ge=1)
    number_of_rounds: int = Field(1, ge=1)
    scoring_format: ScoringFormat = ScoringFormat.STROKE_PLAY
    # Fraction of each player's handicap applied (0.80 = 80%)
    handicap_allowance: Decimal = Field(Decimal("1.00"), ge=0, le=1)
    created_by: Optional[str] = None
    winner_id: Optional[str] = None
    created_at: Optional[datetime] = None


class TournamentPlayer(BaseGolfModel):
    """A player entered in a tournament."""
    id: Optional[str] = None
    tournament_id: Optional[str] = None
    player_id: str
    name: Optional[str] = None
    handicap: Optional[Decimal] = Field(None, ge=-10, le=54)
    tee_selection: TeeColor = TeeColor.WHITE
    joined_at: Optional[datetime] = None

    def effective_handicap(self, allowance: Decimal = Decimal("1")) -> Decimal:
        """Handicap after the tournament allowance; absent handicap counts as 0."""
        if self.handicap is None:
            return Decimal("0")
        return self.handicap * allowance
