from datetime import datetime
from pydantic import Field, model_validator
from typing import Dict, List, Optional

from .base import BaseGolfModel
from .hole import Hole


class Course(BaseGolfModel):
    """Golf course with its holes."""
    id: Optional[str] = None
    name: str
    location: Optional[str] = None
    description: Optional[str] = None
    holes: List[Hole] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    @model_validator(mode='after')
    def validate_unique_hole_numbers(self):
        numbers = [h.number for h in self.holes]
        if len(numbers) != len(set(numbers)):
            raise ValueError("Hole numbers must be unique within a course")
        return self

    def get_hole(self, number: int) -> Optional[Hole]:
        """Get a hole by its number (1-18)."""
        for hole in self.holes:
            if hole.number == number:
                return hole
        return None

    def hole_pars(self) -> Dict[int, int]:
        """Map hole number -> par."""
        return {h.number: h.par for h in self.holes}

    @property
    def total_par(self) -> Optional[int]:
        if not self.holes:
            return None
        return sum(h.par for h in self.holes)

    @property
    def front_nine_par(self) -> Optional[int]:
        """Calculate par for holes 1-9."""
        front = [h.par for h in self.holes if 1 <= h.number <= 9]
        return sum(front) if front else None

    @property
    def back_nine_par(self) -> Optional[int]:
        """Calculate par for holes 10-18."""
        back = [h.par for h in self.holes if 10 <= h.number <= 18]
        return sum(back) if back else None
