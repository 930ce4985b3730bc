from pydantic import Field, field_validator
from typing import Dict, Optional

from .base import BaseGolfModel


class Hole(BaseGolfModel):
    """Represents a single hole on a golf course."""
    id: Optional[str] = None
    course_id: Optional[str] = None
    number: int = Field(..., ge=1, le=18)
    par: int = Field(..., ge=3, le=5)
    handicap: Optional[int] = Field(None, ge=1, le=18)
    yardages: Dict[str, int] = Field(default_factory=dict)  # {"white": 385, "blue": 410}

    @field_validator('yardages')
    @classmethod
    def validate_yardages(cls, v):
        for tee_color, yardage in v.items():
            if yardage < 0:
                raise ValueError(f"Yardage for '{tee_color}' cannot be negative")
            if yardage > 700:
                raise ValueError(f"Yardage {yardage} for '{tee_color}' seems too high. Please verify.")
        return v

    def get_yardage(self, tee_color: str) -> Optional[int]:
        """Get yardage from a tee colour (case-insensitive)."""
        for color, yardage in self.yardages.items():
            if color.lower() == tee_color.lower():
                return yardage
        return None
