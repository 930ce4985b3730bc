"""Golf-domain consistency rules for a single hole entry.

Entries are corrected, never rejected, apart from the structural failures
pydantic enforces on construction (strokes < 1, missing or invalid par).
"""

from pydantic import BaseModel, ConfigDict, Field


class HoleEntry(BaseModel):
    """A candidate hole result as entered during play."""
    model_config = ConfigDict(frozen=True)

    par: int = Field(..., ge=3, le=5)
    strokes: int = Field(..., ge=1)
    putts: int = Field(0, ge=0)
    fairway_hit: bool = False
    green_in_regulation: bool = False


def normalize_hole_entry(entry: HoleEntry) -> HoleEntry:
    """Apply the correction rules in order and return the corrected entry."""
    strokes = entry.strokes
    putts = entry.putts
    fairway_hit = entry.fairway_hit

    # GIR is derived from the stroke split, not taken from the player.
    shots_to_green = strokes - putts
    gir_required_shots = entry.par - 2
    green_in_regulation = shots_to_green <= gir_required_shots

    # At least one non-putt stroke must exist.
    if putts > strokes:
        putts = max(0, strokes - 1)

    if not green_in_regulation and strokes == entry.par and putts >= 2:
        putts = 1

    # Holed from off the green.
    if green_in_regulation and putts == 0 and strokes < entry.par:
        green_in_regulation = False

    if entry.par == 3:
        fairway_hit = False

    return HoleEntry(
        par=entry.par,
        strokes=strokes,
        putts=putts,
        fairway_hit=fairway_hit,
        green_in_regulation=green_in_regulation,
    )
