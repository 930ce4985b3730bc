"""Achievement condition evaluation.

Each ``AchievementCondition`` maps to one predicate class that inspects a
single snapshot type. Evaluation is pure; persisting unlocks is the
caller's job and must be insert-or-ignore on (player, achievement).
"""

from typing import ClassVar, Collection, Dict, Iterable, List, Optional, Type, Union

from pydantic import BaseModel, Field

from models.achievement import Achievement, AchievementCondition
from scoring.aggregator import RoundTotals


class PlayerHistory(BaseModel):
    """Career aggregates, including the triggering round."""
    rounds_completed: int = 0
    career_birdies: int = 0
    tournaments_played: int = 0
    tournaments_won: int = 0


class HoleSnapshot(BaseModel):
    """A hole score as just written."""
    player_id: str
    tournament_id: Optional[str] = None
    round_id: Optional[str] = None
    hole_number: int
    par: int
    strokes: int
    putts: int = 0
    fairway_hit: bool = False
    green_in_regulation: bool = False


class RoundSnapshot(BaseModel):
    """A round that has reached 18 holes."""
    player_id: str
    tournament_id: Optional[str] = None
    round_id: Optional[str] = None
    totals: RoundTotals
    course_par: int
    longest_fairway_streak: int = 0
    history: PlayerHistory = Field(default_factory=PlayerHistory)


class TournamentSnapshot(BaseModel):
    """A player's standing when joining or finishing a tournament."""
    player_id: str
    tournament_id: Optional[str] = None
    is_first_tournament: bool = False
    is_winner: bool = False


Snapshot = Union[HoleSnapshot, RoundSnapshot, TournamentSnapshot]


class Condition:
    """Predicate over one snapshot type."""
    snapshot_type: ClassVar[Type[BaseModel]]

    def applies_to(self, snapshot: Snapshot) -> bool:
        return isinstance(snapshot, self.snapshot_type)

    def matches(self, snapshot, threshold: Optional[int]) -> bool:
        raise NotImplementedError


class HoleInOne(Condition):
    snapshot_type = HoleSnapshot

    def matches(self, snapshot: HoleSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.strokes == 1


class Eagle(Condition):
    snapshot_type = HoleSnapshot

    def matches(self, snapshot: HoleSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.strokes <= snapshot.par - 2


class Birdie(Condition):
    snapshot_type = HoleSnapshot

    def matches(self, snapshot: HoleSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.strokes == snapshot.par - 1


class RoundCondition(Condition):
    """Round conditions only fire on a complete round."""
    snapshot_type = RoundSnapshot

    def applies_to(self, snapshot: Snapshot) -> bool:
        return super().applies_to(snapshot) and snapshot.totals.is_complete


class UnderParRound(RoundCondition):
    def matches(self, snapshot: RoundSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.totals.total_strokes < snapshot.course_par


class ScoreUnderThreshold(RoundCondition):
    def matches(self, snapshot: RoundSnapshot, threshold: Optional[int]) -> bool:
        return threshold is not None and snapshot.totals.total_strokes < threshold


class FairwayStreak(RoundCondition):
    def matches(self, snapshot: RoundSnapshot, threshold: Optional[int]) -> bool:
        return threshold is not None and snapshot.longest_fairway_streak >= threshold


class BirdieMilestone(RoundCondition):
    def matches(self, snapshot: RoundSnapshot, threshold: Optional[int]) -> bool:
        return threshold is not None and snapshot.history.career_birdies >= threshold


class RoundsCompleted(RoundCondition):
    def matches(self, snapshot: RoundSnapshot, threshold: Optional[int]) -> bool:
        return threshold is not None and snapshot.history.rounds_completed >= threshold


class FirstTournament(Condition):
    snapshot_type = TournamentSnapshot

    def matches(self, snapshot: TournamentSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.is_first_tournament


class TournamentWin(Condition):
    snapshot_type = TournamentSnapshot

    def matches(self, snapshot: TournamentSnapshot, threshold: Optional[int]) -> bool:
        return snapshot.is_winner


CONDITIONS: Dict[AchievementCondition, Condition] = {
    AchievementCondition.HOLE_IN_ONE: HoleInOne(),
    AchievementCondition.EAGLE: Eagle(),
    AchievementCondition.BIRDIE: Birdie(),
    AchievementCondition.UNDER_PAR_ROUND: UnderParRound(),
    AchievementCondition.SCORE_UNDER_THRESHOLD: ScoreUnderThreshold(),
    AchievementCondition.FAIRWAY_STREAK: FairwayStreak(),
    AchievementCondition.BIRDIE_MILESTONE: BirdieMilestone(),
    AchievementCondition.ROUNDS_COMPLETED: RoundsCompleted(),
    AchievementCondition.FIRST_TOURNAMENT: FirstTournament(),
    AchievementCondition.TOURNAMENT_WIN: TournamentWin(),
}


def condition_met(achievement: Achievement, snapshot: Snapshot) -> bool:
    condition = CONDITIONS[achievement.condition]
    return condition.applies_to(snapshot) and condition.matches(snapshot, achievement.threshold)


def evaluate_achievements(
    snapshot: Snapshot,
    catalog: Iterable[Achievement],
    unlocked_ids: Collection[str] = (),
) -> List[Achievement]:
    """Active achievements in the catalog whose condition the snapshot meets.

    Already-unlocked ids are skipped; this is a shortcut only, the store's
    uniqueness constraint is what guarantees at-most-once.
    """
    return [
        a for a in catalog
        if a.is_active
        and a.id not in unlocked_ids
        and condition_met(a, snapshot)
    ]
