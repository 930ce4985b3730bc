import pytest

from models import Achievement
from scoring.achievements import (
    HoleSnapshot,
    PlayerHistory,
    RoundSnapshot,
    TournamentSnapshot,
    condition_met,
    evaluate_achievements,
)
from scoring.aggregator import RoundTotals


def _achievement(condition, threshold=None, **kw):
    return Achievement(
        id=kw.pop("id", condition), name=condition.replace("_", " ").title(),
        condition=condition, threshold=threshold, points=kw.pop("points", 10), **kw,
    )


def _hole(strokes, par=4):
    return HoleSnapshot(player_id="p1", hole_number=5, par=par, strokes=strokes)


def _round(total_strokes=70, *, complete=True, par=72, streak=0, history=None):
    totals = RoundTotals(
        total_strokes=total_strokes,
        holes_completed=18 if complete else 12,
        is_complete=complete,
    )
    return RoundSnapshot(
        player_id="p1", totals=totals, course_par=par,
        longest_fairway_streak=streak, history=history or PlayerHistory(),
    )


CATALOG = [
    _achievement("hole_in_one", points=100),
    _achievement("eagle", points=50),
    _achievement("birdie"),
    _achievement("under_par_round", points=40),
    _achievement("score_under_threshold", 80, points=20),
    _achievement("fairway_streak", 5),
    _achievement("birdie_milestone", 10),
    _achievement("rounds_completed", 3),
    _achievement("first_tournament"),
    _achievement("tournament_win", points=75),
]


def _ids(snapshot, catalog=CATALOG, unlocked=()):
    return {a.id for a in evaluate_achievements(snapshot, catalog, unlocked)}


# ================================================================
# Hole conditions
# ================================================================

@pytest.mark.parametrize("strokes, par, expected", [
    (3, 4, {"birdie"}),
    (4, 4, set()),
    (3, 5, {"eagle"}),
    (2, 5, {"eagle"}),            # albatross also counts as eagle or better
    (1, 3, {"hole_in_one", "eagle"}),
    (1, 4, {"hole_in_one", "eagle"}),
])
def test_hole_conditions(strokes, par, expected):
    assert _ids(_hole(strokes, par)) == expected


def test_hole_snapshot_never_triggers_round_or_tournament_conditions():
    assert _ids(_hole(3)) == {"birdie"}


# ================================================================
# Round conditions
# ================================================================

def test_round_conditions_need_complete_round():
    assert _ids(_round(60, complete=False, streak=10)) == set()


def test_under_par_and_threshold():
    assert _ids(_round(71)) == {"under_par_round", "score_under_threshold"}
    assert _ids(_round(72)) == {"score_under_threshold"}
    assert _ids(_round(80)) == set()


def test_fairway_streak_threshold():
    assert "fairway_streak" in _ids(_round(85, streak=5))
    assert "fairway_streak" not in _ids(_round(85, streak=4))


def test_history_milestones():
    history = PlayerHistory(rounds_completed=3, career_birdies=9)
    assert _ids(_round(85, history=history)) == {"rounds_completed"}

    history = PlayerHistory(rounds_completed=1, career_birdies=10)
    assert _ids(_round(85, history=history)) == {"birdie_milestone"}


def test_threshold_conditions_without_threshold_never_fire():
    loose = _achievement("score_under_threshold", None, id="no-threshold")
    assert not condition_met(loose, _round(60))


# ================================================================
# Tournament conditions
# ================================================================

def test_tournament_conditions():
    snap = TournamentSnapshot(player_id="p1", is_first_tournament=True)
    assert _ids(snap) == {"first_tournament"}

    snap = TournamentSnapshot(player_id="p1", is_winner=True)
    assert _ids(snap) == {"tournament_win"}


# ================================================================
# Catalog filtering
# ================================================================

def test_already_unlocked_are_skipped():
    assert _ids(_hole(3), unlocked={"birdie"}) == set()


def test_inactive_achievements_are_skipped():
    retired = _achievement("birdie", id="old-birdie", is_active=False)
    assert _ids(_hole(3), catalog=[retired]) == set()


def test_evaluation_has_no_side_effects():
    catalog = list(CATALOG)
    snapshot = _hole(3)
    first = evaluate_achievements(snapshot, catalog)
    second = evaluate_achievements(snapshot, catalog)
    assert [a.id for a in first] == [a.id for a in second]
    assert catalog == CATALOG
