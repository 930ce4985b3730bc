import pytest
from decimal import Decimal
from pydantic import ValidationError

from models import (
    Achievement,
    AchievementCondition,
    Course,
    Hole,
    HoleScore,
    Round,
    Tournament,
    TournamentPlayer,
)
from models.tournament import ScoringFormat, TournamentStatus


# ================================================================
# Hole
# ================================================================

def test_hole_validation():
    h = Hole(number=1, par=4, handicap=18)
    assert h.number == 1
    assert h.par == 4

    with pytest.raises(ValidationError):
        Hole(number=1, par=6)          # par > 5

    with pytest.raises(ValidationError):
        Hole(number=19, par=4)         # hole > 18

    with pytest.raises(ValidationError):
        Hole(number=1, par=4, handicap=19)


def test_hole_yardages():
    h = Hole(number=1, par=4, yardages={"White": 385, "Blue": 410})
    assert h.get_yardage("blue") == 410   # case-insensitive
    assert h.get_yardage("red") is None

    with pytest.raises(ValidationError):
        Hole(number=1, par=4, yardages={"white": -5})

    with pytest.raises(ValidationError):
        Hole(number=1, par=4, yardages={"white": 800})


def test_assignment_is_validated():
    h = Hole(number=1, par=4)
    h.par = 3
    assert h.par == 3

    with pytest.raises(ValidationError):
        h.par = 7


# ================================================================
# Course
# ================================================================

def test_course_par_calculations():
    holes = [Hole(number=i, par=4 if i % 3 else 5, handicap=i) for i in range(1, 19)]
    course = Course(name="Test Course", holes=holes)

    assert course.front_nine_par == 39
    assert course.back_nine_par == 39
    assert course.total_par == 78
    assert course.hole_pars()[3] == 5


def test_course_without_holes():
    course = Course(name="Empty")
    assert course.total_par is None
    assert course.front_nine_par is None
    assert course.get_hole(1) is None


def test_course_rejects_duplicate_hole_numbers():
    with pytest.raises(ValidationError):
        Course(name="Dup", holes=[Hole(number=1, par=4), Hole(number=1, par=3)])


# ================================================================
# HoleScore
# ================================================================

def test_hole_score_validation():
    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=4, strokes=4, putts=5)     # putts > strokes

    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=4, strokes=0)              # strokes < 1

    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, par=3, strokes=3, fairway_hit=True)

    with pytest.raises(ValidationError):
        HoleScore(hole_number=1, strokes=4)                     # par required


def test_hole_score_types():
    assert HoleScore(hole_number=1, par=4, strokes=5).to_par() == 1
    assert HoleScore(hole_number=1, par=4, strokes=5).get_score_type() == "bogey"
    assert HoleScore(hole_number=1, par=5, strokes=3).get_score_type() == "eagle"
    assert HoleScore(hole_number=1, par=4, strokes=3).get_score_type() == "birdie"
    assert HoleScore(hole_number=1, par=4, strokes=4).get_score_type() == "par"
    assert HoleScore(hole_number=1, par=4, strokes=6).get_score_type() == "double bogey"


def test_score_type_extremes():
    assert HoleScore(hole_number=1, par=3, strokes=1).get_score_type() == "hole in one"
    assert HoleScore(hole_number=1, par=4, strokes=1).get_score_type() == "hole in one"
    assert HoleScore(hole_number=1, par=5, strokes=2).get_score_type() == "albatross"
    assert HoleScore(hole_number=1, par=4, strokes=8).get_score_type() == "quadruple bogey"
    assert HoleScore(hole_number=1, par=4, strokes=9).get_score_type() == "5+ over"


# ================================================================
# Round
# ================================================================

def test_round_totals():
    scores = [
        HoleScore(hole_number=1, par=4, strokes=4, putts=2, green_in_regulation=True),
        HoleScore(hole_number=10, par=4, strokes=5, putts=1, fairway_hit=True),
    ]
    totals = Round(hole_scores=scores).totals()

    assert totals.front_nine_total == 4
    assert totals.back_nine_total == 5
    assert totals.total_putts == 3
    assert totals.greens_in_regulation == 1
    assert totals.fairways_hit == 1
    assert totals.score_to_par == 1
    assert not totals.is_complete


def test_round_get_hole_score():
    r = Round(hole_scores=[HoleScore(hole_number=1, par=4, strokes=4)])
    assert r.get_hole_score(1).strokes == 4
    assert r.get_hole_score(2) is None


def test_round_number_must_be_positive():
    with pytest.raises(ValidationError):
        Round(round_number=0)


# ================================================================
# Tournament
# ================================================================

def test_tournament_defaults():
    t = Tournament(name="Spring Open", course_id="c1")
    assert t.status == TournamentStatus.UPCOMING
    assert t.scoring_format == ScoringFormat.STROKE_PLAY
    assert t.number_of_rounds == 1
    assert t.handicap_allowance == Decimal("1.00")


def test_tournament_allowance_bounds():
    with pytest.raises(ValidationError):
        Tournament(name="x", course_id="c1", handicap_allowance=Decimal("1.5"))

    with pytest.raises(ValidationError):
        Tournament(name="x", course_id="c1", number_of_rounds=0)


def test_effective_handicap():
    assert TournamentPlayer(player_id="p1", handicap=Decimal("10")).effective_handicap(
        Decimal("0.80")
    ) == Decimal("8.00")
    assert TournamentPlayer(player_id="p1").effective_handicap(Decimal("0.80")) == 0


# ================================================================
# Achievement
# ================================================================

def test_achievement_condition_must_be_known():
    a = Achievement(name="Ace", condition="hole_in_one", points=100)
    assert a.condition is AchievementCondition.HOLE_IN_ONE
    assert a.is_active

    with pytest.raises(ValidationError):
        Achievement(name="Mystery", condition="three_putt_hero")

    with pytest.raises(ValidationError):
        Achievement(name="Negative", condition="birdie", points=-1)

