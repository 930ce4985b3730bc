import pytest

from analytics.stats import (
    build_player_history,
    count_birdies,
    estimated_handicap,
    longest_fairway_streak,
    player_detailed_stats,
    round_summary,
    score_type_distribution,
)
from models.hole_score import HoleScore
from models.round import Round


def _par(i: int) -> int:
    if i <= 4:
        return 3
    if i <= 14:
        return 4
    return 5


def _build_rounds():
    # Round 1: 4 on every hole (par 72 layout) -> even par, four birdies on the par 5s
    round_1_scores = [
        HoleScore(
            hole_number=i,
            par=_par(i),
            strokes=4,
            putts=2,
            fairway_hit=(_par(i) > 3 and i != 10),
            green_in_regulation=(i <= 10),
        )
        for i in range(1, 19)
    ]
    # Round 2: bogey on odd holes, par on even holes -> 81
    round_2_scores = [
        HoleScore(
            hole_number=i,
            par=_par(i),
            strokes=_par(i) + (1 if i % 2 == 1 else 0),
            putts=(2 if i % 2 == 1 else 1),
            green_in_regulation=(i % 2 == 0),
        )
        for i in range(1, 19)
    ]

    round_1 = Round(id="r1", tournament_id="t1", player_id="p1", hole_scores=round_1_scores)
    round_2 = Round(id="r2", tournament_id="t2", player_id="p1", hole_scores=round_2_scores)
    return [round_1, round_2]


def test_round_summary():
    rounds = _build_rounds()
    summary = round_summary(rounds[0])

    assert summary["holes_played"] == 18
    assert summary["total_strokes"] == 72
    assert summary["total_putts"] == 36
    assert summary["total_gir"] == 10
    assert summary["gir_percentage"] == pytest.approx(55.5555, rel=1e-3)
    assert summary["putts_per_hole"] == 2


def test_longest_fairway_streak_skips_par_threes():
    scores = [
        HoleScore(hole_number=1, par=4, strokes=4, fairway_hit=True),
        HoleScore(hole_number=2, par=3, strokes=3),
        HoleScore(hole_number=3, par=5, strokes=5, fairway_hit=True),
        HoleScore(hole_number=4, par=4, strokes=4),
        HoleScore(hole_number=5, par=4, strokes=4, fairway_hit=True),
    ]
    assert longest_fairway_streak(scores) == 2
    assert longest_fairway_streak([]) == 0


def test_player_history():
    rounds = _build_rounds()
    partial = Round(id="r3", hole_scores=[HoleScore(hole_number=15, par=5, strokes=4)])

    history = build_player_history(rounds + [partial], tournaments_played=2, tournaments_won=1)

    assert history.rounds_completed == 2
    assert history.career_birdies == count_birdies(rounds[0].hole_scores) + 1 == 5
    assert history.tournaments_played == 2
    assert history.tournaments_won == 1


@pytest.mark.parametrize("average, slope, expected", [
    (76.5, 113, 4.5),
    (90.0, 130, 15.6),
    (72.0, 113, 0.0),
    (60.0, 113, -5.0),      # floor
    (120.0, 113, 36.0),     # ceiling
])
def test_estimated_handicap(average, slope, expected):
    assert estimated_handicap(average, slope_rating=slope) == expected


def test_estimated_handicap_without_rounds():
    assert estimated_handicap(None) is None


def test_player_detailed_stats():
    stats = player_detailed_stats(_build_rounds())

    assert stats["total_rounds"] == 2
    assert stats["average_score"] == 76.5
    assert stats["best_round"] == {"round_id": "r1", "tournament_id": "t1", "score": 72}
    assert stats["best_hole"]["hole_number"] == 15
    assert stats["best_hole"]["relative_to_par"] == -1
    assert stats["longest_fairway_streak"] == 8
    assert stats["fewest_putts"] == 27
    assert stats["total_birdies"] == 4
    assert stats["gir_percentage"] == 52.8
    assert stats["fairway_percentage"] == 36.1
    assert stats["putts_per_round"] == 31.5
    assert stats["birdie_percentage"] == 11.1
    assert stats["estimated_handicap"] == 4.5


def test_player_detailed_stats_without_rounds():
    stats = player_detailed_stats([Round(id="empty")])
    assert stats["total_rounds"] == 0
    assert stats["average_score"] is None
    assert stats["best_round"] is None
    assert stats["longest_fairway_streak"] == 0
    assert stats["estimated_handicap"] is None


def test_score_type_distribution():
    rows = score_type_distribution(_build_rounds())
    counts = {row["score_type"]: row["count"] for row in rows}

    assert counts == {"par": 19, "bogey": 13, "birdie": 4}
    assert rows[0]["score_type"] == "par"
