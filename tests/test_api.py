import pytest
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient

from api.dependencies import get_db, get_score_service, get_tournament_service
from api.main import create_app
from database.exceptions import DuplicateError, IntegrityError, NotFoundError
from models import Achievement, HoleScore, PlayerStats, Round, TournamentPlayer
from scoring.aggregator import aggregate_round
from scoring.leaderboard import LeaderboardEntry
from services import SubmissionResult, UnlockedAchievement


@pytest.fixture
def fake_db():
    db = MagicMock()
    db.courses = AsyncMock()
    db.tournaments = AsyncMock()
    db.rounds = AsyncMock()
    db.achievements = AsyncMock()
    return db


@pytest.fixture
def score_service():
    return AsyncMock()


@pytest.fixture
def tournament_service():
    return AsyncMock()


@pytest.fixture
def client(fake_db, score_service, tournament_service):
    app = create_app()
    app.dependency_overrides[get_db] = lambda: fake_db
    app.dependency_overrides[get_score_service] = lambda: score_service
    app.dependency_overrides[get_tournament_service] = lambda: tournament_service
    return TestClient(app)


# ================================================================
# Health
# ================================================================

def test_health_without_pool_is_degraded(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "degraded", "database": False}


# ================================================================
# Scores
# ================================================================

def test_submit_score(client, score_service):
    stored = HoleScore(id="s1", round_id="r1", hole_number=7, par=4, strokes=3, putts=1,
                       green_in_regulation=True)
    score_service.submit_score.return_value = SubmissionResult(
        score=stored,
        totals=aggregate_round([stored]),
        unlocked=[UnlockedAchievement(achievement_id="a1", name="Birdie", points=10)],
    )

    resp = client.post("/api/scores", json={
        "tournament_id": "t1", "player_id": "p1", "hole_number": 7, "strokes": 3, "putts": 1,
    })

    assert resp.status_code == 201
    body = resp.json()
    assert body["score"]["id"] == "s1"
    assert body["totals"]["total_strokes"] == 3
    assert body["unlocked"][0]["points"] == 10
    submission = score_service.submit_score.call_args[0][0]
    assert submission.round_number == 1


def test_submit_score_zero_strokes_rejected(client, score_service):
    resp = client.post("/api/scores", json={
        "tournament_id": "t1", "player_id": "p1", "hole_number": 7, "strokes": 0,
    })
    assert resp.status_code == 422
    score_service.submit_score.assert_not_awaited()


def test_submit_score_unknown_hole(client, score_service):
    score_service.submit_score.side_effect = NotFoundError("Course c1 has no hole 7")

    resp = client.post("/api/scores", json={
        "tournament_id": "t1", "player_id": "p1", "hole_number": 7, "strokes": 4,
    })
    assert resp.status_code == 404


def test_update_score_not_found(client, score_service):
    score_service.update_score.side_effect = NotFoundError("Score s9 not found")
    resp = client.put("/api/scores/s9", json={"strokes": 5})
    assert resp.status_code == 404


def test_submit_score_rejected_by_store(client, score_service):
    score_service.submit_score.side_effect = IntegrityError("check constraint violated")

    resp = client.post("/api/scores", json={
        "tournament_id": "t1", "player_id": "p1", "hole_number": 7, "strokes": 4,
    })
    assert resp.status_code == 409


def test_update_score_rejected_by_store(client, score_service):
    score_service.update_score.side_effect = IntegrityError("check constraint violated")
    assert client.put("/api/scores/s1", json={"putts": 2}).status_code == 409


# ================================================================
# Tournaments
# ================================================================

def test_leaderboard(client, tournament_service):
    tournament_service.leaderboard.return_value = [
        LeaderboardEntry(rank=1, player_id="b", gross_total=70, net_score=70),
        LeaderboardEntry(rank=None, player_id="a"),
    ]

    resp = client.get("/api/tournaments/t1/leaderboard")

    assert resp.status_code == 200
    assert [e["rank"] for e in resp.json()] == [1, None]
    tournament_service.leaderboard.assert_awaited_once_with("t1")


def test_round_leaderboard_passes_round_number(client, tournament_service):
    tournament_service.leaderboard.return_value = []
    resp = client.get("/api/tournaments/t1/leaderboard/2")
    assert resp.status_code == 200
    tournament_service.leaderboard.assert_awaited_once_with("t1", 2)


def test_leaderboard_unknown_tournament(client, tournament_service):
    tournament_service.leaderboard.side_effect = NotFoundError("Tournament t9 not found")
    assert client.get("/api/tournaments/t9/leaderboard").status_code == 404


def test_join_twice_conflicts(client, tournament_service):
    tournament_service.join.side_effect = DuplicateError("already entered")
    resp = client.post("/api/tournaments/t1/join", json={"player_id": "p1"})
    assert resp.status_code == 409


def test_join(client, tournament_service):
    tournament_service.join.return_value = TournamentPlayer(
        tournament_id="t1", player_id="p1", name="Pat"
    )
    resp = client.post("/api/tournaments/t1/join", json={"player_id": "p1", "handicap": "12.4"})

    assert resp.status_code == 201
    assert resp.json()["name"] == "Pat"
    tournament_id, player = tournament_service.join.call_args[0]
    assert tournament_id == "t1"
    assert str(player.handicap) == "12.4"


def test_get_tournament_missing(client, fake_db):
    fake_db.tournaments.get_tournament.return_value = None
    assert client.get("/api/tournaments/t404").status_code == 404


# ================================================================
# Rounds / players
# ================================================================

def test_get_round_includes_totals(client, fake_db):
    fake_db.rounds.get_round.return_value = Round(
        id="r1", tournament_id="t1", player_id="p1",
        hole_scores=[HoleScore(hole_number=i, par=4, strokes=5) for i in range(1, 19)],
    )

    resp = client.get("/api/rounds/r1")

    assert resp.status_code == 200
    totals = resp.json()["totals"]
    assert totals["total_strokes"] == 90
    assert totals["score_to_par"] == 18
    assert totals["is_complete"] is True


def test_get_round_missing(client, fake_db):
    fake_db.rounds.get_round.return_value = None
    assert client.get("/api/rounds/nope").status_code == 404


def test_round_summary(client, fake_db):
    fake_db.rounds.get_round.return_value = Round(
        id="r1",
        hole_scores=[
            HoleScore(hole_number=1, par=4, strokes=4, putts=2, green_in_regulation=True),
            HoleScore(hole_number=2, par=3, strokes=4, putts=2),
        ],
    )

    resp = client.get("/api/rounds/r1/summary")

    assert resp.status_code == 200
    body = resp.json()
    assert body["total_strokes"] == 8
    assert body["gir_percentage"] == 50.0
    assert body["putts_per_hole"] == 2.0


def test_round_summary_missing(client, fake_db):
    fake_db.rounds.get_round.return_value = None
    assert client.get("/api/rounds/nope/summary").status_code == 404


def test_player_stats(client, fake_db):
    fake_db.achievements.get_player_stats.return_value = PlayerStats(
        player_id="p1", total_achievements=2, achievement_points=60,
        birdies=4, holes_in_one=1,
    )
    fake_db.rounds.get_rounds_for_player.return_value = []
    fake_db.tournaments.count_player_tournaments.return_value = 3
    fake_db.tournaments.count_player_wins.return_value = 1

    resp = client.get("/api/players/p1/stats")

    assert resp.status_code == 200
    body = resp.json()
    assert body["achievement_points"] == 60
    assert body["tournaments_won"] == 1
    assert body["birdies"] == 4
    assert body["holes_in_one"] == 1
    assert body["eagles"] == 0
    assert body["scoring"]["total_rounds"] == 0


# ================================================================
# Achievements
# ================================================================

def test_get_achievement(client, fake_db):
    fake_db.achievements.get_achievement.return_value = Achievement(
        id="a1", name="Ace", condition="hole_in_one", points=100
    )
    resp = client.get("/api/achievements/a1")

    assert resp.status_code == 200
    assert resp.json()["condition"] == "hole_in_one"
    fake_db.achievements.get_achievement.assert_awaited_once_with("a1")


def test_get_achievement_missing(client, fake_db):
    fake_db.achievements.get_achievement.return_value = None
    assert client.get("/api/achievements/a404").status_code == 404
