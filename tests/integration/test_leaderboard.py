"""All-time and windowed leaderboards."""

from datetime import datetime, timedelta, timezone

import pytest_asyncio
from httpx import AsyncClient

from footballiq.db.models import SESSION_COMPLETED, SESSION_IN_PROGRESS, GameSession, User
from footballiq.games.leaderboard import period_leaderboard

ANSWERS = {
    "Which country won the FIFA World Cup 2022?": "Argentina",
    "Which club is nicknamed 'The Gunners'?": "Arsenal",
    "How many players does a team field at kick-off?": "11",
}


async def _play(client: AsyncClient, headers, correct: int) -> int:
    """Play one easy game answering ``correct`` questions right; returns the session id."""
    game = (await client.post("/api/game/start", headers=headers, json={"difficulty": "easy"})).json()
    for i, q in enumerate(game["questions"]):
        answer = ANSWERS[q["question"]] if i < correct else "nope"
        await client.post(
            f"/api/game/{game['sessionId']}/answer",
            headers=headers,
            json={"questionId": q["id"], "answer": answer},
        )
    await client.post(f"/api/game/{game['sessionId']}/end", headers=headers)
    return game["sessionId"]


@pytest_asyncio.fixture
async def players(client: AsyncClient, register_user):
    """alice best 15, bob best 10 (two games), carol registered but idle."""
    alice = await register_user("alice")
    bob = await register_user("bob", team=None)
    carol = await register_user("carol")
    await _play(client, alice["headers"], 3)
    await _play(client, bob["headers"], 2)
    await _play(client, bob["headers"], 1)
    return {"alice": alice, "bob": bob, "carol": carol}


class TestAllTime:
    async def test_ranks_by_highest_score(self, client: AsyncClient, players):
        response = await client.get("/api/game/leaderboard")
        assert response.status_code == 200
        data = response.json()
        assert data["period"] == "all"
        board = data["leaderboard"]
        assert [e["username"] for e in board] == ["alice", "bob"]
        assert [e["rank"] for e in board] == [1, 2]
        assert board[0]["score"] == 15
        assert board[1]["highestScore"] == 10
        assert board[1]["totalScore"] == 15
        assert board[1]["gamesPlayed"] == 2
        assert board[1]["favoriteTeam"] is None

    async def test_idle_users_excluded(self, client: AsyncClient, players):
        board = (await client.get("/api/game/leaderboard")).json()["leaderboard"]
        assert "carol" not in [e["username"] for e in board]

    async def test_ties_break_by_registration_order(self, client: AsyncClient, register_user):
        first = await register_user("first")
        second = await register_user("second")
        await _play(client, second["headers"], 1)
        await _play(client, first["headers"], 1)
        board = (await client.get("/api/game/leaderboard")).json()["leaderboard"]
        assert [e["username"] for e in board] == ["first", "second"]

    async def test_limit(self, client: AsyncClient, players):
        board = (await client.get("/api/game/leaderboard", params={"limit": 1})).json()["leaderboard"]
        assert [e["username"] for e in board] == ["alice"]

    async def test_oversized_limit_is_clamped(self, client: AsyncClient, players):
        response = await client.get("/api/game/leaderboard", params={"limit": 500})
        assert response.status_code == 200
        assert len(response.json()["leaderboard"]) <= 100

    async def test_empty(self, client: AsyncClient):
        data = (await client.get("/api/game/leaderboard")).json()
        assert data["leaderboard"] == []

    async def test_unknown_period(self, client: AsyncClient):
        response = await client.get("/api/game/leaderboard", params={"period": "decade"})
        assert response.status_code == 400


class TestPeriods:
    @pytest_asyncio.fixture
    async def history(self, db_session, players):
        """Extra completed sessions for alice: 10 and 40 days old, plus an open one."""
        alice_id = players["alice"]["user"]["id"]
        now = datetime.now(timezone.utc)
        db_session.add_all(
            [
                GameSession(user_id=alice_id, score=50, total_questions=10, correct_answers=10,
                            difficulty="hard", status=SESSION_COMPLETED, completed_at=now - timedelta(days=10)),
                GameSession(user_id=alice_id, score=99, total_questions=10, correct_answers=10,
                            difficulty="hard", status=SESSION_COMPLETED, completed_at=now - timedelta(days=40)),
                GameSession(user_id=alice_id, score=80, total_questions=10, correct_answers=0,
                            difficulty="hard", status=SESSION_IN_PROGRESS),
            ]
        )
        await db_session.commit()

    async def test_week_lists_recent_sessions(self, client: AsyncClient, history):
        data = (await client.get("/api/game/leaderboard", params={"period": "week"})).json()
        assert data["period"] == "week"
        board = data["leaderboard"]
        assert [(e["username"], e["score"]) for e in board] == [("alice", 15), ("bob", 10), ("bob", 5)]
        assert board[0]["correctAnswers"] == 3
        assert board[0]["totalQuestions"] == 3
        assert board[0]["completedAt"] is not None

    async def test_month_includes_older_sessions(self, client: AsyncClient, history):
        board = (await client.get("/api/game/leaderboard", params={"period": "month"})).json()["leaderboard"]
        assert [e["score"] for e in board] == [50, 15, 10, 5]

    async def test_window_is_relative_to_now(self, db_session, history):
        later = datetime.now(timezone.utc) + timedelta(days=8)
        board = await period_leaderboard(db_session, "week", 10, now=later)
        assert board == []


class TestSqlLeaderboard:
    async def test_ranks_by_total_score(self, client: AsyncClient, players):
        response = await client.get("/api/sql/leaderboard")
        assert response.status_code == 200
        board = response.json()["leaderboard"]
        assert [e["username"] for e in board] == ["alice", "bob"]
        assert [e["score"] for e in board] == [15, 15]
        assert board[1]["gamesPlayed"] == 2
