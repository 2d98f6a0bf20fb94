"""Trivia game lifecycle: start, answer, end, stats."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import func, select

from footballiq.db.models import GameAnswer, Question
from footballiq.games.service import GameService

ANSWERS = {
    "Which country won the FIFA World Cup 2022?": "Argentina",
    "Which club is nicknamed 'The Gunners'?": "Arsenal",
    "How many players does a team field at kick-off?": "11",
    "Who has won the most Ballon d'Or awards?": "Lionel Messi",
    "Which club won the first Premier League title in 1992-93?": "Manchester United",
}


async def _start(client: AsyncClient, headers, **body):
    response = await client.post("/api/game/start", headers=headers, json=body)
    assert response.status_code == 201, response.text
    return response.json()


async def _answer(client: AsyncClient, headers, session_id, question_id, answer, **extra):
    return await client.post(
        f"/api/game/{session_id}/answer",
        headers=headers,
        json={"questionId": question_id, "answer": answer, **extra},
    )


class TestStartGame:
    async def test_requires_auth(self, client: AsyncClient):
        response = await client.post("/api/game/start", json={})
        assert response.status_code == 401

    async def test_easy_game_serves_every_easy_question(self, client: AsyncClient, auth_headers):
        """Only three active easy questions exist, so the session holds three."""
        data = await _start(client, auth_headers, difficulty="easy")
        assert data["difficulty"] == "easy"
        assert data["totalQuestions"] == 3
        assert len(data["questions"]) == 3
        for q in data["questions"]:
            assert q["difficulty"] == "easy"
            assert "correctAnswer" not in q
            assert q["question"] in ANSWERS

    async def test_default_is_mixed(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/game/start", headers=auth_headers)
        assert response.status_code == 201
        data = response.json()
        assert data["difficulty"] == "mixed"
        assert data["totalQuestions"] == 5

    async def test_question_count_is_clamped(self, client: AsyncClient, auth_headers):
        data = await _start(client, auth_headers, questionCount=1)
        assert data["totalQuestions"] == 5

    async def test_no_questions_for_difficulty(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/game/start", headers=auth_headers, json={"difficulty": "expert"})
        assert response.status_code == 404
        assert response.json()["detail"] == "No questions available for this difficulty"

    async def test_unknown_difficulty(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/game/start", headers=auth_headers, json={"difficulty": "legendary"})
        assert response.status_code == 400


class TestFullGame:
    async def test_play_and_finish(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy", questionCount=3)
        sid = game["sessionId"]
        q1, q2 = game["questions"][0], game["questions"][1]

        first = await _answer(client, auth_headers, sid, q1["id"], f"  {ANSWERS[q1['question']].upper()} ", timeSpent=4)
        assert first.status_code == 200
        body = first.json()
        assert body["isCorrect"] is True
        assert body["pointsEarned"] == 5
        assert body["currentScore"] == 5
        assert body["correctAnswers"] == 1
        assert body["correctAnswer"] == ANSWERS[q1["question"]]

        second = await _answer(client, auth_headers, sid, q2["id"], "definitely wrong")
        assert second.json()["isCorrect"] is False
        assert second.json()["pointsEarned"] == 0
        assert second.json()["currentScore"] == 5

        end = await client.post(f"/api/game/{sid}/end", headers=auth_headers)
        assert end.status_code == 200
        summary = end.json()
        assert summary["score"] == 5
        assert summary["totalQuestions"] == 3
        assert summary["correctAnswers"] == 1
        assert summary["accuracy"] == 33
        assert summary["timeSpentSeconds"] >= 0
        assert [a["isCorrect"] for a in summary["answers"]] == [True, False]
        assert summary["answers"][1]["userAnswer"] == "definitely wrong"

        profile = (await client.get("/api/auth/profile", headers=auth_headers)).json()
        assert profile["totalScore"] == 5
        assert profile["gamesPlayed"] == 1
        assert profile["highestScore"] == 5

    async def test_highest_score_keeps_the_best_game(self, client: AsyncClient, auth_headers):
        for correct in (2, 1):
            game = await _start(client, auth_headers, difficulty="easy")
            for i, q in enumerate(game["questions"]):
                answer = ANSWERS[q["question"]] if i < correct else "nope"
                await _answer(client, auth_headers, game["sessionId"], q["id"], answer)
            await client.post(f"/api/game/{game['sessionId']}/end", headers=auth_headers)

        profile = (await client.get("/api/auth/profile", headers=auth_headers)).json()
        assert profile["gamesPlayed"] == 2
        assert profile["totalScore"] == 15
        assert profile["highestScore"] == 10

    async def test_numeric_answer(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        q = next(q for q in game["questions"] if q["question"].startswith("How many players"))
        response = await _answer(client, auth_headers, game["sessionId"], q["id"], 11)
        assert response.json()["isCorrect"] is True


class TestAnswerConflicts:
    async def test_duplicate_answer(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        q = game["questions"][0]
        await _answer(client, auth_headers, game["sessionId"], q["id"], ANSWERS[q["question"]])
        again = await _answer(client, auth_headers, game["sessionId"], q["id"], ANSWERS[q["question"]])
        assert again.status_code == 400
        assert again.json()["detail"] == "Question already answered"

        end = (await client.post(f"/api/game/{game['sessionId']}/end", headers=auth_headers)).json()
        assert end["score"] == 5
        assert end["correctAnswers"] == 1

    async def test_session_full(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        for q in game["questions"]:
            await _answer(client, auth_headers, game["sessionId"], q["id"], "x")
        others = (await client.get("/api/questions", params={"difficulty": "hard"})).json()["questions"]
        response = await _answer(client, auth_headers, game["sessionId"], others[0]["id"], "x")
        assert response.status_code == 400
        assert response.json()["detail"] == "All questions in this session have been answered"

    async def test_unknown_question(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        response = await _answer(client, auth_headers, game["sessionId"], 9999, "x")
        assert response.status_code == 404
        assert response.json()["detail"] == "Question not found"

    async def test_blank_answer(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        response = await _answer(client, auth_headers, game["sessionId"], game["questions"][0]["id"], "   ")
        assert response.status_code == 400
        assert response.json()["detail"] == "Answer is required"

    async def test_overlong_answer_is_rejected(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        q = game["questions"][0]
        response = await _answer(client, auth_headers, game["sessionId"], q["id"], "x" * 501)
        assert response.status_code == 400
        assert response.json()["detail"] == "Answer must be at most 500 characters"

        longest = await _answer(client, auth_headers, game["sessionId"], q["id"], "x" * 500)
        assert longest.status_code == 200
        assert longest.json()["isCorrect"] is False

    async def test_completed_session_is_closed(self, client: AsyncClient, auth_headers):
        game = await _start(client, auth_headers, difficulty="easy")
        sid = game["sessionId"]
        await client.post(f"/api/game/{sid}/end", headers=auth_headers)

        again = await client.post(f"/api/game/{sid}/end", headers=auth_headers)
        assert again.status_code == 400
        assert again.json()["detail"] == "Game session already completed"

        late = await _answer(client, auth_headers, sid, game["questions"][0]["id"], "x")
        assert late.status_code == 400
        assert late.json()["detail"] == "Game session already completed"

        profile = (await client.get("/api/auth/profile", headers=auth_headers)).json()
        assert profile["gamesPlayed"] == 1

    async def test_other_users_session_is_hidden(self, client: AsyncClient, auth_headers, register_user):
        game = await _start(client, auth_headers, difficulty="easy")
        bob = await register_user("bob")
        q = game["questions"][0]

        answer = await _answer(client, bob["headers"], game["sessionId"], q["id"], "x")
        assert answer.status_code == 404
        assert answer.json()["detail"] == "Game session not found"

        end = await client.post(f"/api/game/{game['sessionId']}/end", headers=bob["headers"])
        assert end.status_code == 404

    async def test_unknown_session(self, client: AsyncClient, auth_headers):
        response = await client.post("/api/game/424242/end", headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["detail"] == "Game session not found"

async def _counters(db_session, question_id):
    row = (
        await db_session.execute(
            select(Question.times_answered, Question.times_correct).where(Question.id == question_id)
        )
    ).one()
    return tuple(row)


class TestAnswerBookkeeping:
    async def test_question_counters(self, client: AsyncClient, auth_headers, db_session):
        """Every answer counts as answered; only a right one counts as correct."""
        game = await _start(client, auth_headers, difficulty="easy")
        right, wrong = game["questions"][0], game["questions"][1]

        await _answer(client, auth_headers, game["sessionId"], right["id"], ANSWERS[right["question"]])
        await _answer(client, auth_headers, game["sessionId"], wrong["id"], "nope")

        assert await _counters(db_session, right["id"]) == (1, 1)
        assert await _counters(db_session, wrong["id"]) == (1, 0)

    async def test_unique_constraint_settles_concurrent_duplicate(
        self, client: AsyncClient, auth_headers, db_session, monkeypatch
    ):
        """A duplicate that slips past the early check is refused by the database."""
        game = await _start(client, auth_headers, difficulty="easy")
        sid = game["sessionId"]
        q = game["questions"][0]
        first = await _answer(client, auth_headers, sid, q["id"], ANSWERS[q["question"]])
        assert first.status_code == 200

        async def not_answered_yet(self, session_id, question_id):
            return False

        monkeypatch.setattr(GameService, "_already_answered", not_answered_yet)
        racing = await _answer(client, auth_headers, sid, q["id"], ANSWERS[q["question"]])
        assert racing.status_code == 400
        assert racing.json()["detail"] == "Question already answered"

        monkeypatch.undo()
        end = (await client.post(f"/api/game/{sid}/end", headers=auth_headers)).json()
        assert end["score"] == 5
        assert end["correctAnswers"] == 1

        stored = await db_session.scalar(
            select(func.count(GameAnswer.id)).where(GameAnswer.session_id == sid, GameAnswer.question_id == q["id"])
        )
        assert stored == 1
        assert await _counters(db_session, q["id"]) == (1, 1)


class TestEndGameAtomicity:
    async def test_failed_credit_leaves_session_open(self, app, client: AsyncClient, auth_headers, monkeypatch):
        """If crediting the user fails, neither the session nor the user totals change."""
        game = await _start(client, auth_headers, difficulty="easy")
        q = game["questions"][0]
        await _answer(client, auth_headers, game["sessionId"], q["id"], ANSWERS[q["question"]])

        async def broken_credit(db, user_id, score):
            raise RuntimeError("credit store unavailable")

        monkeypatch.setattr("footballiq.games.service.credit_user_score", broken_credit)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as raw:
            failed = await raw.post(f"/api/game/{game['sessionId']}/end", headers=auth_headers)
        assert failed.status_code == 500

        profile = (await client.get("/api/auth/profile", headers=auth_headers)).json()
        assert profile["gamesPlayed"] == 0
        assert profile["totalScore"] == 0

        monkeypatch.undo()
        retry = await client.post(f"/api/game/{game['sessionId']}/end", headers=auth_headers)
        assert retry.status_code == 200
        assert retry.json()["score"] == 5

        profile = (await client.get("/api/auth/profile", headers=auth_headers)).json()
        assert profile["gamesPlayed"] == 1
        assert profile["totalScore"] == 5


class TestStats:
    async def test_empty_stats(self, client: AsyncClient, auth_headers):
        data = (await client.get("/api/game/stats", headers=auth_headers)).json()
        assert data["user"]["username"] == "alice"
        assert data["user"]["averageScore"] == 0
        assert data["recentGames"] == []

    async def test_recent_games_newest_first(self, client: AsyncClient, auth_headers):
        sessions = []
        for correct in (1, 2):
            game = await _start(client, auth_headers, difficulty="easy")
            for i, q in enumerate(game["questions"]):
                answer = ANSWERS[q["question"]] if i < correct else "nope"
                await _answer(client, auth_headers, game["sessionId"], q["id"], answer)
            await client.post(f"/api/game/{game['sessionId']}/end", headers=auth_headers)
            sessions.append(game["sessionId"])

        data = (await client.get("/api/game/stats", headers=auth_headers)).json()
        assert [g["sessionId"] for g in data["recentGames"]] == list(reversed(sessions))
        assert data["recentGames"][0]["score"] == 10
        assert data["recentGames"][0]["accuracy"] == 67
        assert data["user"]["averageScore"] == 8
        assert data["user"]["totalScore"] == 15

    @pytest.mark.parametrize("path", ["/api/game/stats", "/api/game/1/end"])
    async def test_requires_auth(self, client: AsyncClient, path):
        response = await (client.get(path) if path.endswith("stats") else client.post(path))
        assert response.status_code == 401
