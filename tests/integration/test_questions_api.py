"""Question catalogue endpoints."""

from httpx import AsyncClient


class TestQuestionList:
    async def test_lists_active_questions_without_answers(self, client: AsyncClient):
        response = await client.get("/api/questions")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 5
        assert data["limit"] == 20
        assert data["offset"] == 0
        assert len(data["questions"]) == 5
        for q in data["questions"]:
            assert "correctAnswer" not in q
            assert "explanation" not in q
            assert q["category"] != "Archive"

    async def test_filter_by_difficulty(self, client: AsyncClient):
        data = (await client.get("/api/questions", params={"difficulty": "easy"})).json()
        assert data["total"] == 3
        assert {q["difficulty"] for q in data["questions"]} == {"easy"}

    async def test_filter_by_category(self, client: AsyncClient):
        data = (await client.get("/api/questions", params={"category": "Awards"})).json()
        assert data["total"] == 1
        assert data["questions"][0]["question"] == "Who has won the most Ballon d'Or awards?"

    async def test_pagination(self, client: AsyncClient):
        first = (await client.get("/api/questions", params={"limit": 2})).json()
        second = (await client.get("/api/questions", params={"limit": 2, "offset": 2})).json()
        assert len(first["questions"]) == 2
        assert len(second["questions"]) == 2
        assert {q["id"] for q in first["questions"]}.isdisjoint({q["id"] for q in second["questions"]})
        assert first["total"] == second["total"] == 5

    async def test_limit_is_capped(self, client: AsyncClient):
        data = (await client.get("/api/questions", params={"limit": 500})).json()
        assert data["limit"] == 100

    async def test_limit_must_be_positive(self, client: AsyncClient):
        response = await client.get("/api/questions", params={"limit": 0})
        assert response.status_code == 400


class TestQuestionLookups:
    async def test_categories_are_distinct_and_sorted(self, client: AsyncClient):
        data = (await client.get("/api/questions/categories")).json()
        assert data["categories"] == ["Awards", "Clubs", "History", "Rules", "World Cup"]

    async def test_difficulties(self, client: AsyncClient):
        data = (await client.get("/api/questions/difficulties")).json()
        assert data["difficulties"] == ["easy", "medium", "hard", "expert"]

    async def test_get_by_id(self, client: AsyncClient):
        listed = (await client.get("/api/questions", params={"category": "Rules"})).json()
        qid = listed["questions"][0]["id"]
        response = await client.get(f"/api/questions/{qid}")
        assert response.status_code == 200
        assert response.json()["options"] == ["9", "10", "11", "12"]
        assert "correctAnswer" not in response.json()

    async def test_unknown_id(self, client: AsyncClient):
        response = await client.get("/api/questions/9999")
        assert response.status_code == 404
        assert response.json() == {"detail": "Question not found", "status": "fail"}
