"""Question bank and demo account seeding."""

from httpx import AsyncClient
from sqlalchemy import delete, func, select

from footballiq.db.models import Question
from footballiq.trivia.seed import DEMO_PASSWORD, DEMO_USERNAME, TRIVIA_SEED_DATA, seed_demo_user, seed_questions


class TestSeedQuestions:
    async def test_skips_non_empty_bank(self, db_session):
        assert await seed_questions(db_session) == 0
        total = (await db_session.execute(select(func.count(Question.id)))).scalar_one()
        assert total == 6

    async def test_fills_empty_bank(self, db_session):
        await db_session.execute(delete(Question))
        await db_session.commit()

        inserted = await seed_questions(db_session)
        assert inserted == len(TRIVIA_SEED_DATA)

        rows = (await db_session.execute(select(Question))).scalars().all()
        assert len(rows) == len(TRIVIA_SEED_DATA)
        assert all(q.correct_answer in q.options for q in rows)
        points = {q.difficulty: q.points for q in rows}
        assert points["easy"] == 5
        assert points["hard"] == 15

        assert await seed_questions(db_session) == 0


class TestSeedDemoUser:
    async def test_created_once_and_can_log_in(self, db_session, client: AsyncClient):
        assert await seed_demo_user(db_session) is True
        assert await seed_demo_user(db_session) is False

        response = await client.post(
            "/api/auth/login", json={"username": DEMO_USERNAME, "password": DEMO_PASSWORD}
        )
        assert response.status_code == 200
        assert response.json()["user"]["favoriteTeam"] == "Manchester United"
