"""Shared test fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite + StaticPool so
the app and the sandbox share one connection) attached to a freshly built app.
Redis is disabled, so rate limiting passes through unless a test installs a
fake client on ``app.state.redis``.
"""

from __future__ import annotations

import os

os.environ["FIQ_ENVIRONMENT"] = "test"
os.environ["FIQ_LOG_FORMAT"] = "console"
os.environ["FIQ_LOG_LEVEL"] = "WARNING"
os.environ["FIQ_JWT_SECRET"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["FIQ_SEED_QUESTIONS_ON_STARTUP"] = "false"

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from footballiq.config import get_settings
from footballiq.database import Database
from footballiq.dataset.models import Appearance, Club, Competition, Game, GameEvent, Player, Transfer
from footballiq.db.base import Base
from footballiq.db.models import Question
from footballiq.main import create_app

get_settings.cache_clear()

PASSWORD = "Passw0rd!"

QUESTION_FIXTURES = [
    {
        "question": "Which country won the FIFA World Cup 2022?",
        "options": ["France", "Argentina", "Brazil", "Croatia"],
        "correct_answer": "Argentina",
        "difficulty": "easy",
        "category": "World Cup",
        "points": 5,
        "explanation": "Argentina beat France on penalties.",
    },
    {
        "question": "Which club is nicknamed 'The Gunners'?",
        "options": ["Chelsea", "Arsenal", "Tottenham", "West Ham"],
        "correct_answer": "Arsenal",
        "difficulty": "easy",
        "category": "Clubs",
        "points": 5,
        "explanation": "Arsenal were founded by workers at the Royal Arsenal.",
    },
    {
        "question": "How many players does a team field at kick-off?",
        "options": ["9", "10", "11", "12"],
        "correct_answer": "11",
        "difficulty": "easy",
        "category": "Rules",
        "points": 5,
        "explanation": "Eleven players per side, including the goalkeeper.",
    },
    {
        "question": "Who has won the most Ballon d'Or awards?",
        "options": ["Cristiano Ronaldo", "Lionel Messi", "Michel Platini", "Johan Cruyff"],
        "correct_answer": "Lionel Messi",
        "difficulty": "medium",
        "category": "Awards",
        "points": 10,
        "explanation": "Messi has won the award eight times.",
    },
    {
        "question": "Which club won the first Premier League title in 1992-93?",
        "options": ["Blackburn Rovers", "Arsenal", "Manchester United", "Leeds United"],
        "correct_answer": "Manchester United",
        "difficulty": "hard",
        "category": "History",
        "points": 15,
        "explanation": "Manchester United won the inaugural season.",
    },
    {
        "question": "Retired question that must never be served",
        "options": ["A", "B", "C", "D"],
        "correct_answer": "A",
        "difficulty": "easy",
        "category": "Archive",
        "points": 5,
        "is_active": False,
    },
]


def _dataset_rows() -> list[Base]:
    rows: list[Base] = [
        Competition(competition_id="GB1", name="Premier League", type="domestic_league",
                    country_name="England", confederation="europa"),
        Competition(competition_id="L1", name="Bundesliga", type="domestic_league",
                    country_name="Germany", confederation="europa"),
        Club(club_id=11, name="Arsenal FC", domestic_competition_id="GB1", squad_size=26,
             stadium_name="Emirates Stadium"),
        Club(club_id=985, name="Manchester United", domestic_competition_id="GB1", squad_size=28,
             stadium_name="Old Trafford"),
        Club(club_id=16, name="Borussia Dortmund", domestic_competition_id="L1", squad_size=31,
             stadium_name="Signal Iduna Park"),
        Player(player_id=1, name="Bukayo Saka", country_of_citizenship="England", current_club_id=11,
               market_value_in_eur=140_000_000, foot="Left", date_of_birth=date(2001, 9, 5)),
        Player(player_id=2, name="Bruno Fernandes", country_of_citizenship="Portugal", current_club_id=985,
               market_value_in_eur=60_000_000, foot="Right", date_of_birth=date(1994, 9, 8)),
        Player(player_id=3, name="Marco Reus", country_of_citizenship="Germany", current_club_id=16,
               market_value_in_eur=8_000_000, foot="Right", date_of_birth=date(1989, 5, 31)),
        Game(game_id=100, competition_id="GB1", season=2023, home_club_id=11, away_club_id=985,
             home_club_name="Arsenal FC", away_club_name="Manchester United",
             home_club_goals=3, away_club_goals=1, attendance=60_000, stadium="Emirates Stadium"),
        Game(game_id=101, competition_id="L1", season=2023, home_club_id=16, away_club_id=16,
             home_club_name="Borussia Dortmund", away_club_name="Borussia Dortmund II",
             home_club_goals=2, away_club_goals=2, attendance=81_365, stadium="Signal Iduna Park"),
        Appearance(appearance_id="100_1", game_id=100, player_id=1, player_name="Bukayo Saka",
                   goals=60, assists=1, yellow_cards=0, red_cards=0, minutes_played=90),
        Appearance(appearance_id="100_2", game_id=100, player_id=2, player_name="Bruno Fernandes",
                   goals=1, assists=0, yellow_cards=1, red_cards=0, minutes_played=90),
        GameEvent(game_event_id="e1", game_id=100, minute=12, type="Goals", club_id=11, player_id=1),
        GameEvent(game_event_id="e2", game_id=100, minute=60, type="Substitutions", club_id=985, player_id=2),
        GameEvent(game_event_id="e3", game_id=100, minute=75, type="Substitutions", club_id=11, player_id=1),
    ]
    for i in range(12):
        rows.append(
            Transfer(
                player_id=1000 + i,
                player_name=f"Player {i}",
                transfer_date=date(2020, 7, 1 + i),
                transfer_season="20/21",
                from_club_id=16,
                to_club_id=11,
                from_club_name="Borussia Dortmund",
                to_club_name="Arsenal FC",
                transfer_fee=(i + 1) * 10_000_000,
            )
        )
    return rows


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """In-memory datastore with every table created, the question bank and a tiny dataset."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    db = Database(engine)
    async with db.session_factory() as session:
        session.add_all([Question(**data) for data in QUESTION_FIXTURES])
        session.add_all(_dataset_rows())
        await session.commit()

    yield db
    await db.close()


@pytest_asyncio.fixture
async def db_session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    """Direct session for test assertions."""
    async with database.session_factory() as session:
        yield session


@pytest.fixture
def app(database: Database) -> FastAPI:
    application = create_app()
    application.state.database = database
    application.state.redis = None
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the app (no lifespan; state is attached by the fixtures)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def _register(client: AsyncClient, username: str, team: str | None = "Arsenal") -> dict:
    payload = {"username": username, "email": f"{username}@x.com", "password": PASSWORD}
    if team is not None:
        payload["favoriteTeam"] = team
    response = await client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client: AsyncClient):
    """Factory: ``await register_user("bob")`` returns ``{"user", "token", "headers"}``."""

    async def _make(username: str, team: str | None = "Arsenal") -> dict:
        body = await _register(client, username, team)
        return {**body, "headers": _bearer(body["token"])}

    return _make


@pytest_asyncio.fixture
async def alice(register_user) -> dict:
    return await register_user("alice")


@pytest_asyncio.fixture
async def auth_headers(alice: dict) -> dict[str, str]:
    return alice["headers"]
