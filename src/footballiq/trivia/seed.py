"""Trivia question bank seed data and seeder.

Run as ``python -m footballiq.trivia.seed [--demo-user]`` or automatically at
startup when ``FIQ_SEED_QUESTIONS_ON_STARTUP`` is enabled. Seeding only
happens while the questions table is empty, so it is safe to repeat.
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Any

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.auth.password import hash_password
from footballiq.db.models import Question, User

logger = structlog.get_logger()

POINTS_BY_DIFFICULTY = {"easy": 5, "medium": 10, "hard": 15, "expert": 20}

DEMO_USERNAME = "demo"
DEMO_EMAIL = "demo@footballiq.com"
DEMO_PASSWORD = "Demo@123!"  # noqa: S105
DEMO_TEAM = "Manchester United"

TRIVIA_SEED_DATA: list[dict[str, Any]] = [
    # Easy
    {
        "question": "Which country won the FIFA World Cup 2022?",
        "options": ["France", "Argentina", "Brazil", "Croatia"],
        "correct_answer": "Argentina",
        "difficulty": "easy",
        "category": "World Cup",
        "explanation": "Argentina won the 2022 FIFA World Cup in Qatar, defeating France in a penalty shootout after a 3-3 draw.",
    },
    {
        "question": "How many players are on the field per team in a football match?",
        "options": ["9", "10", "11", "12"],
        "correct_answer": "11",
        "difficulty": "easy",
        "category": "Rules",
        "explanation": "Each team fields 11 players on the pitch, including the goalkeeper.",
    },
    {
        "question": "Which club has won the most UEFA Champions League titles?",
        "options": ["AC Milan", "Real Madrid", "Barcelona", "Liverpool"],
        "correct_answer": "Real Madrid",
        "difficulty": "easy",
        "category": "Champions League",
        "explanation": "Real Madrid has won 15 Champions League/European Cup titles, more than any other club.",
    },
    {
        "question": "What is the standard duration of a professional football match?",
        "options": ["80 minutes", "90 minutes", "100 minutes", "120 minutes"],
        "correct_answer": "90 minutes",
        "difficulty": "easy",
        "category": "Rules",
        "explanation": "A standard match consists of two 45-minute halves, totaling 90 minutes of regular time.",
    },
    {
        "question": "Which player is known as 'CR7'?",
        "options": ["Cristiano Ronaldo", "Carlos Roa", "Claudio Reyna", "Cafu"],
        "correct_answer": "Cristiano Ronaldo",
        "difficulty": "easy",
        "category": "Players",
        "explanation": "CR7 is the nickname of Cristiano Ronaldo, combining his initials with his iconic number 7.",
    },
    # Medium
    {
        "question": "In which year did the English Premier League officially begin?",
        "options": ["1990", "1992", "1994", "1996"],
        "correct_answer": "1992",
        "difficulty": "medium",
        "category": "Premier League",
        "explanation": "The Premier League was founded on February 20, 1992, with the first season starting in August 1992.",
    },
    {
        "question": "Which player has scored the most goals in World Cup history?",
        "options": ["Pelé", "Ronaldo", "Miroslav Klose", "Just Fontaine"],
        "correct_answer": "Miroslav Klose",
        "difficulty": "medium",
        "category": "World Cup",
        "explanation": "Miroslav Klose holds the record with 16 World Cup goals across four tournaments (2002-2014).",
    },
    {
        "question": "What is the maximum number of substitutions allowed in a standard football match?",
        "options": ["3", "5", "7", "Unlimited"],
        "correct_answer": "5",
        "difficulty": "medium",
        "category": "Rules",
        "explanation": "FIFA permanently adopted the rule allowing 5 substitutions per team in 2022.",
    },
    {
        "question": "Which country hosted the first FIFA World Cup in 1930?",
        "options": ["Brazil", "Italy", "Uruguay", "Argentina"],
        "correct_answer": "Uruguay",
        "difficulty": "medium",
        "category": "World Cup",
        "explanation": "Uruguay hosted and won the inaugural FIFA World Cup in 1930.",
    },
    {
        "question": "Who is the all-time top scorer for the Spanish national team?",
        "options": ["Fernando Torres", "Raúl", "David Villa", "David Silva"],
        "correct_answer": "David Villa",
        "difficulty": "medium",
        "category": "International",
        "explanation": "David Villa scored 59 goals for Spain in 98 appearances, making him their all-time top scorer.",
    },
    {
        "question": "What does VAR stand for in football?",
        "options": [
            "Video Assisted Referee",
            "Video Analysis Review",
            "Visible Action Replay",
            "Virtual Assistant Referee",
        ],
        "correct_answer": "Video Assisted Referee",
        "difficulty": "medium",
        "category": "Rules",
        "explanation": "VAR stands for Video Assistant Referee, introduced to help referees make crucial decisions.",
    },
    # Hard
    {
        "question": "Which player has won the most Ballon d'Or awards?",
        "options": ["Cristiano Ronaldo", "Lionel Messi", "Michel Platini", "Johan Cruyff"],
        "correct_answer": "Lionel Messi",
        "difficulty": "hard",
        "category": "Awards",
        "explanation": "Lionel Messi has won 8 Ballon d'Or awards (2009, 2010, 2011, 2012, 2015, 2019, 2021, 2023).",
    },
    {
        "question": "What is the official circumference of a FIFA-standard football?",
        "options": ["64-66 cm", "68-70 cm", "72-74 cm", "76-78 cm"],
        "correct_answer": "68-70 cm",
        "difficulty": "hard",
        "category": "Rules",
        "explanation": "According to FIFA's Laws of the Game, a size 5 ball must have a circumference between 68-70 cm.",
    },
    {
        "question": "Which club did Johan Cruyff NOT play for during his career?",
        "options": ["Ajax", "Barcelona", "Feyenoord", "Real Madrid"],
        "correct_answer": "Real Madrid",
        "difficulty": "hard",
        "category": "Players",
        "explanation": "Cruyff famously never played for Real Madrid, playing for Ajax, Barcelona, and briefly Feyenoord.",
    },
    {
        "question": "In what year was the offside rule first introduced?",
        "options": ["1863", "1866", "1886", "1925"],
        "correct_answer": "1866",
        "difficulty": "hard",
        "category": "History",
        "explanation": "The offside rule was introduced in 1866, requiring three defenders between the attacker and goal.",
    },
    {
        "question": "Which goalkeeper has the most clean sheets in Premier League history?",
        "options": ["David Seaman", "Petr Čech", "Edwin van der Sar", "David de Gea"],
        "correct_answer": "Petr Čech",
        "difficulty": "hard",
        "category": "Premier League",
        "explanation": "Petr Čech holds the record with 202 clean sheets in the Premier League.",
    },
    # Expert (SQL-themed)
    {
        "question": "In a database of football statistics, which SQL clause would you use to find the top 10 scorers?",
        "options": ["WHERE TOP 10", "LIMIT 10", "HAVING 10", "FETCH FIRST 10"],
        "correct_answer": "LIMIT 10",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "LIMIT 10 is used in PostgreSQL/MySQL to restrict results to the top 10 rows.",
        "sql_query": "SELECT player_name, goals FROM players ORDER BY goals DESC LIMIT 10;",
    },
    {
        "question": "To find players who scored more than the average goals, which SQL operation would you use?",
        "options": ["JOIN", "SUBQUERY", "UNION", "GROUP BY"],
        "correct_answer": "SUBQUERY",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "A subquery calculates the average goals, then the main query filters players above it.",
        "sql_query": "SELECT * FROM players WHERE goals > (SELECT AVG(goals) FROM players);",
    },
    {
        "question": "Which SQL JOIN type would return all players even if they have no team assigned?",
        "options": ["INNER JOIN", "LEFT JOIN", "RIGHT JOIN", "CROSS JOIN"],
        "correct_answer": "LEFT JOIN",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "LEFT JOIN returns all rows from the left table (players), with NULLs for unmatched team data.",
        "sql_query": "SELECT p.name, t.team_name FROM players p LEFT JOIN teams t ON p.team_id = t.id;",
    },
    {
        "question": "To count goals per team in a match database, which clause is essential?",
        "options": ["ORDER BY", "GROUP BY", "HAVING", "DISTINCT"],
        "correct_answer": "GROUP BY",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "GROUP BY aggregates rows by team, allowing COUNT() or SUM() to calculate totals per team.",
        "sql_query": "SELECT team_id, COUNT(*) as goals FROM goals GROUP BY team_id;",
    },
    {
        "question": "Which window function would rank teams by points without gaps in ranking?",
        "options": ["ROW_NUMBER()", "RANK()", "DENSE_RANK()", "NTILE()"],
        "correct_answer": "DENSE_RANK()",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "DENSE_RANK() assigns consecutive ranks without gaps when values are tied.",
        "sql_query": "SELECT team_name, points, DENSE_RANK() OVER (ORDER BY points DESC) as rank FROM teams;",
    },
    {
        "question": "To find teams that have never lost a match, which SQL approach is most efficient?",
        "options": [
            "LEFT JOIN with NULL check",
            "NOT EXISTS subquery",
            "NOT IN subquery",
            "All are equally efficient",
        ],
        "correct_answer": "NOT EXISTS subquery",
        "difficulty": "expert",
        "category": "SQL",
        "explanation": "NOT EXISTS is typically most efficient as it stops searching once a match is found.",
        "sql_query": "SELECT * FROM teams t WHERE NOT EXISTS (SELECT 1 FROM matches m WHERE m.loser_id = t.id);",
    },
]


async def seed_questions(db: AsyncSession) -> int:
    """Insert the trivia bank if the questions table is empty. Returns rows inserted."""
    existing = (await db.execute(select(func.count(Question.id)))).scalar_one()
    if existing:
        return 0

    for data in TRIVIA_SEED_DATA:
        db.add(Question(points=POINTS_BY_DIFFICULTY[data["difficulty"]], **data))
    await db.commit()
    logger.info("questions_seeded", count=len(TRIVIA_SEED_DATA))
    return len(TRIVIA_SEED_DATA)


async def seed_demo_user(db: AsyncSession) -> bool:
    """Create the demo account unless it already exists."""
    found = await db.execute(select(User.id).where(User.username == DEMO_USERNAME))
    if found.scalar_one_or_none() is not None:
        return False
    db.add(
        User(
            username=DEMO_USERNAME,
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD),
            favorite_team=DEMO_TEAM,
        )
    )
    await db.commit()
    logger.info("demo_user_created", username=DEMO_USERNAME)
    return True


async def _run(demo_user: bool) -> None:
    from footballiq.config import get_settings
    from footballiq.database import Database
    from footballiq.middleware.logging import setup_logging

    settings = get_settings()
    setup_logging(settings)
    database = Database.from_url(settings.database_url)
    try:
        async with database.session_factory() as db:
            await seed_questions(db)
            if demo_user:
                await seed_demo_user(db)
    finally:
        await database.close()


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the Football-IQ trivia question bank.")
    parser.add_argument("--demo-user", action="store_true", help="also create the demo/Demo@123! account")
    args = parser.parse_args(argv)
    asyncio.run(_run(args.demo_user))


if __name__ == "__main__":
    main()
