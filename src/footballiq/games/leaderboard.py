"""Leaderboards computed on demand from the account and session tables.

The all-time board ranks users by their best single game. The weekly and
monthly boards rank individual completed sessions by score, so one user can
appear several times. Ties fall back to ascending row id.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.db.models import SESSION_COMPLETED, GameSession, User
from footballiq.games.schemas import SessionLeaderboardEntry, UserLeaderboardEntry

PERIOD_WINDOWS: dict[str, timedelta] = {
    "week": timedelta(days=7),
    "month": timedelta(days=30),
}

SQL_LEADERBOARD_SIZE = 20


async def all_time_leaderboard(db: AsyncSession, limit: int) -> list[UserLeaderboardEntry]:
    """Active users who have played at least once, by highest score."""
    result = await db.execute(
        select(User)
        .where(User.is_active.is_(True), User.games_played > 0)
        .order_by(User.highest_score.desc(), User.id.asc())
        .limit(limit)
    )
    return [
        UserLeaderboardEntry(
            rank=idx,
            username=u.username,
            favorite_team=u.favorite_team,
            score=u.highest_score,
            highest_score=u.highest_score,
            total_score=u.total_score,
            games_played=u.games_played,
        )
        for idx, u in enumerate(result.scalars(), start=1)
    ]


async def period_leaderboard(
    db: AsyncSession,
    period: str,
    limit: int,
    now: datetime | None = None,
) -> list[SessionLeaderboardEntry]:
    """Completed sessions inside the window, by session score."""
    if now is None:
        now = datetime.now(timezone.utc)
    since = now - PERIOD_WINDOWS[period]
    result = await db.execute(
        select(GameSession, User.username, User.favorite_team)
        .join(User, User.id == GameSession.user_id)
        .where(GameSession.status == SESSION_COMPLETED, GameSession.completed_at >= since)
        .order_by(GameSession.score.desc(), GameSession.id.asc())
        .limit(limit)
    )
    return [
        SessionLeaderboardEntry(
            rank=idx,
            username=username,
            favorite_team=favorite_team,
            score=s.score,
            correct_answers=s.correct_answers,
            total_questions=s.total_questions,
            completed_at=s.completed_at,
        )
        for idx, (s, username, favorite_team) in enumerate(result.all(), start=1)
    ]


async def sql_leaderboard(db: AsyncSession) -> list[dict[str, object]]:
    """Top users by cumulative score, used by the SQL workshop."""
    result = await db.execute(
        select(User.username, User.total_score, User.games_played, User.favorite_team)
        .where(User.is_active.is_(True), User.games_played > 0)
        .order_by(User.total_score.desc(), User.id.asc())
        .limit(SQL_LEADERBOARD_SIZE)
    )
    return [
        {
            "rank": idx,
            "username": row.username,
            "score": row.total_score,
            "games_played": row.games_played,
            "favorite_team": row.favorite_team,
        }
        for idx, row in enumerate(result.all(), start=1)
    ]
