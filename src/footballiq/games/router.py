"""Trivia game API: start, answer, end, leaderboard and stats."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.auth.dependencies import get_current_user
from footballiq.config import get_settings
from footballiq.database import get_session
from footballiq.db.models import User
from footballiq.games.leaderboard import all_time_leaderboard, period_leaderboard
from footballiq.games.schemas import (
    EndGameResponse,
    LeaderboardPeriod,
    LeaderboardResponse,
    StartGameRequest,
    StartGameResponse,
    SubmitAnswerRequest,
    SubmitAnswerResponse,
    UserStatsResponse,
)
from footballiq.games.scoring import clamp_limit
from footballiq.games.service import GameService

router = APIRouter(prefix="/game", tags=["Game"])


@router.post("/start", response_model=StartGameResponse, status_code=status.HTTP_201_CREATED)
async def start_game(
    body: StartGameRequest | None = None,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> StartGameResponse:
    """Open a session with 5-20 random questions (answers stripped)."""
    body = body or StartGameRequest()
    data = await GameService(db).start_game(user.id, body.difficulty, body.question_count)
    return StartGameResponse.model_validate(data)


@router.post("/{session_id}/answer", response_model=SubmitAnswerResponse)
async def submit_answer(
    session_id: int,
    body: SubmitAnswerRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> SubmitAnswerResponse:
    data = await GameService(db).submit_answer(
        user.id,
        session_id,
        body.question_id,
        str(body.answer),
        body.time_spent,
    )
    return SubmitAnswerResponse.model_validate(data)


@router.post("/{session_id}/end", response_model=EndGameResponse)
async def end_game(
    session_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> EndGameResponse:
    """Complete the session and add its score to the player's totals."""
    data = await GameService(db).end_game(user.id, session_id)
    return EndGameResponse.model_validate(data)


@router.get("/leaderboard", response_model=LeaderboardResponse)
async def leaderboard(
    period: LeaderboardPeriod = Query("all"),
    limit: int | None = Query(None),
    db: AsyncSession = Depends(get_session),
) -> LeaderboardResponse:
    """Public leaderboard. ``limit`` is clamped to [1, 100]."""
    count = clamp_limit(limit, default=10, maximum=get_settings().leaderboard_max_limit)
    if period == "all":
        entries = await all_time_leaderboard(db, count)
        return LeaderboardResponse(period=period, leaderboard=entries)
    return LeaderboardResponse(period=period, leaderboard=await period_leaderboard(db, period, count))


@router.get("/stats", response_model=UserStatsResponse)
async def stats(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserStatsResponse:
    data = await GameService(db).get_user_stats(user)
    return UserStatsResponse.model_validate(data)
