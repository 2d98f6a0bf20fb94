"""Pydantic schemas for the trivia game API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field, field_validator

from footballiq.schemas import CamelModel

GameDifficulty = Literal["easy", "medium", "hard", "expert", "mixed"]
LeaderboardPeriod = Literal["all", "week", "month"]


# --- Start ---


class StartGameRequest(CamelModel):
    difficulty: GameDifficulty = "mixed"
    question_count: int | None = Field(None, ge=0)


class GameQuestion(CamelModel):
    """A question as served during a game, answer stripped."""

    id: int
    question: str
    options: list[str]
    difficulty: str
    category: str
    points: int


class StartGameResponse(CamelModel):
    session_id: int
    total_questions: int
    difficulty: str
    questions: list[GameQuestion]


# --- Answer ---


MAX_ANSWER_LENGTH = 500


class SubmitAnswerRequest(CamelModel):
    question_id: int
    answer: str | int
    time_spent: int | None = Field(None, ge=0)

    @field_validator("answer")
    @classmethod
    def validate_answer(cls, v: str | int) -> str:
        v = str(v)
        if not v.strip():
            msg = "Answer is required"
            raise ValueError(msg)
        if len(v) > MAX_ANSWER_LENGTH:
            msg = f"Answer must be at most {MAX_ANSWER_LENGTH} characters"
            raise ValueError(msg)
        return v


class SubmitAnswerResponse(CamelModel):
    is_correct: bool
    points_earned: int
    correct_answer: str
    explanation: str | None
    current_score: int
    correct_answers: int


# --- End ---


class AnswerReview(CamelModel):
    question: str
    user_answer: str
    correct_answer: str
    is_correct: bool
    points_earned: int
    explanation: str | None


class EndGameResponse(CamelModel):
    session_id: int
    score: int
    total_questions: int
    correct_answers: int
    accuracy: int
    time_spent_seconds: int
    answers: list[AnswerReview]


# --- Leaderboard ---


class UserLeaderboardEntry(CamelModel):
    """All-time ranking row, ordered by best single-game score."""

    rank: int
    username: str
    favorite_team: str | None
    score: int
    highest_score: int
    total_score: int
    games_played: int


class SessionLeaderboardEntry(CamelModel):
    """Weekly/monthly ranking row, one per completed session."""

    rank: int
    username: str
    favorite_team: str | None
    score: int
    correct_answers: int
    total_questions: int
    completed_at: datetime | None


class LeaderboardResponse(CamelModel):
    period: LeaderboardPeriod
    leaderboard: list[UserLeaderboardEntry] | list[SessionLeaderboardEntry]


# --- Stats ---


class UserSummary(CamelModel):
    username: str
    favorite_team: str | None
    total_score: int
    games_played: int
    highest_score: int
    average_score: int


class RecentGame(CamelModel):
    session_id: int
    score: int
    correct_answers: int
    total_questions: int
    accuracy: int
    difficulty: str
    completed_at: datetime | None
    time_spent_seconds: int | None


class UserStatsResponse(CamelModel):
    user: UserSummary
    recent_games: list[RecentGame]
