"""Pydantic schemas for the SQL workshop API."""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator

from footballiq.schemas import CamelModel


class QueryRequest(CamelModel):
    query: str

    @field_validator("query")
    @classmethod
    def query_not_blank(cls, v: str) -> str:
        if not v.strip():
            msg = "Query is required"
            raise ValueError(msg)
        return v


class QuizAnswerRequest(CamelModel):
    answer: str | None = None


# --- Schema ---


class TableSchema(CamelModel):
    name: str
    description: str
    columns: list[str]


class DatasetSchema(CamelModel):
    tables: list[TableSchema]


class SchemaResponse(CamelModel):
    schema_: DatasetSchema = Field(alias="schema")


# --- Execute ---


class ExecuteResponse(CamelModel):
    results: list[dict[str, Any]]
    row_count: int
    truncated: bool
    execution_time: str
    columns: list[str]


# --- Query challenges ---


class DifficultyCounts(CamelModel):
    basic: int
    medium: int
    hard: int


class ChallengeSummary(CamelModel):
    id: int
    difficulty: str
    category: str
    title: str
    points: int


class ChallengeListResponse(CamelModel):
    challenges: list[ChallengeSummary]
    total: int
    by_difficulty: DifficultyCounts


class ChallengeDetail(CamelModel):
    """A challenge as shown to the player: no reference query."""

    id: int
    difficulty: str
    category: str
    title: str
    description: str
    hint: str
    points: int
    table: str


class ChallengeSubmitResponse(CamelModel):
    is_correct: bool
    feedback: str
    points: int
    points_earned: int
    user_results: list[dict[str, Any]]
    expected_sample: list[dict[str, Any]] | None
    hint: str | None
    solution: str | None


# --- Quiz ---


class QuizSummary(CamelModel):
    id: int
    difficulty: str
    category: str
    points: int


class QuizListResponse(CamelModel):
    challenges: list[QuizSummary]
    total: int
    by_difficulty: DifficultyCounts


class QuizQuestion(CamelModel):
    id: int
    difficulty: str
    category: str
    question: str
    query: str
    options: list[str]
    points: int


class QuizStartResponse(CamelModel):
    questions: list[QuizQuestion]
    total_questions: int
    max_points: int


class QuizAnswerResponse(CamelModel):
    is_correct: bool
    points_earned: int
    correct_answer: str
    explanation: str
    your_answer: str


# --- Leaderboard ---


class SqlLeaderboardEntry(CamelModel):
    rank: int
    username: str
    score: int
    games_played: int
    favorite_team: str | None


class SqlLeaderboardResponse(CamelModel):
    leaderboard: list[SqlLeaderboardEntry]
