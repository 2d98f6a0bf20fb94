"""ORM models for accounts, the trivia question bank and the session ledger.

The football dataset tables live in ``footballiq.dataset.models`` and share
the same declarative base.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
    true,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from footballiq.db.base import Base, BigIntId

DIFFICULTIES = ("easy", "medium", "hard", "expert")

SESSION_IN_PROGRESS = "in_progress"
SESSION_COMPLETED = "completed"
SESSION_ABANDONED = "abandoned"
SESSION_STATUSES = (SESSION_IN_PROGRESS, SESSION_COMPLETED, SESSION_ABANDONED)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table."""

    __tablename__ = "users"
    __table_args__ = (
        CheckConstraint("total_score >= 0", name="ck_users_total_score"),
        CheckConstraint("games_played >= 0", name="ck_users_games_played"),
        CheckConstraint("highest_score >= 0", name="ck_users_highest_score"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(256), nullable=False)
    favorite_team: Mapped[str | None] = mapped_column(String(100), nullable=True)
    total_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    games_played: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    highest_score: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now(), onupdate=_utcnow
    )

    sessions: Mapped[list[GameSession]] = relationship("GameSession", back_populates="user")


# ---------------------------------------------------------------------------
# Question bank
# ---------------------------------------------------------------------------


class Question(Base):
    """Maps to the 'questions' table."""

    __tablename__ = "questions"
    __table_args__ = (
        CheckConstraint("points > 0", name="ck_questions_points"),
        Index("ix_questions_difficulty_active", "difficulty", "is_active"),
        Index("ix_questions_category", "category"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    question: Mapped[str] = mapped_column(Text, nullable=False)
    options: Mapped[list[str]] = mapped_column(JSON, nullable=False)
    correct_answer: Mapped[str] = mapped_column(String(255), nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    points: Mapped[int] = mapped_column(Integer, default=10, server_default="10", nullable=False)
    explanation: Mapped[str | None] = mapped_column(Text, nullable=True)
    sql_query: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)
    times_answered: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    times_correct: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Session ledger
# ---------------------------------------------------------------------------


class GameSession(Base):
    """Maps to the 'game_sessions' table. One trivia playthrough."""

    __tablename__ = "game_sessions"
    __table_args__ = (
        CheckConstraint("score >= 0", name="ck_game_sessions_score"),
        CheckConstraint("correct_answers >= 0", name="ck_game_sessions_correct_min"),
        CheckConstraint("correct_answers <= total_questions", name="ck_game_sessions_correct_max"),
        CheckConstraint(
            "status IN ('in_progress', 'completed', 'abandoned')", name="ck_game_sessions_status"
        ),
        Index("ix_game_sessions_user_status", "user_id", "status"),
        Index("ix_game_sessions_completed_at", "completed_at"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    score: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    total_questions: Mapped[int] = mapped_column(Integer, default=10, nullable=False)
    correct_answers: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    difficulty: Mapped[str] = mapped_column(String(16), default="mixed", nullable=False)
    status: Mapped[str] = mapped_column(String(16), default=SESSION_IN_PROGRESS, nullable=False)
    started_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    time_spent_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)

    user: Mapped[User] = relationship("User", back_populates="sessions")
    answers: Mapped[list[GameAnswer]] = relationship(
        "GameAnswer", back_populates="session", order_by="GameAnswer.id"
    )


class GameAnswer(Base):
    """Maps to the 'game_answers' table. Immutable once written."""

    __tablename__ = "game_answers"
    __table_args__ = (
        UniqueConstraint("session_id", "question_id", name="uq_game_answers_session_question"),
    )

    id: Mapped[int] = mapped_column(BigIntId, primary_key=True, autoincrement=True)
    session_id: Mapped[int] = mapped_column(
        ForeignKey("game_sessions.id", ondelete="CASCADE"), nullable=False
    )
    question_id: Mapped[int] = mapped_column(ForeignKey("questions.id"), nullable=False)
    user_answer: Mapped[str] = mapped_column(String(500), nullable=False)
    is_correct: Mapped[bool] = mapped_column(Boolean, nullable=False)
    points_earned: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    time_spent_seconds: Mapped[int | None] = mapped_column(Integer, nullable=True)
    answered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, server_default=func.now()
    )

    session: Mapped[GameSession] = relationship("GameSession", back_populates="answers")
    question: Mapped[Question] = relationship("Question")

