"""Trivia game session lifecycle.

A session moves ``in_progress -> completed`` exactly once. Answers are
written once per (session, question); the storage-level unique constraint is
what closes the race between two concurrent submissions of the same question.
Ending a game finalizes the session and folds its score into the owner's
totals inside one transaction.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import structlog
from sqlalchemy import case, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.config import get_settings
from footballiq.db.models import (
    SESSION_COMPLETED,
    SESSION_IN_PROGRESS,
    GameAnswer,
    GameSession,
    Question,
    User,
)
from footballiq.errors import ConflictError, NotFoundError
from footballiq.games.scoring import (
    accuracy_percent,
    average_score,
    clamp_question_count,
    is_correct_answer,
)

logger = structlog.get_logger()


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they are stored as UTC."""
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


async def credit_user_score(db: AsyncSession, user_id: int, score: int) -> None:
    """Fold a finished game's score into the user's aggregates (one UPDATE)."""
    await db.execute(
        update(User)
        .where(User.id == user_id)
        .values(
            games_played=User.games_played + 1,
            total_score=User.total_score + score,
            highest_score=case((User.highest_score < score, score), else_=User.highest_score),
        )
        .execution_options(synchronize_session=False)
    )


class GameService:
    """Session bookkeeping for the trivia quiz."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db
        self.settings = get_settings()

    async def _owned_session(self, user_id: int, session_id: int) -> GameSession:
        session = await self.db.get(GameSession, session_id)
        if session is None or session.user_id != user_id:
            msg = "Game session not found"
            raise NotFoundError(msg)
        return session

    async def _already_answered(self, session_id: int, question_id: int) -> bool:
        """Early duplicate check; the unique constraint on game_answers decides races."""
        result = await self.db.execute(
            select(GameAnswer.id).where(
                GameAnswer.session_id == session_id,
                GameAnswer.question_id == question_id,
            )
        )
        return result.first() is not None

    # ------------------------------------------------------------------
    # Start
    # ------------------------------------------------------------------

    async def start_game(self, user_id: int, difficulty: str = "mixed", question_count: int | None = None) -> dict[str, Any]:
        """Pick a random set of active questions and open a session."""
        count = clamp_question_count(
            question_count,
            default=self.settings.game_default_questions,
            minimum=self.settings.game_min_questions,
            maximum=self.settings.game_max_questions,
        )

        stmt = select(Question).where(Question.is_active.is_(True))
        if difficulty != "mixed":
            stmt = stmt.where(Question.difficulty == difficulty)
        result = await self.db.execute(stmt.order_by(func.random()).limit(count))
        questions = list(result.scalars())
        if not questions:
            msg = "No questions available for this difficulty"
            raise NotFoundError(msg)

        session = GameSession(
            user_id=user_id,
            total_questions=len(questions),
            difficulty=difficulty,
            status=SESSION_IN_PROGRESS,
            score=0,
            correct_answers=0,
        )
        self.db.add(session)
        await self.db.commit()

        logger.info("game_started", user_id=user_id, session_id=session.id, difficulty=difficulty, questions=len(questions))
        return {
            "session_id": session.id,
            "total_questions": len(questions),
            "difficulty": difficulty,
            "questions": questions,
        }

    # ------------------------------------------------------------------
    # Answer
    # ------------------------------------------------------------------

    async def submit_answer(
        self,
        user_id: int,
        session_id: int,
        question_id: int,
        answer: str,
        time_spent: int | None = None,
    ) -> dict[str, Any]:
        """Grade one answer and credit the session.

        Raises:
            NotFoundError: Unknown session (or someone else's), unknown question.
            ConflictError: Session finished, question already answered, or every
                question in the session already has an answer.
        """
        session = await self._owned_session(user_id, session_id)
        if session.status != SESSION_IN_PROGRESS:
            msg = "Game session already completed"
            raise ConflictError(msg)

        question = await self.db.get(Question, question_id)
        if question is None:
            msg = "Question not found"
            raise NotFoundError(msg)

        answered = await self.db.execute(
            select(func.count(GameAnswer.id)).where(GameAnswer.session_id == session_id)
        )
        if await self._already_answered(session_id, question_id):
            msg = "Question already answered"
            raise ConflictError(msg)
        if answered.scalar_one() >= session.total_questions:
            msg = "All questions in this session have been answered"
            raise ConflictError(msg)

        correct = is_correct_answer(answer, question.correct_answer)
        points = question.points if correct else 0

        self.db.add(
            GameAnswer(
                session_id=session_id,
                question_id=question_id,
                user_answer=answer,
                is_correct=correct,
                points_earned=points,
                time_spent_seconds=time_spent,
            )
        )
        try:
            await self.db.flush()
        except IntegrityError as e:
            await self.db.rollback()
            msg = "Question already answered"
            raise ConflictError(msg) from e

        try:
            credited = await self.db.execute(
                update(GameSession)
                .where(GameSession.id == session_id, GameSession.status == SESSION_IN_PROGRESS)
                .values(
                    score=GameSession.score + points,
                    correct_answers=GameSession.correct_answers + (1 if correct else 0),
                )
                .execution_options(synchronize_session=False)
            )
        except IntegrityError as e:
            await self.db.rollback()
            msg = "All questions in this session have been answered"
            raise ConflictError(msg) from e
        if credited.rowcount != 1:
            await self.db.rollback()
            msg = "Game session already completed"
            raise ConflictError(msg)

        await self.db.execute(
            update(Question)
            .where(Question.id == question_id)
            .values(
                times_answered=Question.times_answered + 1,
                times_correct=Question.times_correct + (1 if correct else 0),
            )
            .execution_options(synchronize_session=False)
        )
        totals = (
            await self.db.execute(
                select(GameSession.score, GameSession.correct_answers).where(GameSession.id == session_id)
            )
        ).one()
        await self.db.commit()

        logger.info(
            "answer_submitted",
            user_id=user_id,
            session_id=session_id,
            question_id=question_id,
            is_correct=correct,
            points=points,
        )
        return {
            "is_correct": correct,
            "points_earned": points,
            "correct_answer": question.correct_answer,
            "explanation": question.explanation,
            "current_score": totals.score,
            "correct_answers": totals.correct_answers,
        }

    # ------------------------------------------------------------------
    # End
    # ------------------------------------------------------------------

    async def end_game(self, user_id: int, session_id: int) -> dict[str, Any]:
        """Finalize a session and update the owner's aggregates atomically.

        Either the session becomes ``completed`` and the user totals move, or
        neither happens and the error propagates with the session still
        ``in_progress``.
        """
        session = await self._owned_session(user_id, session_id)
        if session.status != SESSION_IN_PROGRESS:
            msg = "Game session already completed"
            raise ConflictError(msg)

        now = datetime.now(timezone.utc)
        elapsed = max(0, int((now - _as_utc(session.started_at)).total_seconds()))

        try:
            finalized = await self.db.execute(
                update(GameSession)
                .where(GameSession.id == session_id, GameSession.status == SESSION_IN_PROGRESS)
                .values(status=SESSION_COMPLETED, completed_at=now, time_spent_seconds=elapsed)
                .execution_options(synchronize_session=False)
            )
            if finalized.rowcount != 1:
                msg = "Game session already completed"
                raise ConflictError(msg)

            totals = (
                await self.db.execute(
                    select(
                        GameSession.score,
                        GameSession.total_questions,
                        GameSession.correct_answers,
                    ).where(GameSession.id == session_id)
                )
            ).one()
            await credit_user_score(self.db, user_id, totals.score)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        answers = await self.db.execute(
            select(GameAnswer, Question)
            .join(Question, Question.id == GameAnswer.question_id)
            .where(GameAnswer.session_id == session_id)
            .order_by(GameAnswer.id)
        )

        logger.info("game_completed", user_id=user_id, session_id=session_id, score=totals.score, seconds=elapsed)
        return {
            "session_id": session_id,
            "score": totals.score,
            "total_questions": totals.total_questions,
            "correct_answers": totals.correct_answers,
            "accuracy": accuracy_percent(totals.correct_answers, totals.total_questions),
            "time_spent_seconds": elapsed,
            "answers": [
                {
                    "question": q.question,
                    "user_answer": a.user_answer,
                    "correct_answer": q.correct_answer,
                    "is_correct": a.is_correct,
                    "points_earned": a.points_earned,
                    "explanation": q.explanation,
                }
                for a, q in answers.all()
            ],
        }

    # ------------------------------------------------------------------
    # Stats
    # ------------------------------------------------------------------

    async def get_user_stats(self, user: User) -> dict[str, Any]:
        """User summary plus the five most recent completed sessions."""
        result = await self.db.execute(
            select(GameSession)
            .where(GameSession.user_id == user.id, GameSession.status == SESSION_COMPLETED)
            .order_by(GameSession.completed_at.desc(), GameSession.id.desc())
            .limit(5)
        )
        recent = list(result.scalars())
        return {
            "user": {
                "username": user.username,
                "favorite_team": user.favorite_team,
                "total_score": user.total_score,
                "games_played": user.games_played,
                "highest_score": user.highest_score,
                "average_score": average_score([g.score for g in recent]),
            },
            "recent_games": [
                {
                    "session_id": g.id,
                    "score": g.score,
                    "correct_answers": g.correct_answers,
                    "total_questions": g.total_questions,
                    "accuracy": accuracy_percent(g.correct_answers, g.total_questions),
                    "difficulty": g.difficulty,
                    "completed_at": g.completed_at,
                    "time_spent_seconds": g.time_spent_seconds,
                }
                for g in recent
            ],
        }
