"""SQL workshop: sandbox execution, challenge grading and the multiple-choice quiz."""

from __future__ import annotations

import random
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.config import get_settings
from footballiq.errors import NotFoundError, SqlExecutionError, UnsafeQueryError, ValidationFailedError
from footballiq.games.scoring import clamp_question_count
from footballiq.games.service import credit_user_score
from footballiq.sql.challenges import (
    QUERY_CHALLENGES,
    QueryChallenge,
    count_by_difficulty,
    filter_by_difficulty,
    get_query_challenge,
)
from footballiq.sql.executor import QueryExecutor, QueryResult
from footballiq.sql.grading import grade_submission, sql_error_feedback
from footballiq.sql.quiz import ANSWER_LETTERS, QUIZ_CHALLENGES, get_quiz_challenge
from footballiq.sql.safety import check_query_safety

logger = structlog.get_logger()

USER_RESULTS_PREVIEW = 20
EXPECTED_SAMPLE_SIZE = 5
QUIZ_DEFAULT_COUNT = 5
QUIZ_MAX_COUNT = 10


def _require_query_challenge(challenge_id: int) -> QueryChallenge:
    challenge = get_query_challenge(challenge_id)
    if challenge is None:
        msg = "Challenge not found"
        raise NotFoundError(msg)
    return challenge


def _checked(query: str, user_id: int | None) -> str:
    try:
        return check_query_safety(query)
    except UnsafeQueryError as e:
        logger.info("sql_rejected", user_id=user_id, reason=e.message)
        raise


class SqlService:
    """Per-request facade over the sandbox executor and the challenge catalogues."""

    def __init__(self, db: AsyncSession, executor: QueryExecutor) -> None:
        self.db = db
        self.executor = executor
        self.settings = get_settings()

    # ------------------------------------------------------------------
    # Sandbox
    # ------------------------------------------------------------------

    async def execute(self, user_id: int, query: str) -> dict[str, Any]:
        """Run a free-form query; at most ``sandbox_max_rows`` rows come back."""
        statement = _checked(query, user_id)
        try:
            result = await self.executor.run(statement, max_rows=self.settings.sandbox_max_rows)
        except SqlExecutionError as e:
            logger.info("sql_failed", user_id=user_id, error=e.error)
            raise
        logger.info("sql_executed", user_id=user_id, rows=result.row_count, ms=result.elapsed_ms)
        return {
            "results": result.rows,
            "row_count": result.row_count,
            "truncated": result.truncated,
            "execution_time": f"{result.elapsed_ms}ms",
            "columns": result.columns,
        }

    # ------------------------------------------------------------------
    # Query challenges
    # ------------------------------------------------------------------

    @staticmethod
    def list_challenges(difficulty: str | None = None) -> dict[str, Any]:
        challenges = filter_by_difficulty(QUERY_CHALLENGES, difficulty)
        return {
            "challenges": challenges,
            "total": len(challenges),
            "by_difficulty": count_by_difficulty(QUERY_CHALLENGES),
        }

    @staticmethod
    def get_challenge(challenge_id: int) -> QueryChallenge:
        return _require_query_challenge(challenge_id)

    async def submit_challenge(self, user_id: int, challenge_id: int, query: str) -> dict[str, Any]:
        """Grade a submission; SQL errors become feedback, not failures.

        A correct answer credits the user in the same way a finished game does.
        """
        challenge = _require_query_challenge(challenge_id)
        statement = _checked(query, user_id)

        user_result: QueryResult | None = None
        expected_result: QueryResult | None = None
        try:
            user_result = await self.executor.run(statement)
            expected_result = await self.executor.run(challenge.expected_query)
        except SqlExecutionError as e:
            is_correct, feedback = False, sql_error_feedback(e.error)
        else:
            grade = grade_submission(challenge.validate, user_result.rows, expected_result.rows)
            is_correct, feedback = grade.is_correct, grade.feedback

        points = challenge.points if is_correct else 0
        if is_correct:
            await self._credit(user_id, points)

        logger.info(
            "sql_challenge_graded",
            user_id=user_id,
            challenge_id=challenge_id,
            is_correct=is_correct,
            points=points,
        )
        user_rows = user_result.rows if user_result else []
        expected_rows = expected_result.rows if expected_result else []
        return {
            "is_correct": is_correct,
            "feedback": feedback,
            "points": points,
            "points_earned": points,
            "user_results": user_rows[:USER_RESULTS_PREVIEW],
            "expected_sample": None if is_correct else expected_rows[:EXPECTED_SAMPLE_SIZE],
            "hint": None if is_correct else challenge.hint,
            "solution": challenge.expected_query if is_correct else None,
        }

    # ------------------------------------------------------------------
    # Quiz
    # ------------------------------------------------------------------

    @staticmethod
    def list_quiz(difficulty: str | None = None) -> dict[str, Any]:
        challenges = filter_by_difficulty(QUIZ_CHALLENGES, difficulty)
        return {
            "challenges": challenges,
            "total": len(challenges),
            "by_difficulty": count_by_difficulty(QUIZ_CHALLENGES),
        }

    @staticmethod
    def start_quiz(difficulty: str | None = None, count: int | None = None) -> dict[str, Any]:
        """Random selection of quiz questions, correct letters stripped."""
        pool = filter_by_difficulty(QUIZ_CHALLENGES, difficulty)
        size = clamp_question_count(count, default=QUIZ_DEFAULT_COUNT, minimum=1, maximum=QUIZ_MAX_COUNT)
        selected = random.sample(pool, min(size, len(pool)))
        return {
            "questions": selected,
            "total_questions": len(selected),
            "max_points": sum(c.points for c in selected),
        }

    async def submit_quiz(self, user_id: int, challenge_id: int, answer: str | None) -> dict[str, Any]:
        challenge = get_quiz_challenge(challenge_id)
        if challenge is None:
            msg = "Challenge not found"
            raise NotFoundError(msg)

        letter = (answer or "").strip().upper()
        if letter not in ANSWER_LETTERS:
            msg = "Answer must be A, B, C, or D"
            raise ValidationFailedError(msg)

        is_correct = letter == challenge.correct_answer
        points = challenge.points if is_correct else 0
        if is_correct:
            await self._credit(user_id, points)

        logger.info("sql_quiz_answered", user_id=user_id, challenge_id=challenge_id, is_correct=is_correct)
        return {
            "is_correct": is_correct,
            "points_earned": points,
            "correct_answer": challenge.correct_answer,
            "explanation": challenge.explanation,
            "your_answer": letter,
        }

    async def _credit(self, user_id: int, points: int) -> None:
        try:
            await credit_user_score(self.db, user_id, points)
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
