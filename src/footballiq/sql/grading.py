"""Heuristic grading of SQL challenge submissions: no I/O.

The grade never compares values against the reference result. It combines the
challenge's own predicate with a loose structural check: the user's rows need
at least ``reference_columns - 1`` columns so that a dropped alias is still
accepted. Two empty results count as a match. A row-count mismatch is still
accepted with a softer message when the columns line up.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

Row = dict[str, Any]
ResultPredicate = Callable[[Sequence[Row]], bool]

FEEDBACK_EXACT = "Great job! Your query produces correct results."
FEEDBACK_ROW_COUNT_DIFFERS = "Correct logic! Result count may vary slightly."
FEEDBACK_MISSING_COLUMNS = "Query runs but may be missing columns."
FEEDBACK_BOTH_EMPTY = "Correct! Both return empty as expected."
FEEDBACK_EMPTY_MISMATCH = "Query runs but returns different row count."
FEEDBACK_PREDICATE_FAILED = "Query runs but doesn't meet the requirements."


@dataclass(frozen=True)
class Grade:
    is_correct: bool
    feedback: str


def sql_error_feedback(message: str) -> str:
    return f"SQL Error: {message}"


def grade_submission(
    predicate: ResultPredicate,
    user_rows: Sequence[Row],
    expected_rows: Sequence[Row],
) -> Grade:
    """Grade a user's result set against a challenge's predicate and reference rows."""
    if not predicate(user_rows):
        return Grade(False, FEEDBACK_PREDICATE_FAILED)

    if user_rows and expected_rows:
        user_cols = len(user_rows[0])
        expected_cols = len(expected_rows[0])
        if user_cols < expected_cols - 1:
            return Grade(False, FEEDBACK_MISSING_COLUMNS)
        if len(user_rows) == len(expected_rows):
            return Grade(True, FEEDBACK_EXACT)
        return Grade(True, FEEDBACK_ROW_COUNT_DIFFERS)

    if not user_rows and not expected_rows:
        return Grade(True, FEEDBACK_BOTH_EMPTY)
    return Grade(False, FEEDBACK_EMPTY_MISMATCH)
