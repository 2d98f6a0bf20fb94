"""Pure scoring rules for the trivia game: no I/O."""

from __future__ import annotations


def normalize_answer(value: object) -> str:
    """Canonical form used for answer comparison: trimmed and lowercased."""
    return str(value).strip().lower()


def is_correct_answer(submitted: object, correct_answer: str) -> bool:
    """Exact match after trimming whitespace and ignoring case. No partial credit."""
    return normalize_answer(submitted) == normalize_answer(correct_answer)


def accuracy_percent(correct_answers: int, total_questions: int) -> int:
    """Rounded percentage of correct answers; 0 for an empty session.

    Rounds half up so 2/8 -> 25 and 1/8 -> 13, unlike Python's banker's rounding.
    """
    if total_questions <= 0:
        return 0
    return int(100 * correct_answers / total_questions + 0.5)


def clamp_question_count(requested: int | None, default: int, minimum: int, maximum: int) -> int:
    """Clamp the requested question count; missing or zero means ``default``."""
    count = requested or default
    return min(max(count, minimum), maximum)


def clamp_limit(requested: int | None, default: int, maximum: int) -> int:
    """Clamp a listing limit to [1, maximum]; missing or zero means ``default``."""
    limit = requested or default
    return min(max(limit, 1), maximum)


def average_score(scores: list[int]) -> int:
    """Rounded mean of the given scores, 0 when there are none."""
    if not scores:
        return 0
    return int(sum(scores) / len(scores) + 0.5)
