"""Pydantic schemas for the trivia question catalogue."""

from __future__ import annotations

from footballiq.schemas import CamelModel


class QuestionOut(CamelModel):
    """A question with its answer stripped."""

    id: int
    question: str
    options: list[str]
    difficulty: str
    category: str
    points: int


class QuestionListResponse(CamelModel):
    questions: list[QuestionOut]
    total: int
    limit: int
    offset: int


class CategoriesResponse(CamelModel):
    categories: list[str]


class DifficultiesResponse(CamelModel):
    difficulties: list[str]
