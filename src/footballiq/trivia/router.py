"""Question catalogue API: browse the trivia bank without answers."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.database import get_session
from footballiq.db.models import DIFFICULTIES, Question
from footballiq.errors import NotFoundError
from footballiq.trivia.schemas import (
    CategoriesResponse,
    DifficultiesResponse,
    QuestionListResponse,
    QuestionOut,
)

router = APIRouter(prefix="/questions", tags=["Questions"])

MAX_PAGE_SIZE = 100


@router.get("", response_model=QuestionListResponse)
async def list_questions(
    difficulty: str | None = Query(None),
    category: str | None = Query(None),
    limit: int = Query(20, ge=1),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
) -> QuestionListResponse:
    """Paginated list of active questions, newest first. ``limit`` is capped at 100."""
    limit = min(limit, MAX_PAGE_SIZE)
    filters = [Question.is_active.is_(True)]
    if difficulty:
        filters.append(Question.difficulty == difficulty)
    if category:
        filters.append(Question.category == category)

    total = (await db.execute(select(func.count(Question.id)).where(*filters))).scalar_one()
    rows = await db.execute(
        select(Question)
        .where(*filters)
        .order_by(Question.created_at.desc(), Question.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return QuestionListResponse(
        questions=[QuestionOut.model_validate(q) for q in rows.scalars()],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories(db: AsyncSession = Depends(get_session)) -> CategoriesResponse:
    result = await db.execute(
        select(Question.category)
        .where(Question.is_active.is_(True))
        .group_by(Question.category)
        .order_by(Question.category)
    )
    return CategoriesResponse(categories=list(result.scalars()))


@router.get("/difficulties", response_model=DifficultiesResponse)
async def list_difficulties() -> DifficultiesResponse:
    return DifficultiesResponse(difficulties=list(DIFFICULTIES))


@router.get("/{question_id}", response_model=QuestionOut)
async def get_question(question_id: int, db: AsyncSession = Depends(get_session)) -> QuestionOut:
    question = await db.get(Question, question_id)
    if question is None:
        msg = "Question not found"
        raise NotFoundError(msg)
    return QuestionOut.model_validate(question)
