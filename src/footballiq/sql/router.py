"""SQL workshop API: schema, sandbox, challenges, quiz and leaderboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.auth.dependencies import get_current_user
from footballiq.config import get_settings
from footballiq.database import get_database, get_session
from footballiq.db.models import User
from footballiq.games.leaderboard import sql_leaderboard
from footballiq.sql.executor import QueryExecutor
from footballiq.sql.schema_catalog import dataset_schema
from footballiq.sql.schemas import (
    ChallengeDetail,
    ChallengeListResponse,
    ChallengeSubmitResponse,
    ExecuteResponse,
    QueryRequest,
    QuizAnswerRequest,
    QuizAnswerResponse,
    QuizListResponse,
    QuizStartResponse,
    SchemaResponse,
    SqlLeaderboardResponse,
)
from footballiq.sql.service import SqlService

router = APIRouter(prefix="/sql", tags=["SQL"])


def get_query_executor(request: Request) -> QueryExecutor:
    """Sandbox executor bound to the dataset engine of the running app."""
    settings = get_settings()
    database = get_database(request)
    return QueryExecutor(
        database.dataset_engine,
        statement_timeout_ms=settings.sandbox_statement_timeout_ms,
        role=settings.sandbox_role,
    )


def get_sql_service(
    db: AsyncSession = Depends(get_session),
    executor: QueryExecutor = Depends(get_query_executor),
) -> SqlService:
    return SqlService(db, executor)


@router.get("/schema", response_model=SchemaResponse)
async def schema() -> SchemaResponse:
    return SchemaResponse.model_validate({"schema": {"tables": dataset_schema()}})


@router.post("/execute", response_model=ExecuteResponse)
async def execute(
    body: QueryRequest,
    user: User = Depends(get_current_user),
    service: SqlService = Depends(get_sql_service),
) -> ExecuteResponse:
    """Run a read-only query against the football dataset."""
    return ExecuteResponse.model_validate(await service.execute(user.id, body.query))


@router.get("/leaderboard", response_model=SqlLeaderboardResponse)
async def leaderboard(db: AsyncSession = Depends(get_session)) -> SqlLeaderboardResponse:
    return SqlLeaderboardResponse.model_validate({"leaderboard": await sql_leaderboard(db)})


# --- Query challenges ---


@router.get("/challenges", response_model=ChallengeListResponse)
async def list_challenges(difficulty: str | None = Query(None)) -> ChallengeListResponse:
    return ChallengeListResponse.model_validate(SqlService.list_challenges(difficulty))


@router.get("/challenges/{challenge_id}", response_model=ChallengeDetail)
async def get_challenge(challenge_id: int) -> ChallengeDetail:
    return ChallengeDetail.model_validate(SqlService.get_challenge(challenge_id))


@router.post("/challenges/{challenge_id}/submit", response_model=ChallengeSubmitResponse)
async def submit_challenge(
    challenge_id: int,
    body: QueryRequest,
    user: User = Depends(get_current_user),
    service: SqlService = Depends(get_sql_service),
) -> ChallengeSubmitResponse:
    """Grade a query against the challenge; SQL errors come back as feedback."""
    data = await service.submit_challenge(user.id, challenge_id, body.query)
    return ChallengeSubmitResponse.model_validate(data)


# --- Quiz ---


@router.get("/quiz/challenges", response_model=QuizListResponse)
async def list_quiz(difficulty: str | None = Query(None)) -> QuizListResponse:
    return QuizListResponse.model_validate(SqlService.list_quiz(difficulty))


@router.get("/quiz/start", response_model=QuizStartResponse)
async def start_quiz(
    difficulty: str | None = Query(None),
    count: int | None = Query(None),
    user: User = Depends(get_current_user),
) -> QuizStartResponse:
    return QuizStartResponse.model_validate(SqlService.start_quiz(difficulty, count))


@router.post("/quiz/{challenge_id}/submit", response_model=QuizAnswerResponse)
async def submit_quiz(
    challenge_id: int,
    body: QuizAnswerRequest,
    user: User = Depends(get_current_user),
    service: SqlService = Depends(get_sql_service),
) -> QuizAnswerResponse:
    data = await service.submit_quiz(user.id, challenge_id, body.answer)
    return QuizAnswerResponse.model_validate(data)
