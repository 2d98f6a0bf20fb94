"""Authentication router: all /auth/* endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.auth.dependencies import get_current_user
from footballiq.auth.jwt import create_access_token
from footballiq.auth.schemas import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UserResponse,
)
from footballiq.auth.service import (
    authenticate_user,
    change_password,
    register_user,
    update_profile,
)
from footballiq.database import get_session
from footballiq.db.models import User

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(user=UserResponse.model_validate(user), token=create_access_token(user.id))


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Create an account and return it with a fresh token."""
    user = await register_user(
        db,
        username=body.username,
        email=body.email,
        password=body.password,
        favorite_team=body.favorite_team,
    )
    return _auth_response(user)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> AuthResponse:
    """Login with username (or email) + password."""
    user = await authenticate_user(db, body.username, body.password)
    return _auth_response(user)


@router.get("/profile", response_model=UserResponse)
async def get_profile(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)


@router.put("/profile", response_model=UserResponse)
async def put_profile(
    body: UpdateProfileRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> UserResponse:
    """Update email and/or favorite team."""
    updated = await update_profile(
        db,
        user,
        email=body.email,
        favorite_team=body.favorite_team,
        favorite_team_set="favorite_team" in body.model_fields_set,
    )
    return UserResponse.model_validate(updated)


@router.put("/password")
async def put_password(
    body: ChangePasswordRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_session),
) -> dict[str, str]:
    """Change password (requires the current one)."""
    await change_password(db, user, body.current_password, body.new_password)
    return {"message": "Password changed successfully"}
