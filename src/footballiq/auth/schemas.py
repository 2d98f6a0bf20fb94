"""Request/response schemas for authentication endpoints."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from footballiq.auth.password import validate_password_strength
from footballiq.schemas import CamelModel

_USERNAME_RE = re.compile(r"^[a-zA-Z0-9_]+$")


class RegisterRequest(CamelModel):
    """Registration request. Username and email are stored lowercase."""

    username: str
    email: EmailStr
    password: str
    favorite_team: str | None = None

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            msg = "Username must be at least 3 characters long"
            raise ValueError(msg)
        if len(v) > 50:
            msg = "Username must not exceed 50 characters"
            raise ValueError(msg)
        if not _USERNAME_RE.match(v):
            msg = "Username can only contain letters, numbers, and underscores"
            raise ValueError(msg)
        return v.lower()

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        validate_password_strength(v)
        return v

    @field_validator("favorite_team")
    @classmethod
    def check_favorite_team(cls, v: str | None) -> str | None:
        if v is not None and len(v) > 100:
            msg = "Favorite team name is too long"
            raise ValueError(msg)
        return v


class LoginRequest(CamelModel):
    """Login with username or email + password."""

    username: str
    password: str

    @field_validator("username")
    @classmethod
    def check_username(cls, v: str) -> str:
        if not v.strip():
            msg = "Username is required"
            raise ValueError(msg)
        return v.strip().lower()

    @field_validator("password")
    @classmethod
    def check_password(cls, v: str) -> str:
        if not v:
            msg = "Password is required"
            raise ValueError(msg)
        return v


class UpdateProfileRequest(CamelModel):
    """Partial profile update. Omitted fields are left unchanged."""

    email: EmailStr | None = None
    favorite_team: str | None = Field(None, max_length=100)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        return v.lower().strip() if v else v


class ChangePasswordRequest(CamelModel):
    """Change password (requires current password)."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: str = Field(..., min_length=1, max_length=128)


class UserResponse(CamelModel):
    """Public view of an account."""

    id: int
    username: str
    email: str
    favorite_team: str | None
    total_score: int
    games_played: int
    highest_score: int
    created_at: datetime | None = None


class AuthResponse(CamelModel):
    user: UserResponse
    token: str
