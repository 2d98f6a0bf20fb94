"""
Account business logic.

Handles registration, credential checks, profile updates and password changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import case, func, or_, select, update
from sqlalchemy.exc import IntegrityError

from footballiq.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    verify_password,
)
from footballiq.db.models import User
from footballiq.errors import AuthenticationError, ConflictError, ValidationFailedError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Fetch a user by username (case-insensitive)."""
    result = await db.execute(select(User).where(func.lower(User.username) == username.lower()))
    return result.scalar_one_or_none()


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email (case-insensitive)."""
    result = await db.execute(select(User).where(func.lower(User.email) == email.lower()))
    return result.scalar_one_or_none()


async def get_user_by_login(db: AsyncSession, identifier: str) -> User | None:
    """Fetch a user by username, falling back to email."""
    ident = identifier.lower()
    result = await db.execute(
        select(User)
        .where(or_(func.lower(User.username) == ident, func.lower(User.email) == ident))
        .order_by(case((func.lower(User.username) == ident, 0), else_=1))
        .limit(1)
    )
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Registration and login
# ---------------------------------------------------------------------------


async def register_user(
    db: AsyncSession,
    username: str,
    email: str,
    password: str,
    favorite_team: str | None = None,
) -> User:
    """
    Create a new account.

    Raises:
        ConflictError: If the username or email is already taken.
    """
    username = username.lower()
    email = email.lower().strip()

    if await get_user_by_username(db, username) is not None:
        msg = "Username already exists"
        raise ConflictError(msg)
    if await get_user_by_email(db, email) is not None:
        msg = "Email already exists"
        raise ConflictError(msg)

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        favorite_team=favorite_team,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration for the same name.
        await db.rollback()
        msg = "Username or email already exists"
        raise ConflictError(msg) from e

    logger.info("user_registered", user_id=user.id, username=username)
    return user


async def authenticate_user(db: AsyncSession, identifier: str, password: str) -> User:
    """
    Check credentials for a username or email.

    Raises:
        AuthenticationError: On unknown user, wrong password or deactivated account.
    """
    user = await get_user_by_login(db, identifier)
    if user is None:
        msg = "Invalid credentials"
        raise AuthenticationError(msg)
    if not user.is_active:
        msg = "Account is deactivated"
        raise AuthenticationError(msg)
    if not verify_password(password, user.password_hash):
        logger.info("login_failed", user_id=user.id)
        msg = "Invalid credentials"
        raise AuthenticationError(msg)

    if check_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        await db.commit()

    logger.info("user_logged_in", user_id=user.id)
    return user


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


async def update_profile(
    db: AsyncSession,
    user: User,
    *,
    email: str | None = None,
    favorite_team: str | None = None,
    favorite_team_set: bool = False,
) -> User:
    """
    Update email and/or favorite team.

    ``favorite_team_set`` distinguishes an explicit ``null`` (clear the team)
    from an omitted field.

    Raises:
        ConflictError: If the new email belongs to another account.
    """
    if email and email.lower() != user.email:
        existing = await get_user_by_email(db, email)
        if existing is not None and existing.id != user.id:
            msg = "Email already in use"
            raise ConflictError(msg)
        user.email = email.lower()

    if favorite_team_set:
        user.favorite_team = favorite_team

    await db.commit()
    await db.refresh(user)
    logger.info("profile_updated", user_id=user.id)
    return user


async def change_password(db: AsyncSession, user: User, current_password: str, new_password: str) -> None:
    """
    Replace the password after checking the current one.

    Raises:
        ValidationFailedError: Wrong current password or weak new password.
    """
    if not verify_password(current_password, user.password_hash):
        msg = "Current password is incorrect"
        raise ValidationFailedError(msg)

    try:
        validate_password_strength(new_password)
    except ValueError as e:
        raise ValidationFailedError(str(e)) from e

    await db.execute(
        update(User).where(User.id == user.id).values(password_hash=hash_password(new_password))
    )
    await db.commit()
    logger.info("password_changed", user_id=user.id)
