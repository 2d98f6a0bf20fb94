"""FastAPI authentication dependencies."""

from __future__ import annotations

import jwt
from fastapi import Depends, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from footballiq.auth.jwt import TokenExpiredError, verify_token
from footballiq.auth.service import get_user_by_id
from footballiq.database import get_session
from footballiq.db.models import User
from footballiq.errors import AuthenticationError

# auto_error=False so a missing header gets our own 401 message instead of a 403.
_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Security(_bearer),
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    Extract and verify the bearer token, return the active User.

    Each failure cause gets its own 401 message: missing, expired,
    malformed, or pointing at an unknown or deactivated account.
    """
    if credentials is None:
        msg = "Access denied. No token provided."
        raise AuthenticationError(msg)

    try:
        payload = verify_token(credentials.credentials)
        user_id = int(payload["sub"])
    except TokenExpiredError as e:
        msg = "Token has expired."
        raise AuthenticationError(msg) from e
    except (jwt.InvalidTokenError, ValueError) as e:
        msg = "Invalid token."
        raise AuthenticationError(msg) from e

    user = await get_user_by_id(db, user_id)
    if user is None or not user.is_active:
        msg = "Invalid token or user not found."
        raise AuthenticationError(msg)
    return user
