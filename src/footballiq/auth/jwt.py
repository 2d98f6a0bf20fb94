"""
HS256 JWT token management.

Tokens carry the user id in ``sub``. A single shared secret signs and
verifies them; rotate ``FIQ_JWT_SECRET`` to invalidate every session.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from footballiq.config import get_settings


class TokenExpiredError(jwt.InvalidTokenError):
    """The token signature is valid but ``exp`` has passed."""


def create_access_token(user_id: int) -> str:
    """
    Create an access token for a user.

    Args:
        user_id: The user's database ID.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(minutes=settings.jwt_access_token_expire_minutes),
        "iss": settings.jwt_issuer,
        "type": "access",
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> dict[str, Any]:
    """
    Verify and decode an access token.

    Raises:
        TokenExpiredError: If the token has expired.
        jwt.InvalidTokenError: If the token is malformed, tampered or of the wrong type.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            issuer=settings.jwt_issuer,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise TokenExpiredError(msg) from None

    if payload.get("type") != "access":
        msg = f"Expected token type 'access', got '{payload.get('type')}'"
        raise jwt.InvalidTokenError(msg)

    return payload
