"""Unit tests for access token creation and verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from footballiq.auth.jwt import TokenExpiredError, create_access_token, verify_token
from footballiq.config import get_settings


class TestTokens:
    def test_roundtrip(self):
        payload = verify_token(create_access_token(42))
        assert payload["sub"] == "42"
        assert payload["type"] == "access"
        assert payload["iss"] == get_settings().jwt_issuer

    def test_expired(self):
        settings = get_settings()
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "1", "iat": past, "exp": past, "iss": settings.jwt_issuer, "type": "access"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(TokenExpiredError):
            verify_token(token)

    def test_wrong_secret(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(hours=1), "iss": settings.jwt_issuer,
             "type": "access"},
            "some-other-secret-that-is-long-enough",
            algorithm="HS256",
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)

    def test_wrong_type(self):
        settings = get_settings()
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(hours=1), "iss": settings.jwt_issuer,
             "type": "refresh"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        with pytest.raises(jwt.InvalidTokenError):
            verify_token(token)

    async def test_expired_token_rejected_by_api(self, client, alice):
        settings = get_settings()
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": str(alice["user"]["id"]), "exp": past, "iss": settings.jwt_issuer, "type": "access"},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )
        response = await client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired."
