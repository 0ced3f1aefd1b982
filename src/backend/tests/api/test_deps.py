"""
Tests for API dependencies (deps.py).

Tests caller identity extraction and same-identity authorization.
"""

from datetime import timedelta

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from jose import jwt

from api.deps import get_authorized_user_key, get_current_user_email
from core.config import settings
from core.exceptions import AuthenticationMissing, AuthorizationMismatch


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


@pytest.mark.unit
class TestGetCurrentUserEmail:
    """Test JWT-based caller identity."""

    async def test_valid_token(self, make_token) -> None:
        email = await get_current_user_email(bearer(make_token("coder@example.com")))
        assert email == "coder@example.com"

    async def test_missing_credentials(self) -> None:
        with pytest.raises(AuthenticationMissing):
            await get_current_user_email(None)

    async def test_expired_token(self, make_token) -> None:
        token = make_token(expires_in=timedelta(minutes=-5))

        with pytest.raises(AuthenticationMissing, match="expired"):
            await get_current_user_email(bearer(token))

    async def test_wrong_signature(self) -> None:
        token = jwt.encode(
            {"sub": "coder@example.com", "iss": settings.TOKEN_ISSUER, "aud": settings.TOKEN_AUDIENCE},
            "some-other-secret",
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationMissing):
            await get_current_user_email(bearer(token))

    async def test_wrong_audience(self) -> None:
        token = jwt.encode(
            {"sub": "coder@example.com", "iss": settings.TOKEN_ISSUER, "aud": "another-api"},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationMissing):
            await get_current_user_email(bearer(token))

    async def test_token_without_subject(self) -> None:
        token = jwt.encode(
            {"iss": settings.TOKEN_ISSUER, "aud": settings.TOKEN_AUDIENCE},
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(AuthenticationMissing, match="payload"):
            await get_current_user_email(bearer(token))

    async def test_garbage_token(self) -> None:
        with pytest.raises(AuthenticationMissing):
            await get_current_user_email(bearer("not-a-jwt"))


@pytest.mark.unit
class TestGetAuthorizedUserKey:
    """Test same-identity authorization."""

    async def test_own_key_is_allowed(self) -> None:
        assert await get_authorized_user_key("coder@example.com", "coder@example.com") == "coder@example.com"

    async def test_comparison_ignores_case(self) -> None:
        assert await get_authorized_user_key("Coder@Example.com", "coder@example.com") == "Coder@Example.com"

    async def test_other_key_is_rejected(self) -> None:
        with pytest.raises(AuthorizationMismatch):
            await get_authorized_user_key("someone@example.com", "coder@example.com")
