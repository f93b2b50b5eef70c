"""Unit tests for session token helpers."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from rally.config import AuthSettings
from rally.util.jwt import JWTError, create_token, verify_token


@pytest.fixture
def settings() -> AuthSettings:
    return AuthSettings(jwt_secret="test-secret")


class TestSessionToken:
    def test_round_trip(self, settings):
        token = create_token(42, settings)

        payload = verify_token(token, settings)

        assert payload.sub == "42"

    def test_expires_after_configured_hours(self, settings):
        issued_at = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

        token = create_token(1, settings, issued_at=issued_at)

        claims = jwt.decode(
            token, options={"verify_signature": False, "verify_exp": False}
        )
        assert claims["exp"] - claims["iat"] == 24 * 60 * 60

    def test_expired_token(self, settings):
        token = create_token(
            1, settings, issued_at=datetime.now(timezone.utc) - timedelta(hours=48)
        )

        with pytest.raises(JWTError, match="expired"):
            verify_token(token, settings)

    def test_wrong_secret(self, settings):
        token = create_token(1, settings)

        with pytest.raises(JWTError):
            verify_token(token, AuthSettings(jwt_secret="other-secret"))

    def test_token_without_subject(self, settings):
        now = datetime.now(timezone.utc)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(hours=1)},
            settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(JWTError):
            verify_token(token, settings)
