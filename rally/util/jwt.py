"""Session token utilities."""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel

from rally.config import AuthSettings


class TokenPayload(BaseModel):
    """Session token payload."""

    sub: str
    iat: datetime
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(
    user_id: int, settings: AuthSettings, issued_at: datetime | None = None
) -> str:
    """Create a session token for the user.

    Args:
        user_id: Local user ID, embedded as the `sub` claim
        settings: Authentication settings
        issued_at: Issue time (defaults to now)

    Returns:
        Encoded JWT token
    """
    iat = issued_at or datetime.now(timezone.utc)
    exp = iat + timedelta(hours=settings.token_expiry_hours)

    payload = {
        "sub": str(user_id),
        "iat": iat,
        "exp": exp,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid or expired
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "iat", "exp"]},
        )
        return TokenPayload(**payload)
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
