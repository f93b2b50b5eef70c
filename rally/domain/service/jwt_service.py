"""Session token domain service."""

from typing import Optional

import logfire

from rally.config import AuthSettings
from rally.domain.value import UserId
from rally.util.jwt import JWTError, TokenPayload, create_token, verify_token

from .base import Service


class JWTService(Service):
    """Domain service for session token operations."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId) -> str:
        """Issue a session token carrying `sub`, `iat` and `exp`.

        Args:
            user_id: Local user ID

        Returns:
            Encoded token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            token = create_token(user_id, self.auth_settings)
            logfire.info("Session token issued", user_id=user_id)
            return token

    def verify_token(self, token: str) -> TokenPayload:
        """Verify a session token and extract its payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token rejected", error=str(e))
                raise

    def get_user_id_from_token(self, token: Optional[str]) -> Optional[UserId]:
        """Extract the user ID from a token without raising.

        Returns:
            User ID if the token is present and valid, None otherwise
        """
        if not token:
            return None

        try:
            payload = self.verify_token(token)
        except JWTError:
            return None

        try:
            return UserId(int(payload.sub))
        except ValueError:
            logfire.warn("Session token has a non-numeric subject", sub=payload.sub)
            return None
