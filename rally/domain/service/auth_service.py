"""External identity provider domain service."""

from typing import Optional

from rally.domain.value import AuthProvider, IdentityClaims
from rally.domain.value.common import ValueObject

from .base import Service

SCOPES = ("openid", "profile", "email")


class ProviderTokens(ValueObject):
    """Token endpoint response."""

    access_token: str
    id_token: Optional[str] = None


class IdentityProviderClient:
    """OpenID Connect client interface for all providers."""

    provider: AuthProvider

    async def authorization_url(
        self, state: str, code_challenge: str, nonce: str
    ) -> str:
        """Build the provider authorization URL.

        The URL requests the `openid`, `profile` and `email` scopes and
        carries the S256 PKCE challenge.

        Args:
            state: CSRF state echoed back on callback
            code_challenge: PKCE S256 challenge
            nonce: Value the ID token must carry

        Returns:
            Authorization URL to redirect the browser to
        """
        raise NotImplementedError

    async def exchange_code(self, code: str, code_verifier: str) -> ProviderTokens:
        """Exchange an authorization code for tokens.

        Raises:
            TokenExchangeError: Provider or network failure
        """
        raise NotImplementedError

    async def verify_id_token(self, id_token: str, nonce: str) -> IdentityClaims:
        """Verify an ID token and return its claims.

        Raises:
            IdTokenVerificationError: Bad signature, issuer, audience or nonce
        """
        raise NotImplementedError


class AuthService(Service):
    """Routes login steps to the right identity provider client."""

    def __init__(
        self, identity_providers: dict[AuthProvider, IdentityProviderClient]
    ) -> None:
        """Initialize auth service.

        Args:
            identity_providers: Map of provider to client implementation
        """
        self.identity_providers = identity_providers

    def get_client(self, provider: AuthProvider) -> IdentityProviderClient:
        """Return the client for a provider.

        Raises:
            ValueError: If provider not supported
        """
        client = self.identity_providers.get(provider)
        if not client:
            raise ValueError(f"Unsupported provider: {provider}")
        return client
