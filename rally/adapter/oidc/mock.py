"""Mock identity provider client for testing."""

from typing import Optional
from urllib.parse import urlencode

from rally.adapter.error import TokenExchangeError
from rally.domain.service.auth_service import (
    SCOPES,
    IdentityProviderClient,
    ProviderTokens,
)
from rally.domain.value import AuthProvider, IdentityClaims


class MockIdentityProviderClient(IdentityProviderClient):
    """Returns deterministic data without making any HTTP calls.

    Tests can change ``claims`` or ``id_token`` to simulate providers that
    omit claims or return no ID token. The code ``"invalid"`` fails the
    token exchange.
    """

    def __init__(
        self,
        provider: AuthProvider,
        claims: Optional[IdentityClaims] = None,
        id_token: Optional[str] = "mock-id-token",
    ) -> None:
        self.provider = provider
        self.claims = claims or IdentityClaims(
            sub=f"mock-{provider.value}-subject",
            name="Mock User",
            email=f"mock@{provider.value}.example",
            picture=None,
        )
        self.id_token = id_token

        # Recorded calls
        self.exchanges: list[tuple[str, str]] = []
        self.verified_nonces: list[str] = []

    async def authorization_url(
        self, state: str, code_challenge: str, nonce: str
    ) -> str:
        params = {
            "scope": " ".join(SCOPES),
            "state": state,
            "nonce": nonce,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
            "mock": "true",
        }
        return f"https://{self.provider.value}.example/authorize?{urlencode(params)}"

    async def exchange_code(self, code: str, code_verifier: str) -> ProviderTokens:
        self.exchanges.append((code, code_verifier))
        if code == "invalid":
            raise TokenExchangeError("Invalid authorization code")
        return ProviderTokens(access_token="mock-access-token", id_token=self.id_token)

    async def verify_id_token(self, id_token: str, nonce: str) -> IdentityClaims:
        self.verified_nonces.append(nonce)
        return self.claims
