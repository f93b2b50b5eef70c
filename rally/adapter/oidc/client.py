"""OpenID Connect client implementation.

Implements the Authorization Code flow with PKCE. Provider endpoints are
discovered from ``{issuer}/.well-known/openid-configuration`` on first use;
ID tokens are verified against the provider's JWKS.
"""

import hmac
from typing import Any, Optional
from urllib.parse import urlencode

import httpx
import jwt
import logfire

from rally.adapter.error import (
    DiscoveryError,
    IdTokenVerificationError,
    TokenExchangeError,
)
from rally.domain.service.auth_service import (
    SCOPES,
    IdentityProviderClient,
    ProviderTokens,
)
from rally.domain.value import AuthProvider, IdentityClaims

HTTP_TIMEOUT = 30.0

# Clock skew tolerated when checking exp/iat
LEEWAY_SECONDS = 30


class OIDCClient(IdentityProviderClient):
    """OpenID Connect client for a single provider."""

    def __init__(
        self,
        provider: AuthProvider,
        issuer: str,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
    ) -> None:
        """Initialize OIDC client.

        Args:
            provider: Provider this client talks to
            issuer: Issuer URL, also the expected `iss` claim
            client_id: OAuth client ID, also the expected `aud` claim
            client_secret: OAuth client secret
            redirect_uri: Callback URL registered with the provider
        """
        self.provider = provider
        self.issuer = issuer
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

        self._metadata: Optional[dict[str, Any]] = None
        self._jwks: Optional[jwt.PyJWKSet] = None

    async def authorization_url(
        self, state: str, code_challenge: str, nonce: str
    ) -> str:
        metadata = await self._discover()

        params = {
            "response_type": "code",
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "scope": " ".join(SCOPES),
            "state": state,
            "nonce": nonce,
            "code_challenge": code_challenge,
            "code_challenge_method": "S256",
        }

        return f"{metadata['authorization_endpoint']}?{urlencode(params)}"

    async def exchange_code(self, code: str, code_verifier: str) -> ProviderTokens:
        try:
            metadata = await self._discover()
        except DiscoveryError as e:
            raise TokenExchangeError(str(e)) from e

        data = {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": self.redirect_uri,
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code_verifier": code_verifier,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    metadata["token_endpoint"],
                    data=data,
                    headers={"Accept": "application/json"},
                    timeout=HTTP_TIMEOUT,
                )
        except httpx.HTTPError as e:
            logfire.error(
                "Token exchange HTTP error", provider=self.provider.value, error=str(e)
            )
            raise TokenExchangeError(f"HTTP error during token exchange: {e}") from e

        if response.status_code != 200:
            logfire.error(
                "Token exchange failed",
                provider=self.provider.value,
                status_code=response.status_code,
                error=response.text,
            )
            raise TokenExchangeError(f"Token exchange failed: {response.status_code}")

        try:
            body = response.json()
            access_token = body["access_token"]
        except (ValueError, KeyError) as e:
            raise TokenExchangeError("Malformed token response") from e

        return ProviderTokens(access_token=access_token, id_token=body.get("id_token"))

    async def verify_id_token(self, id_token: str, nonce: str) -> IdentityClaims:
        try:
            header = jwt.get_unverified_header(id_token)
        except jwt.InvalidTokenError as e:
            raise IdTokenVerificationError(f"Unreadable ID token: {e}") from e

        try:
            signing_key = await self._signing_key(header.get("kid"))
        except DiscoveryError as e:
            raise IdTokenVerificationError(str(e)) from e

        try:
            claims = jwt.decode(
                id_token,
                signing_key.key,
                algorithms=[signing_key.algorithm_name],
                audience=self.client_id,
                issuer=self.issuer,
                leeway=LEEWAY_SECONDS,
                options={"require": ["iss", "aud", "sub", "exp", "iat"]},
            )
        except jwt.InvalidTokenError as e:
            logfire.warn(
                "ID token rejected", provider=self.provider.value, error=str(e)
            )
            raise IdTokenVerificationError(f"Invalid ID token: {e}") from e

        check_nonce(claims, nonce)
        return claims_from_payload(claims)

    async def _discover(self) -> dict[str, Any]:
        """Fetch and cache the provider metadata document."""
        if self._metadata is None:
            url = f"{self.issuer.rstrip('/')}/.well-known/openid-configuration"
            metadata = await self._get_json(url)
            for field in ("authorization_endpoint", "token_endpoint", "jwks_uri"):
                if field not in metadata:
                    raise DiscoveryError(f"Provider metadata lacks {field}")
            self._metadata = metadata
            logfire.info("OIDC provider discovered", provider=self.provider.value)
        return self._metadata

    async def _signing_key(self, kid: Optional[str]) -> jwt.PyJWK:
        """Find the JWK for `kid`, refetching the key set once on a miss."""
        for refresh in (False, True):
            if self._jwks is None or refresh:
                metadata = await self._discover()
                try:
                    self._jwks = jwt.PyJWKSet.from_dict(
                        await self._get_json(metadata["jwks_uri"])
                    )
                except jwt.PyJWKSetError as e:
                    raise DiscoveryError(f"Unusable JWKS: {e}") from e

            for key in self._jwks.keys:
                if kid is None or key.key_id == kid:
                    return key

        raise DiscoveryError(f"No signing key matches kid {kid!r}")

    async def _get_json(self, url: str) -> dict[str, Any]:
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, timeout=HTTP_TIMEOUT)
        except httpx.HTTPError as e:
            raise DiscoveryError(f"HTTP error fetching {url}: {e}") from e

        if response.status_code != 200:
            raise DiscoveryError(f"Fetching {url} failed: {response.status_code}")

        try:
            return response.json()
        except ValueError as e:
            raise DiscoveryError(f"{url} did not return JSON") from e


def check_nonce(claims: dict[str, Any], nonce: str) -> None:
    """Require the `nonce` claim to equal the nonce issued at redirect.

    Raises:
        IdTokenVerificationError: Nonce missing or different
    """
    claimed = claims.get("nonce")
    if not isinstance(claimed, str) or not hmac.compare_digest(
        claimed.encode(), nonce.encode()
    ):
        raise IdTokenVerificationError("ID token nonce does not match")


def claims_from_payload(payload: dict[str, Any]) -> IdentityClaims:
    """Pick the identity claims out of a decoded ID token payload."""
    return IdentityClaims(
        sub=str(payload["sub"]),
        name=payload.get("name") or None,
        email=payload.get("email") or None,
        picture=payload.get("picture") or None,
    )
