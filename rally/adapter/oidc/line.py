"""LINE Login client.

LINE uses standard OIDC discovery for its endpoints, but ID tokens are
verified through LINE's verify endpoint instead of a local JWKS check.
"""

import httpx
import logfire

from rally.adapter.error import IdTokenVerificationError
from rally.adapter.oidc.client import HTTP_TIMEOUT, OIDCClient, claims_from_payload
from rally.domain.value import AuthProvider, IdentityClaims

LINE_ISSUER = "https://access.line.me"
LINE_VERIFY_URL = "https://api.line.me/oauth2/v2.1/verify"


class LineOIDCClient(OIDCClient):
    """OIDC client for LINE Login v2.1."""

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        issuer: str = LINE_ISSUER,
        verify_url: str = LINE_VERIFY_URL,
    ) -> None:
        super().__init__(
            provider=AuthProvider.LINE,
            issuer=issuer,
            client_id=client_id,
            client_secret=client_secret,
            redirect_uri=redirect_uri,
        )
        self.verify_url = verify_url

    async def verify_id_token(self, id_token: str, nonce: str) -> IdentityClaims:
        """Verify the ID token with LINE.

        LINE checks the signature, expiry, audience (`client_id`) and
        nonce, and answers with the decoded claims.
        """
        data = {"id_token": id_token, "client_id": self.client_id, "nonce": nonce}

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.verify_url, data=data, timeout=HTTP_TIMEOUT
                )
        except httpx.HTTPError as e:
            logfire.error("LINE ID token verification HTTP error", error=str(e))
            raise IdTokenVerificationError(
                f"HTTP error during ID token verification: {e}"
            ) from e

        if response.status_code != 200:
            logfire.warn(
                "LINE rejected ID token",
                status_code=response.status_code,
                error=response.text,
            )
            raise IdTokenVerificationError(
                f"ID token verification failed: {response.status_code}"
            )

        try:
            payload = response.json()
            return claims_from_payload(payload)
        except (ValueError, KeyError) as e:
            raise IdTokenVerificationError("Malformed verification response") from e
