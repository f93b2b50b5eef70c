"""Unit tests for LineOIDCClient ID token verification."""

from unittest.mock import patch
from urllib.parse import parse_qs

import httpx
import pytest

from rally.adapter.error import IdTokenVerificationError
from rally.adapter.oidc import LineOIDCClient
from rally.adapter.oidc.line import LINE_VERIFY_URL
from rally.domain.value import AuthProvider


def _client() -> LineOIDCClient:
    return LineOIDCClient(
        client_id="1650000000",
        client_secret="secret",
        redirect_uri="http://localhost:8000/auth/line/callback",
    )


def _mock_http(handler):
    real_client = httpx.AsyncClient
    return patch(
        "httpx.AsyncClient",
        lambda *args, **kwargs: real_client(transport=httpx.MockTransport(handler)),
    )


class TestLineOIDCClient:
    def test_provider_and_issuer(self):
        client = _client()

        assert client.provider == AuthProvider.LINE
        assert client.issuer == "https://access.line.me"

    @pytest.mark.asyncio
    async def test_verify_posts_token_and_nonce(self):
        # Arrange
        client = _client()
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "iss": "https://access.line.me",
                    "sub": "U1234567890abcdef",
                    "aud": "1650000000",
                    "name": "Ren",
                    "email": "ren@example.com",
                    "nonce": "n-1",
                },
            )

        # Act
        with _mock_http(handler):
            claims = await client.verify_id_token("line-id-token", "n-1")

        # Assert
        assert claims.sub == "U1234567890abcdef"
        assert claims.name == "Ren"
        assert claims.email == "ren@example.com"
        assert claims.picture is None
        assert str(seen[0].url) == LINE_VERIFY_URL
        form = parse_qs(seen[0].content.decode())
        assert form == {
            "id_token": ["line-id-token"],
            "client_id": ["1650000000"],
            "nonce": ["n-1"],
        }

    @pytest.mark.asyncio
    async def test_rejected_by_line(self):
        client = _client()

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                400,
                json={"error": "invalid_request", "error_description": "Invalid IdToken Nonce."},
            )

        with _mock_http(handler):
            with pytest.raises(IdTokenVerificationError):
                await client.verify_id_token("line-id-token", "wrong")

    @pytest.mark.asyncio
    async def test_malformed_response(self):
        client = _client()

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"name": "no subject"})

        with _mock_http(handler):
            with pytest.raises(IdTokenVerificationError):
                await client.verify_id_token("line-id-token", "n-1")
