"""Initiate login use case."""

import secrets

import logfire
from pydantic import BaseModel

from rally.adapter.oidc import generate_pkce_pair
from rally.application.usecase.base import BaseUseCase
from rally.domain.service import AuthService
from rally.domain.value import AuthProvider

from .link_state import LinkState


class InitiateLoginRequest(BaseModel):
    provider: AuthProvider


class LoginChallenge(BaseModel):
    """Redirect target plus the secrets the callback must present.

    ``state``, ``pkce_verifier`` and ``nonce`` are stored in short-lived
    http-only cookies and checked when the provider redirects back.
    """

    authorization_url: str
    state: str
    pkce_verifier: str
    nonce: str


class InitiateLoginUseCase(BaseUseCase):
    """Start an external login: Initiated -> RedirectIssued.

    Touches no database.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self.auth_service = auth_service

    async def execute(self, request: InitiateLoginRequest) -> LoginChallenge:
        client = self.auth_service.get_client(request.provider)

        state = secrets.token_urlsafe(32)
        nonce = secrets.token_urlsafe(32)
        verifier, challenge = generate_pkce_pair()

        authorization_url = await client.authorization_url(
            state=state, code_challenge=challenge, nonce=nonce
        )

        logfire.info(
            "Login redirect issued",
            provider=request.provider.value,
            link_state=LinkState.REDIRECT_ISSUED.value,
        )

        return LoginChallenge(
            authorization_url=authorization_url,
            state=state,
            pkce_verifier=verifier,
            nonce=nonce,
        )
