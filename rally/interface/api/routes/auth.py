"""Authentication routes.

Login with an external identity provider is a browser redirect round trip:

    GET /auth/{provider}/login     -> 302 to the provider, login cookies set
    GET /auth/{provider}/callback  -> 302 to the frontend, session cookie set

The callback answers 400 when the attempt is rejected (bad state, missing
parameters, email already registered) and 500 when it fails (provider or
database error). The session cookie is only ever set on success.
"""

import logging
from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from rally.adapter.error import ProviderError
from rally.application.usecase.auth import (
    ExternalLoginRequest,
    ExternalLoginUseCase,
    GetViewerRequest,
    GetViewerResponse,
    GetViewerUseCase,
    InitiateLoginRequest,
    InitiateLoginUseCase,
)
from rally.config import Settings
from rally.domain.error import IdentityLinkError, IdentityLinkRejected
from rally.domain.value import AuthProvider

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class LoginErrorResponse(BaseModel):
    """Body of a rejected or failed callback."""

    error: str
    state: str
    message: str


class LogoutResponse(BaseModel):
    success: bool
    message: str


def _login_cookie_names(settings: Settings) -> tuple[str, str, str]:
    auth = settings.auth
    return auth.state_cookie, auth.pkce_verifier_cookie, auth.nonce_cookie


@router.get("/{provider}/login")
async def login(
    provider: AuthProvider,
    initiate_login_use_case: FromDishka[InitiateLoginUseCase],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Redirect the browser to the provider's authorization page.

    The state, PKCE verifier and nonce are kept in short-lived http-only
    cookies until the provider redirects back.
    """
    logger.info(f"Initiating {provider.value} login")

    try:
        challenge = await initiate_login_use_case.execute(
            InitiateLoginRequest(provider=provider)
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    except ProviderError as e:
        logger.error(f"Provider unavailable: provider={provider.value}, error={e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Identity provider unavailable",
        ) from e

    response = RedirectResponse(
        url=challenge.authorization_url, status_code=status.HTTP_302_FOUND
    )
    state_cookie, verifier_cookie, nonce_cookie = _login_cookie_names(settings)
    for key, value in (
        (state_cookie, challenge.state),
        (verifier_cookie, challenge.pkce_verifier),
        (nonce_cookie, challenge.nonce),
    ):
        response.set_cookie(
            key=key,
            value=value,
            max_age=settings.auth.login_cookie_max_age,
            httponly=True,
            secure=settings.secure_cookies,
            samesite="lax",
            path="/",
        )
    return response


@router.get("/{provider}/callback")
async def callback(
    provider: AuthProvider,
    request: Request,
    external_login_use_case: FromDishka[ExternalLoginUseCase],
    settings: FromDishka[Settings],
    code: Optional[str] = None,
    state: Optional[str] = None,
) -> Response:
    """Complete the login and issue the session cookie.

    Example:
        GET /auth/google/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:3000
        Sets cookie: token
    """
    logger.info(f"OAuth callback received: provider={provider.value}")

    state_cookie, verifier_cookie, nonce_cookie = _login_cookie_names(settings)

    try:
        result = await external_login_use_case.execute(
            ExternalLoginRequest(
                provider=provider,
                code=code,
                state=state,
                stored_state=request.cookies.get(state_cookie),
                stored_verifier=request.cookies.get(verifier_cookie),
                stored_nonce=request.cookies.get(nonce_cookie),
            )
        )
    except IdentityLinkError as e:
        rejected = isinstance(e, IdentityLinkRejected)
        if rejected:
            logger.warning(f"Login rejected: provider={provider.value}, reason={e.reason}")
        else:
            logger.error(f"Login failed: provider={provider.value}, reason={e.reason}")

        response = JSONResponse(
            status_code=(
                status.HTTP_400_BAD_REQUEST
                if rejected
                else status.HTTP_500_INTERNAL_SERVER_ERROR
            ),
            content=LoginErrorResponse(
                error=e.reason, state=e.state, message=str(e)
            ).model_dump(),
        )
        _clear_login_cookies(response, settings)
        return response

    logger.info(f"Login successful for user: {result.user_id}")

    response = RedirectResponse(
        url=settings.api.frontend_url, status_code=status.HTTP_302_FOUND
    )
    response.set_cookie(
        key=settings.auth.token_cookie,
        value=result.token,
        max_age=settings.auth.token_expiry_hours * 60 * 60,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
        path="/",
    )
    _clear_login_cookies(response, settings)
    return response


def _clear_login_cookies(response: Response, settings: Settings) -> None:
    """The login secrets are single-use."""
    for key in _login_cookie_names(settings):
        response.delete_cookie(key=key, path="/")


@router.post("/logout", response_model=LogoutResponse)
async def logout(response: Response, settings: FromDishka[Settings]) -> LogoutResponse:
    """Log out by clearing the session cookie."""
    response.delete_cookie(key=settings.auth.token_cookie, path="/")
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=GetViewerResponse)
async def me(
    request: Request,
    get_viewer_use_case: FromDishka[GetViewerUseCase],
    settings: FromDishka[Settings],
) -> GetViewerResponse:
    """Return the signed-in user, or ``authenticated: false``.

    Safe to call without a session; an invalid or expired token is reported
    as unauthenticated rather than as an error.
    """
    return await get_viewer_use_case.execute(
        GetViewerRequest(token=request.cookies.get(settings.auth.token_cookie))
    )
