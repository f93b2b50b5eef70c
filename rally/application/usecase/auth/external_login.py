"""External login use case.

Completes an OAuth2 Authorization Code + PKCE login with OpenID Connect
claims, linking the provider subject to a local user (creating one on first
login) and issuing a session token.
"""

import hmac
import secrets
from datetime import datetime, timezone
from typing import NoReturn, Optional

import logfire
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from rally.adapter.error import OIDCError
from rally.application.usecase.base import BaseUseCase
from rally.domain.error import (
    DomainError,
    IdentityLinkFailed,
    IdentityLinkRejected,
)
from rally.domain.model.authentication import Authentication
from rally.domain.model.user import DEFAULT_AVATAR, UNUSABLE_PASSWORD_PREFIX, User
from rally.domain.repository import (
    AuthenticationRepository,
    TransactionManager,
    UserRepository,
)
from rally.domain.service import AuthService, IdentityProviderClient, JWTService
from rally.domain.value import (
    AuthProvider,
    EmailVerificationStatus,
    IdentityClaims,
    UserId,
)

from .link_state import LinkState


class ExternalLoginRequest(BaseModel):
    """Callback parameters plus the secrets stored at redirect time."""

    provider: AuthProvider
    code: Optional[str] = None
    state: Optional[str] = None  # echoed by the provider
    stored_state: Optional[str] = None
    stored_verifier: Optional[str] = None
    stored_nonce: Optional[str] = None


class ExternalLoginResponse(BaseModel):
    token: str
    user_id: UserId
    provisioned: bool  # True when this login created the user


class ExternalLoginUseCase(BaseUseCase):
    """Use case for provider callbacks.

    Client problems raise ``IdentityLinkRejected`` and never open a
    transaction. Provider and store problems raise ``IdentityLinkFailed``;
    the provisioning transaction is rolled back before that happens.
    """

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_repository: UserRepository,
        authentication_repository: AuthenticationRepository,
        transaction_manager: TransactionManager,
    ) -> None:
        """Initialize external login use case.

        Args:
            auth_service: Routes to the provider client
            jwt_service: Issues the session token
            user_repository: Read access to users (email check)
            authentication_repository: Read access to identity links
            transaction_manager: Opens the provisioning transaction
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.user_repository = user_repository
        self.authentication_repository = authentication_repository
        self.transaction_manager = transaction_manager

    async def execute(self, request: ExternalLoginRequest) -> ExternalLoginResponse:
        """Execute the callback half of the login flow.

        Raises:
            IdentityLinkRejected: State mismatch, missing code, verifier or
                nonce, or an email that already belongs to another user
            IdentityLinkFailed: Token exchange, ID token or claims problem,
                or a store error while provisioning
        """
        provider = request.provider.value

        with logfire.span("external_login.execute", provider=provider):
            code, verifier, nonce = self._verify_callback(request)
            logfire.info("Callback verified", link_state=LinkState.STATE_VERIFIED.value)

            try:
                client = self.auth_service.get_client(request.provider)
            except ValueError as e:
                raise IdentityLinkFailed(
                    "provider_unavailable", LinkState.STATE_VERIFIED.value, str(e)
                ) from e

            id_token = await self._exchange(client, code, verifier)
            claims = await self._verify_claims(client, id_token, nonce)
            logfire.info(
                "ID token verified",
                link_state=LinkState.CLAIMS_VERIFIED.value,
                subject=claims.sub,
            )

            authentication = await self.authentication_repository.find_by_provider(
                request.provider, claims.sub
            )
            if authentication:
                user_id = authentication.user_id
                provisioned = False
                logfire.info(
                    "Existing identity linked",
                    link_state=LinkState.LINKED.value,
                    user_id=user_id,
                )
            else:
                user_id, provisioned = await self._provision(request.provider, claims)

            token = self.jwt_service.create_token(user_id)
            logfire.info(
                "Session issued",
                link_state=LinkState.SESSION_ISSUED.value,
                user_id=user_id,
                provisioned=provisioned,
            )
            return ExternalLoginResponse(
                token=token, user_id=user_id, provisioned=provisioned
            )

    def _verify_callback(self, request: ExternalLoginRequest) -> tuple[str, str, str]:
        """CallbackReceived -> StateVerified."""
        if not request.stored_state or not request.state:
            self._reject("state_mismatch", "Login state is missing")
        if not hmac.compare_digest(
            request.stored_state.encode(), request.state.encode()
        ):
            self._reject("state_mismatch", "Login state does not match")
        if not request.code:
            self._reject("missing_code", "Authorization code is missing")
        if not request.stored_verifier:
            self._reject("missing_verifier", "PKCE verifier is missing")
        if not request.stored_nonce:
            self._reject("missing_nonce", "Nonce is missing")

        return request.code, request.stored_verifier, request.stored_nonce

    def _reject(self, reason: str, message: str) -> NoReturn:
        logfire.warn(
            "Login rejected",
            reason=reason,
            link_state=LinkState.CALLBACK_RECEIVED.value,
        )
        raise IdentityLinkRejected(reason, LinkState.CALLBACK_RECEIVED.value, message)

    async def _exchange(
        self, client: IdentityProviderClient, code: str, verifier: str
    ) -> str:
        """StateVerified -> TokenExchanged."""
        try:
            tokens = await client.exchange_code(code, verifier)
        except OIDCError as e:
            raise IdentityLinkFailed(
                "token_exchange_failed", LinkState.STATE_VERIFIED.value, str(e)
            ) from e

        if not tokens.id_token:
            logfire.error("Token response has no ID token", provider=client.provider.value)
            raise IdentityLinkFailed("missing_id_token", LinkState.STATE_VERIFIED.value)

        return tokens.id_token

    async def _verify_claims(
        self, client: IdentityProviderClient, id_token: str, nonce: str
    ) -> IdentityClaims:
        """TokenExchanged -> ClaimsVerified."""
        state = LinkState.TOKEN_EXCHANGED.value
        try:
            claims = await client.verify_id_token(id_token, nonce)
        except OIDCError as e:
            raise IdentityLinkFailed("id_token_invalid", state, str(e)) from e

        # Name and email are part of the provider contract for our scopes
        if not claims.name:
            raise IdentityLinkFailed("missing_name", state, "ID token has no name claim")
        if not claims.email:
            raise IdentityLinkFailed("missing_email", state, "ID token has no email claim")

        return claims

    async def _provision(
        self, provider: AuthProvider, claims: IdentityClaims
    ) -> tuple[UserId, bool]:
        """ClaimsVerified -> Provisioned.

        Returns the user ID and whether a user was created.

        The user row and its authentication record are written in one
        transaction; neither survives without the other.
        """
        if await self.user_repository.exists_by_email(claims.email):
            logfire.warn(
                "Login rejected",
                reason="duplicate_email",
                link_state=LinkState.CLAIMS_VERIFIED.value,
            )
            raise IdentityLinkRejected(
                "duplicate_email",
                LinkState.CLAIMS_VERIFIED.value,
                "Email is already registered",
            )

        now = datetime.now(timezone.utc)
        try:
            async with self.transaction_manager.begin() as tx:
                # Another login for the same subject may have won the race
                existing = await tx.authentications.find_by_provider(provider, claims.sub)
                if existing:
                    return existing.user_id, False

                user = await tx.users.add(
                    User(
                        name=claims.name[:255],
                        email=claims.email,
                        avatar=claims.picture or DEFAULT_AVATAR,
                        email_verification_status=EmailVerificationStatus.VERIFIED,
                        password_digest=UNUSABLE_PASSWORD_PREFIX + secrets.token_urlsafe(32),
                        created_at=now,
                        updated_at=now,
                    )
                )
                await tx.authentications.add(
                    Authentication(
                        provider=provider,
                        uid=claims.sub,
                        user_id=user.id,
                        created_at=now,
                        updated_at=now,
                    )
                )
        except (SQLAlchemyError, DomainError) as e:
            logfire.error(
                "User provisioning rolled back",
                provider=provider.value,
                subject=claims.sub,
                error=str(e),
            )
            raise IdentityLinkFailed(
                "store_error", LinkState.CLAIMS_VERIFIED.value, str(e)
            ) from e

        logfire.info(
            "User provisioned",
            link_state=LinkState.PROVISIONED.value,
            user_id=user.id,
            provider=provider.value,
        )
        return user.id, True
