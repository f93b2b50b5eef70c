"""Domain layer DI providers."""

from dishka import Scope, provide

from rally.config import AuthSettings
from rally.domain.service import AuthService, IdentityProviderClient, JWTService
from rally.domain.value import AuthProvider
from rally.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, identity_providers: dict[AuthProvider, IdentityProviderClient]
    ) -> AuthService:
        """Provide authentication domain service.

        Args:
            identity_providers: Mapping of provider to its OIDC client
        """
        return AuthService(identity_providers=identity_providers)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide session token domain service."""
        return JWTService(auth_settings=auth_settings)
