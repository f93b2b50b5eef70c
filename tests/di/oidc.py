"""Mock identity provider DI for testing."""

from dishka import Scope, provide

from rally.adapter.oidc import MockIdentityProviderClient
from rally.domain.service import IdentityProviderClient
from rally.domain.value import AuthProvider
from rally.util.di.infrastructure.oidc import OIDCProvider


class MockOIDCProvider(OIDCProvider):
    """Mock OIDC provider: one deterministic client per provider."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_identity_providers(self) -> dict[AuthProvider, IdentityProviderClient]:
        """Provide mock clients; tests may reconfigure them per container."""
        return {
            provider: MockIdentityProviderClient(provider) for provider in AuthProvider
        }
