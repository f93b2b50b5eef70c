"""Identity provider infrastructure providers."""

from dishka import Scope, provide

from rally.adapter.oidc import LineOIDCClient, OIDCClient
from rally.config import Settings
from rally.domain.service import IdentityProviderClient
from rally.domain.value import AuthProvider
from rally.util.di.base import ProviderBase
from rally.util.observability import instrument_httpx


class OIDCProvider(ProviderBase):
    """Identity provider component base."""

    __mock_component__ = "oidc"


class ProdOIDCProvider(OIDCProvider):
    """Production OIDC clients for every supported provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_identity_providers(
        self, settings: Settings
    ) -> dict[AuthProvider, IdentityProviderClient]:
        """Provide one client per provider.

        Clients are APP-scoped so discovery documents and signing keys are
        fetched once per process.
        """
        instrument_httpx()

        google = settings.auth.google
        line = settings.auth.line

        return {
            AuthProvider.GOOGLE: OIDCClient(
                provider=AuthProvider.GOOGLE,
                issuer=google.issuer,
                client_id=google.client_id,
                client_secret=google.client_secret,
                redirect_uri=google.callback_url,
            ),
            AuthProvider.LINE: LineOIDCClient(
                client_id=line.client_id,
                client_secret=line.client_secret,
                redirect_uri=line.callback_url,
                issuer=line.issuer,
            ),
        }
