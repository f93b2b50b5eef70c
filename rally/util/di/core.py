"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from rally.config import AuthSettings, PaginationSettings, Settings
from rally.util.di.base import ProviderBase
from rally.util.error import ConfigurationError

PLACEHOLDER_SECRET = "CHANGE_ME_IN_PRODUCTION"


def check_settings(settings: Settings) -> Settings:
    """Refuse to run outside development with placeholder secrets.

    Raises:
        ConfigurationError: A secret still has its placeholder value
    """
    if settings.environment in ("test", "development"):
        return settings

    auth = settings.auth
    placeholders = [
        name
        for name, value in (
            ("auth.jwt_secret", auth.jwt_secret),
            ("auth.google.client_secret", auth.google.client_secret),
            ("auth.line.client_secret", auth.line.client_secret),
        )
        if value == PLACEHOLDER_SECRET
    ]
    if placeholders:
        raise ConfigurationError(
            f"{', '.join(placeholders)} must be set in {settings.environment}"
        )
    return settings


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file once, when
    the container first needs them.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return check_settings(Settings())

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_pagination_settings(self, settings: Settings) -> PaginationSettings:
        return settings.pagination
