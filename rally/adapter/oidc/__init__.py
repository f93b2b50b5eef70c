"""OpenID Connect identity provider adapters."""

from .client import OIDCClient
from .line import LineOIDCClient
from .mock import MockIdentityProviderClient
from .pkce import generate_pkce_pair

__all__ = [
    "OIDCClient",
    "LineOIDCClient",
    "MockIdentityProviderClient",
    "generate_pkce_pair",
]
