"""Mock providers for testing."""

from .oidc import MockOIDCProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockOIDCProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
