"""Authentication repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from rally.domain.model.authentication import Authentication
from rally.domain.value import AuthProvider, UserId


class AuthenticationRepository(ABC):
    """Repository for external identity links."""

    @abstractmethod
    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Authentication]:
        """Find the link for a provider subject.

        Args:
            provider: The identity provider
            uid: Subject identifier issued by that provider

        Returns:
            The authentication record if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_user_id(self, user_id: UserId) -> list[Authentication]:
        pass

    @abstractmethod
    async def add(self, authentication: Authentication) -> Authentication:
        """Insert a new authentication record.

        Raises:
            DuplicateAuthenticationError: `(provider, uid)` is already linked
        """
        pass

