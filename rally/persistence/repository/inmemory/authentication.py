"""In-memory authentication repository for testing."""

from typing import Optional

from rally.domain.error import DuplicateAuthenticationError
from rally.domain.model.authentication import Authentication
from rally.domain.repository.authentication import AuthenticationRepository
from rally.domain.value import AuthenticationId, AuthProvider, UserId


class InMemoryAuthenticationRepository(AuthenticationRepository):
    """In-memory implementation of AuthenticationRepository for testing."""

    def __init__(self) -> None:
        self._authentications: list[Authentication] = []

    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Authentication]:
        """Find authentication by provider and subject."""
        for authentication in self._authentications:
            if authentication.provider == provider and authentication.uid == uid:
                return authentication
        return None

    async def find_all_by_user_id(self, user_id: UserId) -> list[Authentication]:
        return [a for a in self._authentications if a.user_id == user_id]

    async def add(self, authentication: Authentication) -> Authentication:
        """Insert an authentication record.

        Raises:
            DuplicateAuthenticationError: If `(provider, uid)` is already linked
        """
        if await self.find_by_provider(authentication.provider, authentication.uid):
            raise DuplicateAuthenticationError(
                authentication.provider.value, authentication.uid
            )

        authentication = authentication.model_copy(
            update={"id": AuthenticationId(len(self._authentications) + 1)}
        )
        self._authentications.append(authentication)
        return authentication

    def snapshot(self) -> list[Authentication]:
        return list(self._authentications)

    def restore(self, snapshot: list[Authentication]) -> None:
        self._authentications = list(snapshot)
