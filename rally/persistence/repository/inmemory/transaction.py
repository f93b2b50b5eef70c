"""In-memory transaction manager for testing."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from rally.domain.repository.transaction import TransactionManager, TransactionScope

from .authentication import InMemoryAuthenticationRepository
from .user import InMemoryUserRepository


class InMemoryTransactionManager(TransactionManager):
    """Snapshots the repositories on begin and restores them on failure.

    ``begun``, ``committed`` and ``rolled_back`` count transactions so tests
    can assert whether (and how) a transaction ran.
    """

    def __init__(
        self,
        users: InMemoryUserRepository,
        authentications: InMemoryAuthenticationRepository,
    ) -> None:
        self.users = users
        self.authentications = authentications
        self.begun = 0
        self.committed = 0
        self.rolled_back = 0

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[TransactionScope]:
        self.begun += 1
        users_snapshot = self.users.snapshot()
        authentications_snapshot = self.authentications.snapshot()
        try:
            yield TransactionScope(users=self.users, authentications=self.authentications)
        except BaseException:
            self.users.restore(users_snapshot)
            self.authentications.restore(authentications_snapshot)
            self.rolled_back += 1
            raise
        self.committed += 1
