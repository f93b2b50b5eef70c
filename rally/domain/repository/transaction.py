"""Transaction boundary for multi-statement writes."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from rally.domain.repository.authentication import AuthenticationRepository
from rally.domain.repository.user import UserRepository


@dataclass
class TransactionScope:
    """Repositories bound to one open transaction."""

    users: UserRepository
    authentications: AuthenticationRepository


class TransactionManager(ABC):
    """Opens transactions.

    Usage:
        async with transaction_manager.begin() as tx:
            user = await tx.users.add(user)
            await tx.authentications.add(authentication)

    The transaction commits when the block exits normally and rolls back
    when it raises (including on task cancellation).
    """

    @abstractmethod
    def begin(self) -> AbstractAsyncContextManager[TransactionScope]:
        pass
