"""All in-memory repositories wired together."""

from .association import InMemoryRelationshipRepository, InMemoryStockRepository
from .authentication import InMemoryAuthenticationRepository
from .catalog import (
    InMemoryPrefectureRepository,
    InMemorySportRepository,
    InMemoryTagRepository,
)
from .recruitment import InMemoryRecruitmentRepository
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository


class InMemoryDatabase:
    """One consistent set of in-memory repositories.

    Repositories that read each other's rows (stocked recruitments,
    followed users) share state the way tables do in one database.
    """

    def __init__(self) -> None:
        self.users = InMemoryUserRepository()
        self.authentications = InMemoryAuthenticationRepository()
        self.tags = InMemoryTagRepository()
        self.sports = InMemorySportRepository()
        self.prefectures = InMemoryPrefectureRepository()
        self.stocks = InMemoryStockRepository()
        self.relationships = InMemoryRelationshipRepository(self.users)
        self.recruitments = InMemoryRecruitmentRepository(self.stocks)
        self.transactions = InMemoryTransactionManager(self.users, self.authentications)
