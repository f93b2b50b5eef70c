"""Mock persistence providers for testing."""

from dishka import Scope, provide

from rally.domain.repository import (
    AuthenticationRepository,
    PrefectureRepository,
    RecruitmentRepository,
    RelationshipRepository,
    SportRepository,
    StockRepository,
    TagRepository,
    TransactionManager,
    UserRepository,
)
from rally.persistence.repository.inmemory import InMemoryDatabase
from rally.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    The database is APP-scoped so requests against one container see each
    other's writes; every test builds its own container.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_database(self) -> InMemoryDatabase:
        """Provide the in-memory database."""
        return InMemoryDatabase()

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, database: InMemoryDatabase) -> UserRepository:
        return database.users

    @provide(scope=Scope.REQUEST)
    def get_authentication_repository(
        self, database: InMemoryDatabase
    ) -> AuthenticationRepository:
        return database.authentications

    @provide(scope=Scope.REQUEST)
    def get_recruitment_repository(
        self, database: InMemoryDatabase
    ) -> RecruitmentRepository:
        return database.recruitments

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, database: InMemoryDatabase) -> TagRepository:
        return database.tags

    @provide(scope=Scope.REQUEST)
    def get_sport_repository(self, database: InMemoryDatabase) -> SportRepository:
        return database.sports

    @provide(scope=Scope.REQUEST)
    def get_prefecture_repository(
        self, database: InMemoryDatabase
    ) -> PrefectureRepository:
        return database.prefectures

    @provide(scope=Scope.REQUEST)
    def get_stock_repository(self, database: InMemoryDatabase) -> StockRepository:
        return database.stocks

    @provide(scope=Scope.REQUEST)
    def get_relationship_repository(
        self, database: InMemoryDatabase
    ) -> RelationshipRepository:
        return database.relationships

    @provide(scope=Scope.REQUEST)
    def get_transaction_manager(self, database: InMemoryDatabase) -> TransactionManager:
        return database.transactions
