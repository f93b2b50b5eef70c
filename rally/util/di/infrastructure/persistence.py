"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from rally.config import Settings
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
from rally.persistence.database import create_engine, create_session_factory
from rally.persistence.repository import (
    PostgresAuthenticationRepository,
    PostgresPrefectureRepository,
    PostgresRecruitmentRepository,
    PostgresRelationshipRepository,
    PostgresSportRepository,
    PostgresStockRepository,
    PostgresTagRepository,
    PostgresTransactionManager,
    PostgresUserRepository,
)
from rally.util.di.base import ProviderBase
from rally.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide the process-wide engine; its pool is disposed on shutdown."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.APP)
    def get_transaction_manager(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> TransactionManager:
        """Provide transaction manager for multi-statement writes."""
        return PostgresTransactionManager(session_factory)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if one was raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_authentication_repository(
        self, session: AsyncSession
    ) -> AuthenticationRepository:
        return PostgresAuthenticationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_recruitment_repository(self, session: AsyncSession) -> RecruitmentRepository:
        return PostgresRecruitmentRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_tag_repository(self, session: AsyncSession) -> TagRepository:
        return PostgresTagRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_sport_repository(self, session: AsyncSession) -> SportRepository:
        return PostgresSportRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_prefecture_repository(self, session: AsyncSession) -> PrefectureRepository:
        return PostgresPrefectureRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_stock_repository(self, session: AsyncSession) -> StockRepository:
        return PostgresStockRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_relationship_repository(
        self, session: AsyncSession
    ) -> RelationshipRepository:
        return PostgresRelationshipRepository(session)
