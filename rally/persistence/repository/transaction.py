"""Transaction manager backed by PostgreSQL sessions."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from rally.domain.repository.transaction import TransactionManager, TransactionScope
from rally.persistence.repository.authentication import PostgresAuthenticationRepository
from rally.persistence.repository.user import PostgresUserRepository


class PostgresTransactionManager(TransactionManager):
    """Opens a dedicated session per transaction.

    The session is separate from the request session, so a transaction
    holds a pooled connection only for the duration of its block.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    @asynccontextmanager
    async def begin(self) -> AsyncIterator[TransactionScope]:
        async with self.session_factory() as session:
            with logfire.span("database transaction"):
                async with session.begin():
                    yield TransactionScope(
                        users=PostgresUserRepository(session),
                        authentications=PostgresAuthenticationRepository(session),
                    )
