"""Database engine and session factory for PostgreSQL."""

import asyncio
from typing import Any

from sqlalchemy.engine import Result
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from rally.config import Settings


class SerializedSession(AsyncSession):
    """Async session that runs one statement at a time.

    All repositories of a request share one session while sibling GraphQL
    fields and loader batches run concurrently; their statements wait on a
    lock. Repositories only reach the database through ``execute``.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._statement_lock = asyncio.Lock()

    async def execute(self, *args: Any, **kwargs: Any) -> Result[Any]:
        async with self._statement_lock:
            return await super().execute(*args, **kwargs)


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    The pool is shared by every request; at most
    ``pool_size + max_overflow`` connections are open at once.

    Args:
        settings: Application settings with database configuration

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database.url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Factory for serialized sessions
    """
    return async_sessionmaker(
        engine,
        class_=SerializedSession,
        expire_on_commit=False,
        autoflush=False,
    )
