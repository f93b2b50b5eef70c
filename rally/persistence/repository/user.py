"""User repository implementation using PostgreSQL."""

from collections.abc import Sequence
from typing import Optional

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from rally.domain.model.user import User
from rally.domain.repository.user import UserRepository
from rally.domain.value import UserId
from rally.persistence.mappers import row_to_user, user_to_dict
from rally.persistence.tables import users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.id == user_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(row) if row else None

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        if not user_ids:
            return {}

        stmt = select(users_table).where(users_table.c.id.in_(user_ids))
        result = await self.session.execute(stmt)
        users = [row_to_user(row) for row in result.mappings().all()]
        return {user.id: user for user in users}

    async def find_by_email(self, email: str) -> Optional[User]:
        stmt = select(users_table).where(users_table.c.email == email)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_user(row) if row else None

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(select(users_table.c.id).where(users_table.c.email == email).exists())
        result = await self.session.execute(stmt)
        return bool(result.scalar())

    async def add(self, user: User) -> User:
        stmt = insert(users_table).values(**user_to_dict(user)).returning(users_table)
        result = await self.session.execute(stmt)
        return row_to_user(result.mappings().one())
