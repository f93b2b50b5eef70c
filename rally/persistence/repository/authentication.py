"""Authentication repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import and_, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from rally.domain.error import DuplicateAuthenticationError
from rally.domain.model.authentication import Authentication
from rally.domain.repository.authentication import AuthenticationRepository
from rally.domain.value import AuthProvider, UserId
from rally.persistence.mappers import authentication_to_dict, row_to_authentication
from rally.persistence.tables import authentications_table


class PostgresAuthenticationRepository(AuthenticationRepository):
    """PostgreSQL implementation of AuthenticationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_provider(
        self, provider: AuthProvider, uid: str
    ) -> Optional[Authentication]:
        stmt = select(authentications_table).where(
            and_(
                authentications_table.c.provider == provider,
                authentications_table.c.uid == uid,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_authentication(row) if row else None

    async def find_all_by_user_id(self, user_id: UserId) -> list[Authentication]:
        stmt = (
            select(authentications_table)
            .where(authentications_table.c.user_id == user_id)
            .order_by(authentications_table.c.id)
        )
        result = await self.session.execute(stmt)
        return [row_to_authentication(row) for row in result.mappings().all()]

    async def add(self, authentication: Authentication) -> Authentication:
        stmt = (
            insert(authentications_table)
            .values(**authentication_to_dict(authentication))
            .returning(authentications_table)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as e:
            if "uq_authentications_provider_uid" in str(e.orig):
                raise DuplicateAuthenticationError(
                    authentication.provider.value, authentication.uid
                ) from e
            raise
        return row_to_authentication(result.mappings().one())
