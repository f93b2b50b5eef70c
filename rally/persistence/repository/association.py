"""Stock and relationship repositories using PostgreSQL."""

from collections.abc import Sequence

from sqlalchemy import ColumnElement, Select, func, select, tuple_
from sqlalchemy.ext.asyncio import AsyncSession

from rally.domain.model.user import User
from rally.domain.pagination import PageRequest
from rally.domain.repository.association import (
    FollowKey,
    RelationshipRepository,
    StockKey,
    StockRepository,
)
from rally.domain.value import RecruitmentId, UserId
from rally.persistence.mappers import row_to_user
from rally.persistence.tables import relationships_table, stocks_table, users_table


class PostgresStockRepository(StockRepository):
    """PostgreSQL implementation of StockRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_existing(self, keys: Sequence[StockKey]) -> set[StockKey]:
        if not keys:
            return set()

        stmt = select(stocks_table.c.user_id, stocks_table.c.recruitment_id).where(
            tuple_(stocks_table.c.user_id, stocks_table.c.recruitment_id).in_(keys)
        )
        result = await self.session.execute(stmt)
        return {
            (UserId(user_id), RecruitmentId(recruitment_id))
            for user_id, recruitment_id in result.all()
        }

    async def count_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, int]:
        if not recruitment_ids:
            return {}

        stmt = (
            select(stocks_table.c.recruitment_id, func.count())
            .where(stocks_table.c.recruitment_id.in_(recruitment_ids))
            .group_by(stocks_table.c.recruitment_id)
        )
        result = await self.session.execute(stmt)
        return {RecruitmentId(recruitment_id): count for recruitment_id, count in result.all()}


class PostgresRelationshipRepository(RelationshipRepository):
    """PostgreSQL implementation of RelationshipRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_existing(self, keys: Sequence[FollowKey]) -> set[FollowKey]:
        if not keys:
            return set()

        stmt = select(
            relationships_table.c.follower_id, relationships_table.c.followed_id
        ).where(
            tuple_(
                relationships_table.c.follower_id, relationships_table.c.followed_id
            ).in_(keys)
        )
        result = await self.session.execute(stmt)
        return {
            (UserId(follower_id), UserId(followed_id))
            for follower_id, followed_id in result.all()
        }

    async def find_following_page(
        self, follower_id: UserId, page: PageRequest
    ) -> list[User]:
        stmt = self._following(follower_id)
        if page.use_after:
            stmt = stmt.where(self._beyond(follower_id, UserId(page.after)))
        stmt = stmt.order_by(relationships_table.c.id.desc()).limit(page.limit)

        result = await self.session.execute(stmt)
        return [row_to_user(row) for row in result.mappings().all()]

    async def exists_following_after(self, follower_id: UserId, anchor: UserId) -> bool:
        probe = self._following(follower_id).where(self._beyond(follower_id, anchor))
        result = await self.session.execute(select(probe.exists()))
        return bool(result.scalar())

    def _following(self, follower_id: UserId) -> Select:
        return (
            select(users_table)
            .join(relationships_table, relationships_table.c.followed_id == users_table.c.id)
            .where(relationships_table.c.follower_id == follower_id)
        )

    def _beyond(self, follower_id: UserId, anchor: UserId) -> ColumnElement[bool]:
        anchor_edge = (
            select(relationships_table.c.id)
            .where(
                relationships_table.c.follower_id == follower_id,
                relationships_table.c.followed_id == anchor,
            )
            .scalar_subquery()
        )
        return relationships_table.c.id < anchor_edge
