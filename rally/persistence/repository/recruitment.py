"""Recruitment repository implementation using PostgreSQL."""

from typing import Optional

from sqlalchemy import ColumnElement, Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from rally.domain.model.recruitment import Recruitment
from rally.domain.pagination import PageRequest
from rally.domain.repository.recruitment import RecruitmentFilter, RecruitmentRepository
from rally.domain.value import RecruitmentId
from rally.persistence.mappers import row_to_recruitment
from rally.persistence.tables import recruitments_table, stocks_table


class PostgresRecruitmentRepository(RecruitmentRepository):
    """PostgreSQL implementation of RecruitmentRepository.

    The page query and the existence probe are both built from
    ``_filtered`` and ``_beyond`` so they always share one predicate.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, recruitment_id: RecruitmentId) -> Optional[Recruitment]:
        stmt = select(recruitments_table).where(recruitments_table.c.id == recruitment_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_recruitment(row) if row else None

    async def find_page(
        self, recruitment_filter: RecruitmentFilter, page: PageRequest
    ) -> list[Recruitment]:
        stmt = self._filtered(recruitment_filter)
        if page.use_after:
            stmt = stmt.where(self._beyond(recruitment_filter, page.after))
        stmt = stmt.order_by(self._order_key(recruitment_filter).desc()).limit(page.limit)

        result = await self.session.execute(stmt)
        return [row_to_recruitment(row) for row in result.mappings().all()]

    async def exists_after(
        self, recruitment_filter: RecruitmentFilter, anchor: RecruitmentId
    ) -> bool:
        probe = self._filtered(recruitment_filter).where(
            self._beyond(recruitment_filter, anchor)
        )
        result = await self.session.execute(select(probe.exists()))
        return bool(result.scalar())

    def _filtered(self, recruitment_filter: RecruitmentFilter) -> Select:
        stmt = select(recruitments_table)

        if recruitment_filter.stocked_by is not None:
            stmt = stmt.join(
                stocks_table, stocks_table.c.recruitment_id == recruitments_table.c.id
            ).where(stocks_table.c.user_id == recruitment_filter.stocked_by)
        if recruitment_filter.owner_id is not None:
            stmt = stmt.where(recruitments_table.c.user_id == recruitment_filter.owner_id)
        if recruitment_filter.status is not None:
            stmt = stmt.where(recruitments_table.c.status == recruitment_filter.status)

        return stmt

    def _order_key(self, recruitment_filter: RecruitmentFilter):
        if recruitment_filter.stocked_by is not None:
            return stocks_table.c.id
        return recruitments_table.c.id

    def _beyond(self, recruitment_filter: RecruitmentFilter, anchor: int) -> ColumnElement[bool]:
        """Rows strictly older than the anchor in collection order."""
        if recruitment_filter.stocked_by is not None:
            # Stocked collections are ordered by stock row; resolve the
            # anchor recruitment to the viewer's stock of it.
            anchor_stock = (
                select(stocks_table.c.id)
                .where(
                    stocks_table.c.user_id == recruitment_filter.stocked_by,
                    stocks_table.c.recruitment_id == anchor,
                )
                .scalar_subquery()
            )
            return stocks_table.c.id < anchor_stock
        return recruitments_table.c.id < anchor
