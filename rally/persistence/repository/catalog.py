"""Tag, sport and prefecture repositories using PostgreSQL."""

from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from rally.domain.model.catalog import Prefecture, Sport, Tag
from rally.domain.repository.catalog import (
    PrefectureRepository,
    SportRepository,
    TagRepository,
)
from rally.domain.value import PrefectureId, RecruitmentId, SportId
from rally.persistence.mappers import row_to_prefecture, row_to_sport, row_to_tag
from rally.persistence.tables import (
    prefectures_table,
    recruitment_tags_table,
    sports_table,
    tags_table,
)


class PostgresTagRepository(TagRepository):
    """PostgreSQL implementation of TagRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[Tag]:
        result = await self.session.execute(select(tags_table).order_by(tags_table.c.id))
        return [row_to_tag(row) for row in result.mappings().all()]

    async def find_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, list[Tag]]:
        if not recruitment_ids:
            return {}

        stmt = (
            select(recruitment_tags_table.c.recruitment_id, tags_table)
            .join(tags_table, tags_table.c.id == recruitment_tags_table.c.tag_id)
            .where(recruitment_tags_table.c.recruitment_id.in_(recruitment_ids))
            .order_by(recruitment_tags_table.c.recruitment_id, tags_table.c.id)
        )
        result = await self.session.execute(stmt)

        grouped: dict[RecruitmentId, list[Tag]] = defaultdict(list)
        for row in result.mappings().all():
            grouped[RecruitmentId(row["recruitment_id"])].append(row_to_tag(row))
        return dict(grouped)


class PostgresSportRepository(SportRepository):
    """PostgreSQL implementation of SportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[Sport]:
        result = await self.session.execute(select(sports_table).order_by(sports_table.c.id))
        return [row_to_sport(row) for row in result.mappings().all()]

    async def find_by_ids(self, sport_ids: Sequence[SportId]) -> dict[SportId, Sport]:
        if not sport_ids:
            return {}

        stmt = select(sports_table).where(sports_table.c.id.in_(sport_ids))
        result = await self.session.execute(stmt)
        sports = [row_to_sport(row) for row in result.mappings().all()]
        return {sport.id: sport for sport in sports}


class PostgresPrefectureRepository(PrefectureRepository):
    """PostgreSQL implementation of PrefectureRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_all(self) -> list[Prefecture]:
        result = await self.session.execute(
            select(prefectures_table).order_by(prefectures_table.c.id)
        )
        return [row_to_prefecture(row) for row in result.mappings().all()]

    async def find_by_ids(
        self, prefecture_ids: Sequence[PrefectureId]
    ) -> dict[PrefectureId, Prefecture]:
        if not prefecture_ids:
            return {}

        stmt = select(prefectures_table).where(prefectures_table.c.id.in_(prefecture_ids))
        result = await self.session.execute(stmt)
        prefectures = [row_to_prefecture(row) for row in result.mappings().all()]
        return {prefecture.id: prefecture for prefecture in prefectures}
