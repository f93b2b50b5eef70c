"""In-memory recruitment repository for testing."""

from typing import Optional

from rally.domain.model.recruitment import Recruitment
from rally.domain.pagination import PageRequest
from rally.domain.repository.recruitment import RecruitmentFilter, RecruitmentRepository
from rally.domain.value import RecruitmentId

from .association import InMemoryStockRepository


class InMemoryRecruitmentRepository(RecruitmentRepository):
    """In-memory implementation of RecruitmentRepository for testing.

    Stocked collections read stock rows from the given stock repository so
    they are ordered by stock ID like the PostgreSQL implementation.
    """

    def __init__(self, stocks: InMemoryStockRepository) -> None:
        self._recruitments: dict[RecruitmentId, Recruitment] = {}
        self._stocks = stocks

    async def find_by_id(self, recruitment_id: RecruitmentId) -> Optional[Recruitment]:
        return self._recruitments.get(recruitment_id)

    async def find_page(
        self, recruitment_filter: RecruitmentFilter, page: PageRequest
    ) -> list[Recruitment]:
        anchor = RecruitmentId(page.after) if page.use_after else None
        keyed = self._beyond(recruitment_filter, anchor)
        keyed.sort(key=lambda pair: pair[0], reverse=True)
        return [recruitment for _, recruitment in keyed[: page.limit]]

    async def exists_after(
        self, recruitment_filter: RecruitmentFilter, anchor: RecruitmentId
    ) -> bool:
        return bool(self._beyond(recruitment_filter, anchor))

    def add(self, recruitment: Recruitment) -> Recruitment:
        self._recruitments[recruitment.id] = recruitment
        return recruitment

    def _keyed(
        self, recruitment_filter: RecruitmentFilter
    ) -> list[tuple[int, Recruitment]]:
        """Matching recruitments paired with their ordering key."""
        keyed = []
        for recruitment in self._recruitments.values():
            if (
                recruitment_filter.status is not None
                and recruitment.status != recruitment_filter.status
            ):
                continue
            if (
                recruitment_filter.owner_id is not None
                and recruitment.user_id != recruitment_filter.owner_id
            ):
                continue

            if recruitment_filter.stocked_by is None:
                keyed.append((recruitment.id, recruitment))
                continue
            stock = self._stocks.find(recruitment_filter.stocked_by, recruitment.id)
            if stock is not None:
                keyed.append((stock.id, recruitment))
        return keyed

    def _beyond(
        self, recruitment_filter: RecruitmentFilter, anchor: Optional[RecruitmentId]
    ) -> list[tuple[int, Recruitment]]:
        keyed = self._keyed(recruitment_filter)
        if anchor is None:
            return keyed

        if recruitment_filter.stocked_by is None:
            bound: Optional[int] = anchor
        else:
            stock = self._stocks.find(recruitment_filter.stocked_by, anchor)
            bound = stock.id if stock else None
        if bound is None:
            return []
        return [(key, recruitment) for key, recruitment in keyed if key < bound]
