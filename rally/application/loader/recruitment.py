"""Loaders for data hanging off recruitments."""

from collections.abc import Mapping

from rally.domain.model import Tag
from rally.domain.repository import StockRepository, TagRepository
from rally.domain.value import RecruitmentId

from .base import BatchLoader


class RecruitmentTagsLoader(BatchLoader[RecruitmentId, list[Tag]]):
    """Tags of a recruitment; an untagged recruitment loads as ``[]``."""

    def __init__(self, tags: TagRepository) -> None:
        super().__init__()
        self.tags = tags

    async def dispatch(self, keys: list[RecruitmentId]) -> Mapping[RecruitmentId, list[Tag]]:
        return await self.tags.find_by_recruitment_ids(keys)

    def missing(self) -> list[Tag]:
        return []


class StockCountLoader(BatchLoader[RecruitmentId, int]):
    """Number of users who stocked a recruitment."""

    def __init__(self, stocks: StockRepository) -> None:
        super().__init__()
        self.stocks = stocks

    async def dispatch(self, keys: list[RecruitmentId]) -> Mapping[RecruitmentId, int]:
        return await self.stocks.count_by_recruitment_ids(keys)

    def missing(self) -> int:
        return 0
