"""Repository interfaces for tags, sports and prefectures."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rally.domain.model.catalog import Prefecture, Sport, Tag
from rally.domain.value import PrefectureId, RecruitmentId, SportId


class TagRepository(ABC):
    """Repository for tags."""

    @abstractmethod
    async def find_all(self) -> list[Tag]:
        pass

    @abstractmethod
    async def find_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, list[Tag]]:
        """Find the tags of many recruitments in one query.

        Returns:
            Mapping of recruitment ID to its tags ordered by tag ID;
            recruitments without tags are absent
        """
        pass


class SportRepository(ABC):
    """Repository for sports."""

    @abstractmethod
    async def find_all(self) -> list[Sport]:
        pass

    @abstractmethod
    async def find_by_ids(self, sport_ids: Sequence[SportId]) -> dict[SportId, Sport]:
        pass


class PrefectureRepository(ABC):
    """Repository for prefectures."""

    @abstractmethod
    async def find_all(self) -> list[Prefecture]:
        pass

    @abstractmethod
    async def find_by_ids(
        self, prefecture_ids: Sequence[PrefectureId]
    ) -> dict[PrefectureId, Prefecture]:
        pass
