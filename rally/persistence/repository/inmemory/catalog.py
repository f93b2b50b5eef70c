"""In-memory tag, sport and prefecture repositories for testing."""

from collections.abc import Sequence

from rally.domain.model.catalog import Prefecture, Sport, Tag
from rally.domain.repository.catalog import (
    PrefectureRepository,
    SportRepository,
    TagRepository,
)
from rally.domain.value import PrefectureId, RecruitmentId, SportId, TagId


class InMemoryTagRepository(TagRepository):
    """In-memory implementation of TagRepository for testing."""

    def __init__(self) -> None:
        self._tags: dict[TagId, Tag] = {}
        self._recruitment_tags: list[tuple[RecruitmentId, TagId]] = []

    async def find_all(self) -> list[Tag]:
        return sorted(self._tags.values(), key=lambda t: t.id)

    async def find_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, list[Tag]]:
        grouped: dict[RecruitmentId, list[Tag]] = {}
        for recruitment_id, tag_id in sorted(self._recruitment_tags):
            if recruitment_id in recruitment_ids:
                grouped.setdefault(recruitment_id, []).append(self._tags[tag_id])
        return grouped

    def add(self, tag: Tag) -> Tag:
        self._tags[tag.id] = tag
        return tag

    def attach(self, recruitment_id: RecruitmentId, tag_id: TagId) -> None:
        """Tag a recruitment."""
        self._recruitment_tags.append((recruitment_id, tag_id))


class InMemorySportRepository(SportRepository):
    """In-memory implementation of SportRepository for testing."""

    def __init__(self) -> None:
        self._sports: dict[SportId, Sport] = {}

    async def find_all(self) -> list[Sport]:
        return sorted(self._sports.values(), key=lambda s: s.id)

    async def find_by_ids(self, sport_ids: Sequence[SportId]) -> dict[SportId, Sport]:
        return {i: self._sports[i] for i in sport_ids if i in self._sports}

    def add(self, sport: Sport) -> Sport:
        self._sports[sport.id] = sport
        return sport


class InMemoryPrefectureRepository(PrefectureRepository):
    """In-memory implementation of PrefectureRepository for testing."""

    def __init__(self) -> None:
        self._prefectures: dict[PrefectureId, Prefecture] = {}

    async def find_all(self) -> list[Prefecture]:
        return sorted(self._prefectures.values(), key=lambda p: p.id)

    async def find_by_ids(
        self, prefecture_ids: Sequence[PrefectureId]
    ) -> dict[PrefectureId, Prefecture]:
        return {i: self._prefectures[i] for i in prefecture_ids if i in self._prefectures}

    def add(self, prefecture: Prefecture) -> Prefecture:
        self._prefectures[prefecture.id] = prefecture
        return prefecture
