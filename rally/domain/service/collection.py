"""Paged collections served through cursor pagination."""

from rally.domain.model.recruitment import Recruitment
from rally.domain.model.user import User
from rally.domain.pagination import PagedCollection, PageRequest
from rally.domain.repository import (
    RecruitmentFilter,
    RecruitmentRepository,
    RelationshipRepository,
)
from rally.domain.value import EntityKind, RecruitmentId, UserId


class RecruitmentFeed(PagedCollection[Recruitment]):
    """Recruitments matching one filter, newest first."""

    kind = EntityKind.RECRUITMENT

    def __init__(
        self, repository: RecruitmentRepository, recruitment_filter: RecruitmentFilter
    ) -> None:
        self.repository = repository
        self.filter = recruitment_filter

    async def fetch(self, page: PageRequest) -> list[Recruitment]:
        return await self.repository.find_page(self.filter, page)

    async def exists_after(self, anchor: int) -> bool:
        return await self.repository.exists_after(self.filter, RecruitmentId(anchor))


class FollowingCollection(PagedCollection[User]):
    """Users followed by one user, most recently followed first."""

    kind = EntityKind.USER

    def __init__(self, repository: RelationshipRepository, follower_id: UserId) -> None:
        self.repository = repository
        self.follower_id = follower_id

    async def fetch(self, page: PageRequest) -> list[User]:
        return await self.repository.find_following_page(self.follower_id, page)

    async def exists_after(self, anchor: int) -> bool:
        return await self.repository.exists_following_after(
            self.follower_id, UserId(anchor)
        )
