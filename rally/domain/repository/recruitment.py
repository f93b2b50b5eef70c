"""Recruitment repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from rally.domain.model.recruitment import Recruitment
from rally.domain.pagination import PageRequest
from rally.domain.value import RecruitmentId, RecruitmentStatus, UserId
from rally.domain.value.common import ValueObject


class RecruitmentFilter(ValueObject):
    """Filter predicate shared by a page query and its existence probe.

    Attributes:
        status: Only recruitments in this status (None for any)
        owner_id: Only recruitments published by this user
        stocked_by: Only recruitments stocked by this user; the collection
            is then ordered by stock row, newest stock first
    """

    status: Optional[RecruitmentStatus] = None
    owner_id: Optional[UserId] = None
    stocked_by: Optional[UserId] = None

    @classmethod
    def published(cls) -> "RecruitmentFilter":
        return cls(status=RecruitmentStatus.PUBLISHED)

    @classmethod
    def owned_by(
        cls, user_id: UserId, status: Optional[RecruitmentStatus] = None
    ) -> "RecruitmentFilter":
        return cls(owner_id=user_id, status=status)

    @classmethod
    def stocked(cls, user_id: UserId) -> "RecruitmentFilter":
        return cls(stocked_by=user_id, status=RecruitmentStatus.PUBLISHED)


class RecruitmentRepository(ABC):
    """Repository for Recruitment aggregate."""

    @abstractmethod
    async def find_by_id(self, recruitment_id: RecruitmentId) -> Optional[Recruitment]:
        pass

    @abstractmethod
    async def find_page(
        self, recruitment_filter: RecruitmentFilter, page: PageRequest
    ) -> list[Recruitment]:
        """Fetch one page of recruitments, newest first.

        When ``page.use_after`` is set, only rows strictly beyond the
        anchor recruitment are returned. For stocked collections the anchor
        is resolved to the viewer's stock row for that recruitment.

        Args:
            recruitment_filter: Filter predicate
            page: Validated page request

        Returns:
            Up to ``page.limit`` recruitments
        """
        pass

    @abstractmethod
    async def exists_after(
        self, recruitment_filter: RecruitmentFilter, anchor: RecruitmentId
    ) -> bool:
        """Whether a matching recruitment exists strictly beyond ``anchor``.

        Args:
            recruitment_filter: The same filter used for the page query
            anchor: ID of the last recruitment on the current page
        """
        pass
