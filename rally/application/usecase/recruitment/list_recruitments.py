"""List recruitments use case."""

from typing import Optional

import logfire
from pydantic import BaseModel

from rally.config import PaginationSettings
from rally.domain.model.recruitment import Recruitment
from rally.domain.pagination import Connection, PageRequest, paginate
from rally.domain.repository import RecruitmentFilter, RecruitmentRepository
from rally.domain.service import RecruitmentFeed
from rally.domain.value import EntityKind


class ListRecruitmentsRequest(BaseModel):
    """One page of a recruitment collection."""

    first: Optional[int] = None
    after: Optional[str] = None
    recruitment_filter: RecruitmentFilter = RecruitmentFilter.published()


class ListRecruitmentsUseCase:
    """Use case for paging through recruitments."""

    def __init__(
        self,
        recruitment_repository: RecruitmentRepository,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.recruitment_repository = recruitment_repository
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListRecruitmentsRequest) -> Connection[Recruitment]:
        """Validate the page arguments and fetch the page.

        Raises:
            PaginationError: Bad `first` or `after`
        """
        page = PageRequest.from_params(
            request.first,
            request.after,
            kind=EntityKind.RECRUITMENT,
            max_limit=self.pagination_settings.max_page_size,
        )

        with logfire.span(
            "list_recruitments.execute",
            status=request.recruitment_filter.status,
            owner_id=request.recruitment_filter.owner_id,
            stocked_by=request.recruitment_filter.stocked_by,
        ):
            feed = RecruitmentFeed(self.recruitment_repository, request.recruitment_filter)
            return await paginate(feed, page)
