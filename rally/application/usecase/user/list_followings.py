"""List followings use case."""

from typing import Optional

from pydantic import BaseModel

from rally.config import PaginationSettings
from rally.domain.model.user import User
from rally.domain.pagination import Connection, PageRequest, paginate
from rally.domain.repository import RelationshipRepository
from rally.domain.service import FollowingCollection
from rally.domain.value import EntityKind, UserId


class ListFollowingsRequest(BaseModel):
    follower_id: UserId
    first: Optional[int] = None
    after: Optional[str] = None


class ListFollowingsUseCase:
    """Use case for paging through the users someone follows."""

    def __init__(
        self,
        relationship_repository: RelationshipRepository,
        pagination_settings: PaginationSettings,
    ) -> None:
        self.relationship_repository = relationship_repository
        self.pagination_settings = pagination_settings

    async def execute(self, request: ListFollowingsRequest) -> Connection[User]:
        page = PageRequest.from_params(
            request.first,
            request.after,
            kind=EntityKind.USER,
            max_limit=self.pagination_settings.max_page_size,
        )
        collection = FollowingCollection(self.relationship_repository, request.follower_id)
        return await paginate(collection, page)
