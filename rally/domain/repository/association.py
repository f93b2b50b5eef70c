"""Repository interfaces for stocks and follow relationships.

Both are directional: ``(user, recruitment)`` for stocks and
``(follower, followed)`` for follows.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rally.domain.model.user import User
from rally.domain.pagination import PageRequest
from rally.domain.value import RecruitmentId, UserId

StockKey = tuple[UserId, RecruitmentId]
FollowKey = tuple[UserId, UserId]


class StockRepository(ABC):
    """Repository for stocks."""

    @abstractmethod
    async def find_existing(self, keys: Sequence[StockKey]) -> set[StockKey]:
        """Return the subset of ``(user_id, recruitment_id)`` pairs that exist."""
        pass

    @abstractmethod
    async def count_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, int]:
        """Count stocks per recruitment; recruitments without stocks are absent."""
        pass


class RelationshipRepository(ABC):
    """Repository for follow relationships."""

    @abstractmethod
    async def find_existing(self, keys: Sequence[FollowKey]) -> set[FollowKey]:
        """Return the subset of ``(follower_id, followed_id)`` pairs that exist."""
        pass

    @abstractmethod
    async def find_following_page(
        self, follower_id: UserId, page: PageRequest
    ) -> list[User]:
        """Users followed by ``follower_id``, most recently followed first.

        The anchor is a followed user's ID and is resolved to the
        relationship row between ``follower_id`` and that user.
        """
        pass

    @abstractmethod
    async def exists_following_after(self, follower_id: UserId, anchor: UserId) -> bool:
        """Whether ``follower_id`` follows anyone beyond ``anchor``."""
        pass
