"""In-memory stock and relationship repositories for testing."""

from collections.abc import Sequence
from typing import Optional

from rally.domain.model.association import Relationship, Stock
from rally.domain.model.user import User
from rally.domain.pagination import PageRequest
from rally.domain.repository.association import (
    FollowKey,
    RelationshipRepository,
    StockKey,
    StockRepository,
)
from rally.domain.value import RecruitmentId, RelationshipId, StockId, UserId

from .user import InMemoryUserRepository


class InMemoryStockRepository(StockRepository):
    """In-memory implementation of StockRepository for testing."""

    def __init__(self) -> None:
        self._stocks: list[Stock] = []

    async def find_existing(self, keys: Sequence[StockKey]) -> set[StockKey]:
        stocked = {(s.user_id, s.recruitment_id) for s in self._stocks}
        return {key for key in keys if key in stocked}

    async def count_by_recruitment_ids(
        self, recruitment_ids: Sequence[RecruitmentId]
    ) -> dict[RecruitmentId, int]:
        counts: dict[RecruitmentId, int] = {}
        for stock in self._stocks:
            if stock.recruitment_id in recruitment_ids:
                counts[stock.recruitment_id] = counts.get(stock.recruitment_id, 0) + 1
        return counts

    def add(self, user_id: UserId, recruitment_id: RecruitmentId) -> Stock:
        """Stock a recruitment; IDs increase in insertion order."""
        stock = Stock(
            id=StockId(len(self._stocks) + 1),
            user_id=user_id,
            recruitment_id=recruitment_id,
        )
        self._stocks.append(stock)
        return stock

    def find(self, user_id: UserId, recruitment_id: RecruitmentId) -> Optional[Stock]:
        for stock in self._stocks:
            if stock.user_id == user_id and stock.recruitment_id == recruitment_id:
                return stock
        return None

    def find_all_by_user_id(self, user_id: UserId) -> list[Stock]:
        return [s for s in self._stocks if s.user_id == user_id]


class InMemoryRelationshipRepository(RelationshipRepository):
    """In-memory implementation of RelationshipRepository for testing."""

    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self._relationships: list[Relationship] = []

    async def find_existing(self, keys: Sequence[FollowKey]) -> set[FollowKey]:
        edges = {(r.follower_id, r.followed_id) for r in self._relationships}
        return {key for key in keys if key in edges}

    async def find_following_page(
        self, follower_id: UserId, page: PageRequest
    ) -> list[User]:
        edges = self._beyond(follower_id, UserId(page.after) if page.use_after else None)
        edges.sort(key=lambda r: r.id, reverse=True)

        users = await self._users.find_by_ids([r.followed_id for r in edges])
        followed = [users[r.followed_id] for r in edges if r.followed_id in users]
        return followed[: page.limit]

    async def exists_following_after(self, follower_id: UserId, anchor: UserId) -> bool:
        return bool(self._beyond(follower_id, anchor))

    def follow(self, follower_id: UserId, followed_id: UserId) -> Relationship:
        relationship = Relationship(
            id=RelationshipId(len(self._relationships) + 1),
            follower_id=follower_id,
            followed_id=followed_id,
        )
        self._relationships.append(relationship)
        return relationship

    def _beyond(
        self, follower_id: UserId, anchor: Optional[UserId]
    ) -> list[Relationship]:
        edges = [r for r in self._relationships if r.follower_id == follower_id]
        if anchor is None:
            return edges

        anchor_edge = next((r for r in edges if r.followed_id == anchor), None)
        if anchor_edge is None:
            return []
        return [r for r in edges if r.id < anchor_edge.id]
