"""Existence loaders for directional associations.

Keys are ordered tuples: ``(user_id, recruitment_id)`` for stocks and
``(follower_id, followed_id)`` for follows. A present association loads as
``True`` and an absent one as ``None``.
"""

from collections.abc import Mapping

from rally.domain.repository import (
    FollowKey,
    RelationshipRepository,
    StockKey,
    StockRepository,
)

from .base import BatchLoader


class StockLoader(BatchLoader[StockKey, bool]):
    """Did this user stock this recruitment."""

    def __init__(self, stocks: StockRepository) -> None:
        super().__init__()
        self.stocks = stocks

    async def dispatch(self, keys: list[StockKey]) -> Mapping[StockKey, bool]:
        existing = await self.stocks.find_existing(keys)
        return {key: True for key in existing}


class FollowingLoader(BatchLoader[FollowKey, bool]):
    """Does this follower follow that user."""

    def __init__(self, relationships: RelationshipRepository) -> None:
        super().__init__()
        self.relationships = relationships

    async def dispatch(self, keys: list[FollowKey]) -> Mapping[FollowKey, bool]:
        existing = await self.relationships.find_existing(keys)
        return {key: True for key in existing}
