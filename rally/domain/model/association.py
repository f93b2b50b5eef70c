"""Directional associations between users and other entities."""

from datetime import datetime

from pydantic import Field

from rally.domain.model.common import DomainModel
from rally.domain.value import RecruitmentId, RelationshipId, StockId, UserId


class Stock(DomainModel):
    """A user bookmarking ("stocking") a recruitment."""

    id: StockId
    user_id: UserId
    recruitment_id: RecruitmentId
    created_at: datetime = Field(default_factory=datetime.now)


class Relationship(DomainModel):
    """`follower_id` follows `followed_id`."""

    id: RelationshipId
    follower_id: UserId
    followed_id: UserId
    created_at: datetime = Field(default_factory=datetime.now)
