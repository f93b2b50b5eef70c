"""Recruitment aggregate.

A recruitment is a listing published by a user who is looking for an
opponent, a teammate or a group to join for a sport.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from rally.domain.model.common import DomainModel
from rally.domain.value import (
    PrefectureId,
    RecruitmentCategory,
    RecruitmentId,
    RecruitmentStatus,
    SportId,
    UserId,
)


class Recruitment(DomainModel):
    """Recruitment listing."""

    id: RecruitmentId
    title: str
    category: RecruitmentCategory
    venue: Optional[str] = None
    venue_lat: Optional[float] = None
    venue_lng: Optional[float] = None
    start_at: Optional[datetime] = None
    closing_at: Optional[datetime] = None
    detail: Optional[str] = None
    sport_id: SportId
    prefecture_id: PrefectureId
    status: RecruitmentStatus = RecruitmentStatus.DRAFT
    user_id: UserId
    published_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
