"""Per-request loader set."""

from dataclasses import dataclass

from rally.domain.repository import (
    PrefectureRepository,
    RelationshipRepository,
    SportRepository,
    StockRepository,
    TagRepository,
    UserRepository,
)

from .association import FollowingLoader, StockLoader
from .entity import PrefectureLoader, SportLoader, UserLoader
from .recruitment import RecruitmentTagsLoader, StockCountLoader


@dataclass
class Loaders:
    """All loaders for one request."""

    user: UserLoader
    sport: SportLoader
    prefecture: PrefectureLoader
    recruitment_tags: RecruitmentTagsLoader
    stock_count: StockCountLoader
    stock: StockLoader
    following: FollowingLoader


def create_loaders(
    users: UserRepository,
    sports: SportRepository,
    prefectures: PrefectureRepository,
    tags: TagRepository,
    stocks: StockRepository,
    relationships: RelationshipRepository,
) -> Loaders:
    """Create a fresh loader set with empty caches.

    Call once per request; sharing a set across requests would serve one
    request's cached rows to another.
    """
    return Loaders(
        user=UserLoader(users),
        sport=SportLoader(sports),
        prefecture=PrefectureLoader(prefectures),
        recruitment_tags=RecruitmentTagsLoader(tags),
        stock_count=StockCountLoader(stocks),
        stock=StockLoader(stocks),
        following=FollowingLoader(relationships),
    )
