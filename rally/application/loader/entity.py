"""Loaders for single entities by primary key."""

from collections.abc import Mapping

from rally.domain.model import Prefecture, Sport, User
from rally.domain.repository import (
    PrefectureRepository,
    SportRepository,
    UserRepository,
)
from rally.domain.value import PrefectureId, SportId, UserId

from .base import BatchLoader


class UserLoader(BatchLoader[UserId, User]):
    def __init__(self, users: UserRepository) -> None:
        super().__init__()
        self.users = users

    async def dispatch(self, keys: list[UserId]) -> Mapping[UserId, User]:
        return await self.users.find_by_ids(keys)


class SportLoader(BatchLoader[SportId, Sport]):
    def __init__(self, sports: SportRepository) -> None:
        super().__init__()
        self.sports = sports

    async def dispatch(self, keys: list[SportId]) -> Mapping[SportId, Sport]:
        return await self.sports.find_by_ids(keys)


class PrefectureLoader(BatchLoader[PrefectureId, Prefecture]):
    def __init__(self, prefectures: PrefectureRepository) -> None:
        super().__init__()
        self.prefectures = prefectures

    async def dispatch(self, keys: list[PrefectureId]) -> Mapping[PrefectureId, Prefecture]:
        return await self.prefectures.find_by_ids(keys)
