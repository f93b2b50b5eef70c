"""Unit tests for the concrete loaders over in-memory repositories."""

import asyncio

import pytest

from rally.application.loader import Loaders, create_loaders
from rally.domain.model import Prefecture, Sport, Tag
from rally.domain.value import (
    PrefectureId,
    RecruitmentId,
    SportId,
    TagId,
    UserId,
)
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_user


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def loaders(database: InMemoryDatabase) -> Loaders:
    return create_loaders(
        users=database.users,
        sports=database.sports,
        prefectures=database.prefectures,
        tags=database.tags,
        stocks=database.stocks,
        relationships=database.relationships,
    )


class TestEntityLoaders:
    @pytest.mark.asyncio
    async def test_absent_user_is_none(self, database, loaders):
        # Arrange
        await database.users.add(make_user(1))
        await database.users.add(make_user(3))

        # Act
        a, b, c = await asyncio.gather(
            loaders.user.load(UserId(1)),
            loaders.user.load(UserId(2)),
            loaders.user.load(UserId(3)),
        )

        # Assert
        assert a.id == 1
        assert b is None
        assert c.id == 3

    @pytest.mark.asyncio
    async def test_sport_and_prefecture(self, database, loaders):
        database.sports.add(Sport(id=SportId(1), name="tennis"))
        database.prefectures.add(Prefecture(id=PrefectureId(13), name="Tokyo"))

        sport = await loaders.sport.load(SportId(1))
        prefecture = await loaders.prefecture.load(PrefectureId(13))

        assert sport.name == "tennis"
        assert prefecture.name == "Tokyo"


class TestRecruitmentLoaders:
    @pytest.mark.asyncio
    async def test_untagged_recruitment_has_empty_tags(self, database, loaders):
        # Arrange
        database.tags.add(Tag(id=TagId(1), name="beginner"))
        database.tags.add(Tag(id=TagId(2), name="weekend"))
        database.tags.attach(RecruitmentId(1), TagId(1))
        database.tags.attach(RecruitmentId(1), TagId(2))
        database.tags.attach(RecruitmentId(3), TagId(2))

        # Act
        tags = await asyncio.gather(
            *(loaders.recruitment_tags.load(RecruitmentId(i)) for i in (1, 2, 3))
        )

        # Assert
        assert [[t.name for t in group] for group in tags] == [
            ["beginner", "weekend"],
            [],
            ["weekend"],
        ]

    @pytest.mark.asyncio
    async def test_stock_count_defaults_to_zero(self, database, loaders):
        # Arrange
        database.stocks.add(UserId(1), RecruitmentId(1))
        database.stocks.add(UserId(2), RecruitmentId(1))

        # Act
        counts = await loaders.stock_count.load_many(
            [RecruitmentId(1), RecruitmentId(2)]
        )

        # Assert
        assert counts == [2, 0]


class TestAssociationLoaders:
    @pytest.mark.asyncio
    async def test_stock_key_is_directional(self, database, loaders):
        # Arrange
        database.stocks.add(UserId(1), RecruitmentId(2))

        # Act
        forward, backward = await asyncio.gather(
            loaders.stock.load((UserId(1), RecruitmentId(2))),
            loaders.stock.load((UserId(2), RecruitmentId(1))),
        )

        # Assert
        assert forward is True
        assert backward is None

    @pytest.mark.asyncio
    async def test_follow_key_is_directional(self, database, loaders):
        # Arrange
        database.relationships.follow(UserId(1), UserId(2))

        # Act
        follows, followed_back = await asyncio.gather(
            loaders.following.load((UserId(1), UserId(2))),
            loaders.following.load((UserId(2), UserId(1))),
        )

        # Assert
        assert follows is True
        assert followed_back is None

    def test_each_call_creates_fresh_loaders(self, database, loaders):
        other = create_loaders(
            users=database.users,
            sports=database.sports,
            prefectures=database.prefectures,
            tags=database.tags,
            stocks=database.stocks,
            relationships=database.relationships,
        )

        assert other.user is not loaders.user
        assert other.stock is not loaders.stock
