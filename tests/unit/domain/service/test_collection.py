"""Unit tests for paged collections over the in-memory store."""

import pytest

from rally.domain.pagination import PageRequest, paginate
from rally.domain.repository import RecruitmentFilter
from rally.domain.service import FollowingCollection, RecruitmentFeed
from rally.domain.value import (
    EntityKind,
    RecruitmentId,
    RecruitmentStatus,
    UserId,
    opaque_id,
)
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_recruitment, make_user


def _ids(connection) -> list[int]:
    return [node.id for node in connection.nodes]


def _page(first: int, after_id: int | None = None, kind=EntityKind.RECRUITMENT):
    after = opaque_id.encode(kind, after_id) if after_id is not None else None
    return PageRequest.from_params(first=first, after=after, kind=kind)


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


class TestRecruitmentFeed:
    @pytest.mark.asyncio
    async def test_walks_five_rows_two_at_a_time(self, database):
        # Arrange
        for i in range(1, 6):
            database.recruitments.add(make_recruitment(i))
        feed = RecruitmentFeed(database.recruitments, RecruitmentFilter.published())

        # Act
        page1 = await paginate(feed, _page(2))
        page2 = await paginate(feed, _page(2, after_id=4))
        page3 = await paginate(feed, _page(2, after_id=2))

        # Assert
        assert _ids(page1) == [5, 4]
        assert opaque_id.decode(page1.page_info.end_cursor) == 4
        assert page1.page_info.has_next_page is True

        assert _ids(page2) == [3, 2]
        assert page2.page_info.has_next_page is True

        assert _ids(page3) == [1]
        assert page3.page_info.has_next_page is False
        assert opaque_id.decode(page3.page_info.end_cursor) == 1

    @pytest.mark.asyncio
    async def test_following_end_cursor_has_no_gaps_or_duplicates(self, database):
        # Arrange
        for i in range(1, 8):
            database.recruitments.add(make_recruitment(i))
        feed = RecruitmentFeed(database.recruitments, RecruitmentFilter.published())

        # Act
        seen: list[int] = []
        after = None
        while True:
            connection = await paginate(
                feed, PageRequest.from_params(first=3, after=after)
            )
            seen.extend(_ids(connection))
            if not connection.page_info.has_next_page:
                break
            after = connection.page_info.end_cursor

        # Assert
        assert seen == [7, 6, 5, 4, 3, 2, 1]

    @pytest.mark.asyncio
    async def test_probe_shares_the_status_filter(self, database):
        """A draft beyond the last published row must not set has_next_page."""
        # Arrange
        database.recruitments.add(make_recruitment(1, status=RecruitmentStatus.DRAFT))
        database.recruitments.add(make_recruitment(2))
        database.recruitments.add(make_recruitment(3))
        feed = RecruitmentFeed(database.recruitments, RecruitmentFilter.published())

        # Act
        connection = await paginate(feed, _page(2))

        # Assert
        assert _ids(connection) == [3, 2]
        assert connection.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_owner_filter(self, database):
        # Arrange
        database.recruitments.add(make_recruitment(1, user_id=1))
        database.recruitments.add(make_recruitment(2, user_id=2))
        database.recruitments.add(make_recruitment(3, user_id=1))
        database.recruitments.add(make_recruitment(4, user_id=2))
        feed = RecruitmentFeed(
            database.recruitments,
            RecruitmentFilter.owned_by(UserId(1), RecruitmentStatus.PUBLISHED),
        )

        # Act
        connection = await paginate(feed, _page(1))

        # Assert
        assert _ids(connection) == [3]
        assert connection.page_info.has_next_page is True

    @pytest.mark.asyncio
    async def test_stocked_collection_is_ordered_by_stock(self, database):
        # Arrange
        for i in range(1, 4):
            database.recruitments.add(make_recruitment(i))
        viewer = UserId(10)
        # Stocked in the order 1, 3, 2
        database.stocks.add(viewer, RecruitmentId(1))
        database.stocks.add(viewer, RecruitmentId(3))
        database.stocks.add(UserId(11), RecruitmentId(2))
        database.stocks.add(viewer, RecruitmentId(2))
        feed = RecruitmentFeed(database.recruitments, RecruitmentFilter.stocked(viewer))

        # Act
        page1 = await paginate(feed, _page(2))
        page2 = await paginate(
            feed,
            PageRequest.from_params(first=2, after=page1.page_info.end_cursor),
        )

        # Assert
        assert _ids(page1) == [2, 3]
        assert page1.page_info.has_next_page is True
        assert _ids(page2) == [1]
        assert page2.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_unknown_anchor_yields_empty_page(self, database):
        # Arrange
        database.recruitments.add(make_recruitment(1))
        viewer = UserId(10)
        database.stocks.add(viewer, RecruitmentId(1))
        feed = RecruitmentFeed(database.recruitments, RecruitmentFilter.stocked(viewer))

        # Act
        connection = await paginate(feed, _page(5, after_id=99))

        # Assert
        assert connection.edges == []
        assert connection.page_info.has_next_page is False


class TestFollowingCollection:
    @pytest.mark.asyncio
    async def test_most_recent_follow_first(self, database):
        # Arrange
        for i in range(1, 5):
            await database.users.add(make_user(i))
        database.relationships.follow(UserId(1), UserId(3))
        database.relationships.follow(UserId(1), UserId(2))
        database.relationships.follow(UserId(2), UserId(4))
        database.relationships.follow(UserId(1), UserId(4))
        collection = FollowingCollection(database.relationships, UserId(1))

        # Act
        page1 = await paginate(collection, _page(2, kind=EntityKind.USER))
        page2 = await paginate(
            collection,
            PageRequest.from_params(first=2, after=page1.page_info.end_cursor),
        )

        # Assert
        assert _ids(page1) == [4, 2]
        assert page1.page_info.has_next_page is True
        assert opaque_id.split(page1.page_info.end_cursor) == ("User", 2)
        assert _ids(page2) == [3]
        assert page2.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_no_followings(self, database):
        collection = FollowingCollection(database.relationships, UserId(1))

        connection = await paginate(collection, _page(3, kind=EntityKind.USER))

        assert connection.edges == []
        assert connection.page_info.end_cursor is None
