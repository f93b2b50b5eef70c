"""Unit tests for ListFollowingsUseCase."""

import pytest

from rally.application.usecase.user import ListFollowingsRequest, ListFollowingsUseCase
from rally.domain.error import BadCursorError
from rally.domain.value import EntityKind, UserId, opaque_id
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListFollowingsUseCase:
    @pytest.mark.asyncio
    async def test_pages_through_followings(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListFollowingsUseCase)
        database = await unit_env.get(InMemoryDatabase)
        for i in range(1, 5):
            await database.users.add(make_user(i))
        for followed in (2, 3, 4):
            database.relationships.follow(UserId(1), UserId(followed))

        # Act
        page1 = await use_case.execute(ListFollowingsRequest(follower_id=UserId(1), first=2))
        page2 = await use_case.execute(
            ListFollowingsRequest(
                follower_id=UserId(1), first=2, after=page1.page_info.end_cursor
            )
        )

        # Assert
        assert [user.id for user in page1.nodes] == [4, 3]
        assert page1.page_info.has_next_page is True
        assert [user.id for user in page2.nodes] == [2]
        assert page2.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_recruitment_cursor_is_rejected(self, unit_env):
        use_case = await unit_env.get(ListFollowingsUseCase)

        with pytest.raises(BadCursorError):
            await use_case.execute(
                ListFollowingsRequest(
                    follower_id=UserId(1),
                    first=2,
                    after=opaque_id.encode(EntityKind.RECRUITMENT, 3),
                )
            )
