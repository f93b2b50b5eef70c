"""Unit tests for ListRecruitmentsUseCase."""

import pytest

from rally.application.usecase.recruitment import (
    ListRecruitmentsRequest,
    ListRecruitmentsUseCase,
)
from rally.config import PaginationSettings
from rally.domain.error import (
    BadCursorError,
    MissingLimitError,
    MissingParametersError,
)
from rally.domain.repository import RecruitmentFilter
from rally.domain.value import EntityKind, RecruitmentStatus, UserId, opaque_id
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_recruitment
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestListRecruitmentsUseCase:
    @pytest.mark.asyncio
    async def test_lists_published_newest_first(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListRecruitmentsUseCase)
        database = await unit_env.get(InMemoryDatabase)
        database.recruitments.add(make_recruitment(1))
        database.recruitments.add(make_recruitment(2, status=RecruitmentStatus.DRAFT))
        database.recruitments.add(make_recruitment(3))

        # Act
        connection = await use_case.execute(ListRecruitmentsRequest(first=10))

        # Assert
        assert [node.id for node in connection.nodes] == [3, 1]
        assert connection.page_info.has_next_page is False

    @pytest.mark.asyncio
    async def test_cursor_continues_listing(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListRecruitmentsUseCase)
        database = await unit_env.get(InMemoryDatabase)
        for i in range(1, 6):
            database.recruitments.add(make_recruitment(i, user_id=2))

        # Act
        page = await use_case.execute(
            ListRecruitmentsRequest(
                first=2,
                after=opaque_id.encode(EntityKind.RECRUITMENT, 4),
                recruitment_filter=RecruitmentFilter.owned_by(UserId(2)),
            )
        )

        # Assert
        assert [node.id for node in page.nodes] == [3, 2]
        assert page.page_info.has_next_page is True

    @pytest.mark.asyncio
    async def test_first_is_clamped(self, unit_env):
        # Arrange
        database = await unit_env.get(InMemoryDatabase)
        for i in range(1, 6):
            database.recruitments.add(make_recruitment(i))
        use_case = ListRecruitmentsUseCase(
            recruitment_repository=database.recruitments,
            pagination_settings=PaginationSettings(max_page_size=3),
        )

        # Act
        connection = await use_case.execute(ListRecruitmentsRequest(first=50))

        # Assert
        assert len(connection.edges) == 3
        assert connection.page_info.has_next_page is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "first, after, error",
        [
            (None, None, MissingParametersError),
            (None, opaque_id.encode(EntityKind.RECRUITMENT, 1), MissingLimitError),
            (1, opaque_id.encode(EntityKind.USER, 1), BadCursorError),
        ],
    )
    async def test_invalid_arguments(self, unit_env, first, after, error):
        use_case = await unit_env.get(ListRecruitmentsUseCase)

        with pytest.raises(error):
            await use_case.execute(ListRecruitmentsRequest(first=first, after=after))
