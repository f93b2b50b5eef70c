"""GraphQL schema: root query resolvers."""

from typing import Optional

import strawberry
from strawberry.types import Info

from rally.application.usecase.recruitment import (
    ListRecruitmentsRequest,
    ListRecruitmentsUseCase,
)
from rally.domain.error import IdDecodeError
from rally.domain.repository import (
    PrefectureRepository,
    RecruitmentFilter,
    RecruitmentRepository,
    SportRepository,
    TagRepository,
)
from rally.domain.value import EntityKind, RecruitmentId, UserId, opaque_id
from rally.interface.error import AuthenticationRequiredError
from rally.interface.graphql.context import GraphQLContext
from rally.interface.graphql.errors import create_error_masking
from rally.interface.graphql.types import (
    PrefectureType,
    RecruitmentConnection,
    RecruitmentType,
    SportType,
    TagType,
    UserType,
)


@strawberry.type
class Query:
    """Root query."""

    @strawberry.field(description="The signed-in user, if any")
    async def viewer(self, info: Info[GraphQLContext, None]) -> Optional[UserType]:
        if info.context.viewer_id is None:
            return None
        user = await info.context.loaders.user.load(info.context.viewer_id)
        return UserType.from_model(user) if user else None

    @strawberry.field
    async def user(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> Optional[UserType]:
        try:
            user_id = opaque_id.decode_kind(id, EntityKind.USER)
        except IdDecodeError:
            return None
        user = await info.context.loaders.user.load(UserId(user_id))
        return UserType.from_model(user) if user else None

    @strawberry.field
    async def recruitment(
        self, info: Info[GraphQLContext, None], id: strawberry.ID
    ) -> Optional[RecruitmentType]:
        try:
            recruitment_id = opaque_id.decode_kind(id, EntityKind.RECRUITMENT)
        except IdDecodeError:
            return None
        repository = await info.context.container.get(RecruitmentRepository)
        recruitment = await repository.find_by_id(RecruitmentId(recruitment_id))
        return RecruitmentType.from_model(recruitment) if recruitment else None

    @strawberry.field(description="Published recruitments, newest first")
    async def recruitments(
        self,
        info: Info[GraphQLContext, None],
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Optional[RecruitmentConnection]:
        use_case = await info.context.container.get(ListRecruitmentsUseCase)
        connection = await use_case.execute(
            ListRecruitmentsRequest(
                first=first, after=after, recruitment_filter=RecruitmentFilter.published()
            )
        )
        return RecruitmentConnection.from_connection(connection)

    @strawberry.field(description="Recruitments the viewer stocked, most recent first")
    async def stocked_recruitments(
        self,
        info: Info[GraphQLContext, None],
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> Optional[RecruitmentConnection]:
        if not info.context.is_authenticated:
            raise AuthenticationRequiredError()

        use_case = await info.context.container.get(ListRecruitmentsUseCase)
        connection = await use_case.execute(
            ListRecruitmentsRequest(
                first=first,
                after=after,
                recruitment_filter=RecruitmentFilter.stocked(info.context.viewer_id),
            )
        )
        return RecruitmentConnection.from_connection(connection)

    @strawberry.field
    async def tags(self, info: Info[GraphQLContext, None]) -> list[TagType]:
        repository = await info.context.container.get(TagRepository)
        return [TagType.from_model(tag) for tag in await repository.find_all()]

    @strawberry.field
    async def sports(self, info: Info[GraphQLContext, None]) -> list[SportType]:
        repository = await info.context.container.get(SportRepository)
        return [SportType.from_model(sport) for sport in await repository.find_all()]

    @strawberry.field
    async def prefectures(self, info: Info[GraphQLContext, None]) -> list[PrefectureType]:
        repository = await info.context.container.get(PrefectureRepository)
        return [PrefectureType.from_model(p) for p in await repository.find_all()]


schema = strawberry.Schema(query=Query, extensions=[create_error_masking()])
