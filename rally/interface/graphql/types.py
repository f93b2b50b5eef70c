"""Strawberry types for the Rally graph.

Node IDs are opaque IDs (see ``rally.domain.value.opaque_id``). Associated
entities are resolved through the request's batched loaders, so resolving
the same field on every row of a page costs one query per field.
"""

from datetime import datetime
from typing import Optional

import strawberry
from strawberry.types import Info

from rally.application.usecase.recruitment import (
    ListRecruitmentsRequest,
    ListRecruitmentsUseCase,
)
from rally.application.usecase.user import ListFollowingsRequest, ListFollowingsUseCase
from rally.domain.model import Prefecture, Recruitment, Sport, Tag, User
from rally.domain.pagination import Connection, PageInfo
from rally.domain.repository import RecruitmentFilter
from rally.domain.value import EntityKind, RecruitmentStatus, opaque_id
from rally.interface.graphql.context import GraphQLContext


@strawberry.type(name="PageInfo", description="Forward pagination metadata")
class PageInfoType:
    has_next_page: bool
    end_cursor: Optional[str]
    start_cursor: Optional[str]
    has_previous_page: bool

    @classmethod
    def from_page_info(cls, page_info: PageInfo) -> "PageInfoType":
        return cls(
            has_next_page=page_info.has_next_page,
            end_cursor=page_info.end_cursor,
            start_cursor=page_info.start_cursor,
            has_previous_page=page_info.has_previous_page,
        )


@strawberry.type(name="Tag")
class TagType:
    id: strawberry.ID
    name: str

    @classmethod
    def from_model(cls, tag: Tag) -> "TagType":
        return cls(id=strawberry.ID(opaque_id.encode(EntityKind.TAG, tag.id)), name=tag.name)


@strawberry.type(name="Sport")
class SportType:
    id: strawberry.ID
    name: str

    @classmethod
    def from_model(cls, sport: Sport) -> "SportType":
        return cls(
            id=strawberry.ID(opaque_id.encode(EntityKind.SPORT, sport.id)), name=sport.name
        )


@strawberry.type(name="Prefecture")
class PrefectureType:
    id: strawberry.ID
    name: str

    @classmethod
    def from_model(cls, prefecture: Prefecture) -> "PrefectureType":
        return cls(
            id=strawberry.ID(opaque_id.encode(EntityKind.PREFECTURE, prefecture.id)),
            name=prefecture.name,
        )


@strawberry.type(name="User")
class UserType:
    id: strawberry.ID
    name: str
    avatar: str
    introduction: Optional[str]
    model: strawberry.Private[User]

    @classmethod
    def from_model(cls, user: User) -> "UserType":
        return cls(
            id=strawberry.ID(opaque_id.encode(EntityKind.USER, user.id)),
            name=user.name,
            avatar=user.avatar,
            introduction=user.introduction,
            model=user,
        )

    @strawberry.field(description="Whether the viewer follows this user")
    async def followed_by_viewer(self, info: Info[GraphQLContext, None]) -> bool:
        viewer_id = info.context.viewer_id
        if viewer_id is None:
            return False
        return bool(await info.context.loaders.following.load((viewer_id, self.model.id)))

    @strawberry.field(description="Published recruitments of this user, newest first")
    async def recruitments(
        self,
        info: Info[GraphQLContext, None],
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> "Optional[RecruitmentConnection]":
        use_case = await info.context.container.get(ListRecruitmentsUseCase)
        connection = await use_case.execute(
            ListRecruitmentsRequest(
                first=first,
                after=after,
                recruitment_filter=RecruitmentFilter.owned_by(
                    self.model.id, RecruitmentStatus.PUBLISHED
                ),
            )
        )
        return RecruitmentConnection.from_connection(connection)

    @strawberry.field(description="Users this user follows, most recent first")
    async def followings(
        self,
        info: Info[GraphQLContext, None],
        first: Optional[int] = None,
        after: Optional[str] = None,
    ) -> "Optional[UserConnection]":
        use_case = await info.context.container.get(ListFollowingsUseCase)
        connection = await use_case.execute(
            ListFollowingsRequest(follower_id=self.model.id, first=first, after=after)
        )
        return UserConnection.from_connection(connection)


@strawberry.type(name="Recruitment")
class RecruitmentType:
    id: strawberry.ID
    title: str
    category: str
    status: str
    venue: Optional[str]
    venue_lat: Optional[float]
    venue_lng: Optional[float]
    start_at: Optional[datetime]
    closing_at: Optional[datetime]
    detail: Optional[str]
    published_at: Optional[datetime]
    created_at: datetime
    model: strawberry.Private[Recruitment]

    @classmethod
    def from_model(cls, recruitment: Recruitment) -> "RecruitmentType":
        return cls(
            id=strawberry.ID(opaque_id.encode(EntityKind.RECRUITMENT, recruitment.id)),
            title=recruitment.title,
            category=recruitment.category.value,
            status=recruitment.status.value,
            venue=recruitment.venue,
            venue_lat=recruitment.venue_lat,
            venue_lng=recruitment.venue_lng,
            start_at=recruitment.start_at,
            closing_at=recruitment.closing_at,
            detail=recruitment.detail,
            published_at=recruitment.published_at,
            created_at=recruitment.created_at,
            model=recruitment,
        )

    @strawberry.field
    async def user(self, info: Info[GraphQLContext, None]) -> Optional[UserType]:
        user = await info.context.loaders.user.load(self.model.user_id)
        return UserType.from_model(user) if user else None

    @strawberry.field
    async def sport(self, info: Info[GraphQLContext, None]) -> Optional[SportType]:
        sport = await info.context.loaders.sport.load(self.model.sport_id)
        return SportType.from_model(sport) if sport else None

    @strawberry.field
    async def prefecture(self, info: Info[GraphQLContext, None]) -> Optional[PrefectureType]:
        prefecture = await info.context.loaders.prefecture.load(self.model.prefecture_id)
        return PrefectureType.from_model(prefecture) if prefecture else None

    @strawberry.field
    async def tags(self, info: Info[GraphQLContext, None]) -> list[TagType]:
        tags = await info.context.loaders.recruitment_tags.load(self.model.id)
        return [TagType.from_model(tag) for tag in tags]

    @strawberry.field(description="Number of users who stocked this recruitment")
    async def stock_count(self, info: Info[GraphQLContext, None]) -> int:
        return await info.context.loaders.stock_count.load(self.model.id)

    @strawberry.field(description="Whether the viewer stocked this recruitment")
    async def stocked_by_viewer(self, info: Info[GraphQLContext, None]) -> bool:
        viewer_id = info.context.viewer_id
        if viewer_id is None:
            return False
        return bool(await info.context.loaders.stock.load((viewer_id, self.model.id)))


@strawberry.type(name="RecruitmentEdge")
class RecruitmentEdge:
    cursor: str
    node: RecruitmentType


@strawberry.type(name="RecruitmentConnection")
class RecruitmentConnection:
    edges: list[RecruitmentEdge]
    page_info: PageInfoType

    @classmethod
    def from_connection(cls, connection: Connection[Recruitment]) -> "RecruitmentConnection":
        return cls(
            edges=[
                RecruitmentEdge(cursor=edge.cursor, node=RecruitmentType.from_model(edge.node))
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_page_info(connection.page_info),
        )


@strawberry.type(name="UserEdge")
class UserEdge:
    cursor: str
    node: UserType


@strawberry.type(name="UserConnection")
class UserConnection:
    edges: list[UserEdge]
    page_info: PageInfoType

    @classmethod
    def from_connection(cls, connection: Connection[User]) -> "UserConnection":
        return cls(
            edges=[
                UserEdge(cursor=edge.cursor, node=UserType.from_model(edge.node))
                for edge in connection.edges
            ],
            page_info=PageInfoType.from_page_info(connection.page_info),
        )
