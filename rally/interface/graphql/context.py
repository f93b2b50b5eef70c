"""GraphQL context for request-scoped dependencies.

Created fresh for each GraphQL request. Resolvers reach the batched
loaders through ``info.context.loaders`` and any other request-scoped
dependency through ``info.context.container``.
"""

from dataclasses import dataclass, field
from typing import Optional

from dishka import AsyncContainer
from fastapi import Request
from strawberry.fastapi import BaseContext

from rally.application.loader import Loaders
from rally.config import Settings
from rally.domain.service import JWTService
from rally.domain.value import UserId


@dataclass
class GraphQLContext(BaseContext):
    """Request context for GraphQL operations."""

    container: AsyncContainer = field(default=None)  # type: ignore[assignment]
    loaders: Loaders = field(default=None)  # type: ignore[assignment]
    viewer_id: Optional[UserId] = None

    @property
    def is_authenticated(self) -> bool:
        return self.viewer_id is not None


async def get_graphql_context(request: Request) -> GraphQLContext:
    """Build the context from the request's DI scope and session cookie.

    Strawberry fills in ``request``, ``response`` and ``background_tasks``.
    """
    container: AsyncContainer = request.state.dishka_container

    settings = await container.get(Settings)
    jwt_service = await container.get(JWTService)
    viewer_id = jwt_service.get_user_id_from_token(
        request.cookies.get(settings.auth.token_cookie)
    )

    return GraphQLContext(
        container=container,
        loaders=await container.get(Loaders),
        viewer_id=viewer_id,
    )
