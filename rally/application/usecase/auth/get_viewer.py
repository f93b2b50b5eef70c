"""Get viewer use case."""

from typing import Optional

from pydantic import BaseModel

from rally.domain.repository import AuthenticationRepository, UserRepository
from rally.domain.service import JWTService
from rally.domain.value import AuthProvider, EntityKind, opaque_id


class GetViewerRequest(BaseModel):
    token: Optional[str] = None  # session cookie, if any


class ViewerInfo(BaseModel):
    """The signed-in user."""

    id: str  # opaque node ID
    name: str
    email: str
    avatar: str
    providers: list[AuthProvider]


class GetViewerResponse(BaseModel):
    authenticated: bool
    viewer: Optional[ViewerInfo] = None


class GetViewerUseCase:
    """Resolve the session cookie to the signed-in user.

    A missing, invalid or expired token, or a token for a user that no
    longer exists, is reported as not authenticated rather than an error.
    """

    def __init__(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        authentication_repository: AuthenticationRepository,
    ) -> None:
        self.jwt_service = jwt_service
        self.user_repository = user_repository
        self.authentication_repository = authentication_repository

    async def execute(self, request: GetViewerRequest) -> GetViewerResponse:
        user_id = self.jwt_service.get_user_id_from_token(request.token)
        if user_id is None:
            return GetViewerResponse(authenticated=False)

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            return GetViewerResponse(authenticated=False)

        authentications = await self.authentication_repository.find_all_by_user_id(
            user.id
        )

        return GetViewerResponse(
            authenticated=True,
            viewer=ViewerInfo(
                id=opaque_id.encode(EntityKind.USER, user.id),
                name=user.name,
                email=user.email,
                avatar=user.avatar,
                providers=[a.provider for a in authentications],
            ),
        )
