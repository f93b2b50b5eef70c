"""Application layer DI providers."""

from dishka import Scope, provide

from rally.application.loader import Loaders, create_loaders
from rally.application.usecase.auth import (
    ExternalLoginUseCase,
    GetViewerUseCase,
    InitiateLoginUseCase,
)
from rally.application.usecase.recruitment import ListRecruitmentsUseCase
from rally.application.usecase.user import ListFollowingsUseCase
from rally.config import PaginationSettings
from rally.domain.repository import (
    AuthenticationRepository,
    PrefectureRepository,
    RecruitmentRepository,
    RelationshipRepository,
    SportRepository,
    StockRepository,
    TagRepository,
    TransactionManager,
    UserRepository,
)
from rally.domain.service import AuthService, JWTService
from rally.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application provider - concrete, no mocks needed.

    Everything here is REQUEST-scoped; in particular each request gets a
    fresh set of loaders with empty caches.
    """

    scope = Scope.REQUEST

    # Auth use cases
    @provide
    def get_initiate_login_use_case(
        self, auth_service: AuthService
    ) -> InitiateLoginUseCase:
        """Provide initiate login use case."""
        return InitiateLoginUseCase(auth_service=auth_service)

    @provide
    def get_external_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        user_repository: UserRepository,
        authentication_repository: AuthenticationRepository,
        transaction_manager: TransactionManager,
    ) -> ExternalLoginUseCase:
        """Provide external login use case."""
        return ExternalLoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            user_repository=user_repository,
            authentication_repository=authentication_repository,
            transaction_manager=transaction_manager,
        )

    @provide
    def get_viewer_use_case(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        authentication_repository: AuthenticationRepository,
    ) -> GetViewerUseCase:
        """Provide get viewer use case."""
        return GetViewerUseCase(
            jwt_service=jwt_service,
            user_repository=user_repository,
            authentication_repository=authentication_repository,
        )

    # Collection use cases
    @provide
    def get_list_recruitments_use_case(
        self,
        recruitment_repository: RecruitmentRepository,
        pagination_settings: PaginationSettings,
    ) -> ListRecruitmentsUseCase:
        return ListRecruitmentsUseCase(
            recruitment_repository=recruitment_repository,
            pagination_settings=pagination_settings,
        )

    @provide
    def get_list_followings_use_case(
        self,
        relationship_repository: RelationshipRepository,
        pagination_settings: PaginationSettings,
    ) -> ListFollowingsUseCase:
        return ListFollowingsUseCase(
            relationship_repository=relationship_repository,
            pagination_settings=pagination_settings,
        )

    # Loaders
    @provide
    def get_loaders(
        self,
        user_repository: UserRepository,
        sport_repository: SportRepository,
        prefecture_repository: PrefectureRepository,
        tag_repository: TagRepository,
        stock_repository: StockRepository,
        relationship_repository: RelationshipRepository,
    ) -> Loaders:
        """Provide the request's batched loaders."""
        return create_loaders(
            users=user_repository,
            sports=sport_repository,
            prefectures=prefecture_repository,
            tags=tag_repository,
            stocks=stock_repository,
            relationships=relationship_repository,
        )
