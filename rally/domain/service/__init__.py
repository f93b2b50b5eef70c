"""Domain services for Rally."""

from rally.domain.service.auth_service import (
    AuthService,
    IdentityProviderClient,
    ProviderTokens,
)
from rally.domain.service.collection import FollowingCollection, RecruitmentFeed
from rally.domain.service.jwt_service import JWTService

__all__ = [
    "AuthService",
    "IdentityProviderClient",
    "ProviderTokens",
    "JWTService",
    "RecruitmentFeed",
    "FollowingCollection",
]
