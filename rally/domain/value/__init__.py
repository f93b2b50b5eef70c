"""Domain value objects for Rally."""

from rally.domain.value.identifiers import (
    AuthenticationId,
    PrefectureId,
    RecruitmentId,
    RelationshipId,
    SportId,
    StockId,
    TagId,
    UserId,
)
from rally.domain.value.types import (
    AuthProvider,
    EmailVerificationStatus,
    EntityKind,
    IdentityClaims,
    RecruitmentCategory,
    RecruitmentStatus,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "AuthenticationId",
    "RecruitmentId",
    "TagId",
    "SportId",
    "PrefectureId",
    "StockId",
    "RelationshipId",
    # Types
    "EntityKind",
    "AuthProvider",
    "UserRole",
    "EmailVerificationStatus",
    "RecruitmentCategory",
    "RecruitmentStatus",
    "IdentityClaims",
]
