"""Repository interfaces for Rally domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from rally.domain.repository.association import (
    FollowKey,
    RelationshipRepository,
    StockKey,
    StockRepository,
)
from rally.domain.repository.authentication import AuthenticationRepository
from rally.domain.repository.catalog import (
    PrefectureRepository,
    SportRepository,
    TagRepository,
)
from rally.domain.repository.recruitment import RecruitmentFilter, RecruitmentRepository
from rally.domain.repository.transaction import TransactionManager, TransactionScope
from rally.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "AuthenticationRepository",
    "RecruitmentRepository",
    "RecruitmentFilter",
    "TagRepository",
    "SportRepository",
    "PrefectureRepository",
    "StockRepository",
    "StockKey",
    "RelationshipRepository",
    "FollowKey",
    "TransactionManager",
    "TransactionScope",
]
