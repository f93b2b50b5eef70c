"""PostgreSQL repository implementations."""

from rally.persistence.repository.association import (
    PostgresRelationshipRepository,
    PostgresStockRepository,
)
from rally.persistence.repository.authentication import PostgresAuthenticationRepository
from rally.persistence.repository.catalog import (
    PostgresPrefectureRepository,
    PostgresSportRepository,
    PostgresTagRepository,
)
from rally.persistence.repository.recruitment import PostgresRecruitmentRepository
from rally.persistence.repository.transaction import PostgresTransactionManager
from rally.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresAuthenticationRepository",
    "PostgresRecruitmentRepository",
    "PostgresTagRepository",
    "PostgresSportRepository",
    "PostgresPrefectureRepository",
    "PostgresStockRepository",
    "PostgresRelationshipRepository",
    "PostgresTransactionManager",
]
