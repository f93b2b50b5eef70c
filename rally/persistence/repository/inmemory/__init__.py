"""In-memory repository implementations for testing."""

from .association import InMemoryRelationshipRepository, InMemoryStockRepository
from .authentication import InMemoryAuthenticationRepository
from .catalog import (
    InMemoryPrefectureRepository,
    InMemorySportRepository,
    InMemoryTagRepository,
)
from .database import InMemoryDatabase
from .recruitment import InMemoryRecruitmentRepository
from .transaction import InMemoryTransactionManager
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryDatabase",
    "InMemoryUserRepository",
    "InMemoryAuthenticationRepository",
    "InMemoryRecruitmentRepository",
    "InMemoryTagRepository",
    "InMemorySportRepository",
    "InMemoryPrefectureRepository",
    "InMemoryStockRepository",
    "InMemoryRelationshipRepository",
    "InMemoryTransactionManager",
]
