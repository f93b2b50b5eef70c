"""Domain models for Rally."""

from rally.domain.model.association import Relationship, Stock
from rally.domain.model.authentication import Authentication
from rally.domain.model.catalog import Prefecture, Sport, Tag
from rally.domain.model.common import DomainModel
from rally.domain.model.recruitment import Recruitment
from rally.domain.model.user import User

__all__ = [
    "DomainModel",
    "User",
    "Authentication",
    "Recruitment",
    "Tag",
    "Sport",
    "Prefecture",
    "Stock",
    "Relationship",
]
