"""User repository interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Optional

from rally.domain.model.user import User
from rally.domain.value import UserId


class UserRepository(ABC):
    """Repository for User aggregate."""

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find many users in one query.

        Args:
            user_ids: Distinct user IDs

        Returns:
            Mapping of found IDs to users; missing IDs are absent
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        """Check whether any user already owns this email."""
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        """Insert a new user.

        Args:
            user: User without an ID

        Returns:
            The inserted user, with its ID assigned
        """
        pass
