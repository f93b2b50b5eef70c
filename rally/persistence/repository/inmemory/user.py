"""In-memory user repository for testing."""

from collections.abc import Sequence
from typing import Optional

from rally.domain.model.user import User
from rally.domain.repository.user import UserRepository
from rally.domain.value import UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._next_id = 1

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> dict[UserId, User]:
        """Find many users by ID."""
        return {
            user_id: self._users[user_id] for user_id in user_ids if user_id in self._users
        }

    async def find_by_email(self, email: str) -> Optional[User]:
        """Find a user by their email."""
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def exists_by_email(self, email: str) -> bool:
        return await self.find_by_email(email) is not None

    async def add(self, user: User) -> User:
        """Insert a user, assigning the next ID unless one is set."""
        if user.id is None:
            user = user.model_copy(update={"id": UserId(self._next_id)})
        self._users[user.id] = user
        self._next_id = max(self._next_id, user.id + 1)
        return user

    def snapshot(self) -> tuple[dict[UserId, User], int]:
        return dict(self._users), self._next_id

    def restore(self, snapshot: tuple[dict[UserId, User], int]) -> None:
        self._users, self._next_id = dict(snapshot[0]), snapshot[1]
