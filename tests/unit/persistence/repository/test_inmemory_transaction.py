"""Unit tests for the in-memory transaction manager."""

import pytest

from rally.domain.model import Authentication
from rally.domain.value import AuthProvider
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.factories import make_user


class TestInMemoryTransactionManager:
    @pytest.mark.asyncio
    async def test_commit_keeps_writes(self):
        # Arrange
        database = InMemoryDatabase()

        # Act
        async with database.transactions.begin() as tx:
            user = await tx.users.add(make_user(1))
            await tx.authentications.add(
                Authentication(provider=AuthProvider.GOOGLE, uid="g-1", user_id=user.id)
            )

        # Assert
        assert await database.users.find_by_id(user.id) is not None
        assert await database.authentications.find_by_provider(AuthProvider.GOOGLE, "g-1")
        assert (database.transactions.begun, database.transactions.committed) == (1, 1)

    @pytest.mark.asyncio
    async def test_exception_restores_both_repositories(self):
        # Arrange
        database = InMemoryDatabase()
        await database.users.add(make_user(1))

        # Act
        with pytest.raises(RuntimeError):
            async with database.transactions.begin() as tx:
                await tx.users.add(make_user(2))
                await tx.authentications.add(
                    Authentication(
                        provider=AuthProvider.LINE, uid="l-2", user_id=make_user(2).id
                    )
                )
                raise RuntimeError("abort")

        # Assert
        assert await database.users.find_by_id(make_user(2).id) is None
        assert await database.users.find_by_id(make_user(1).id) is not None
        assert database.authentications.snapshot() == []
        assert database.transactions.rolled_back == 1
        assert database.transactions.committed == 0

    @pytest.mark.asyncio
    async def test_ids_are_reissued_after_rollback(self):
        database = InMemoryDatabase()

        with pytest.raises(RuntimeError):
            async with database.transactions.begin() as tx:
                await tx.users.add(make_user(1).model_copy(update={"id": None}))
                raise RuntimeError("abort")
        user = await database.users.add(make_user(1).model_copy(update={"id": None}))

        assert user.id == 1
