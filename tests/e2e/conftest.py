"""Fixtures for E2E tests: the real app over a mock container."""

import asyncio

from dishka import AsyncContainer
from fastapi.testclient import TestClient
import pytest

from rally.interface.api.app import create_app
from rally.persistence.repository.inmemory import InMemoryDatabase
from tests.di import build_test_container


@pytest.fixture
def container() -> AsyncContainer:
    return build_test_container()


@pytest.fixture
def client(container: AsyncContainer) -> TestClient:
    """Create test client."""
    return TestClient(create_app(container))


@pytest.fixture
def database(container: AsyncContainer) -> InMemoryDatabase:
    """The in-memory store behind ``client``, for seeding and inspection."""
    return asyncio.run(container.get(InMemoryDatabase))
