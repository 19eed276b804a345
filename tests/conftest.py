"""Pytest configuration and shared fixtures for all tests.

This module provides:
- Test configuration and markers
- In-memory store collections (mongomock) and mocked collections
- Service fixtures wired to the in-memory store
- A FastAPI TestClient running against the in-memory backend
"""

from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import mongomock
import pytest
from _pytest.config import Config
from fastapi.testclient import TestClient

from taskboard.application.services import AssignmentSynchronizer, TaskService, UserService
from taskboard.application.settings import Settings
from taskboard.domain.repositories import DocumentCollection
from taskboard.integration.repositories import InMemoryDocumentCollection
from taskboard.main import create_app

TEST_DATABASE = "taskboard_test"

# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config: Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (in-memory store adapters)")
    config.addinivalue_line("markers", "api: HTTP surface tests")


# ============================================================================
# STORE FIXTURES
# ============================================================================


@pytest.fixture
def store_client() -> mongomock.MongoClient:
    """Provide a fresh in-memory client per test."""
    return mongomock.MongoClient(tz_aware=True)


@pytest.fixture
def users(store_client: mongomock.MongoClient) -> InMemoryDocumentCollection:
    """Users collection with the unique email index."""
    collection = store_client[TEST_DATABASE]["users"]
    collection.create_index("email", unique=True)
    return InMemoryDocumentCollection(collection)


@pytest.fixture
def tasks(store_client: mongomock.MongoClient) -> InMemoryDocumentCollection:
    """Tasks collection."""
    return InMemoryDocumentCollection(store_client[TEST_DATABASE]["tasks"])


def build_mock_collection(name: str) -> MagicMock:
    """Create a DocumentCollection mock with every operation as an AsyncMock."""
    mock = MagicMock(spec=DocumentCollection)
    mock.name = name
    mock.find_async = AsyncMock(return_value=[])
    mock.count_async = AsyncMock(return_value=0)
    mock.get_async = AsyncMock(return_value=None)
    mock.find_one_async = AsyncMock(return_value=None)
    mock.insert_async = AsyncMock()
    mock.update_async = AsyncMock(return_value=None)
    mock.remove_async = AsyncMock(return_value=None)
    mock.update_many_async = AsyncMock(return_value=0)
    mock.add_to_set_async = AsyncMock(return_value=True)
    mock.pull_async = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_users() -> MagicMock:
    return build_mock_collection("users")


@pytest.fixture
def mock_tasks() -> MagicMock:
    return build_mock_collection("tasks")


# ============================================================================
# SERVICE FIXTURES
# ============================================================================


@pytest.fixture
def synchronizer(users: InMemoryDocumentCollection, tasks: InMemoryDocumentCollection) -> AssignmentSynchronizer:
    return AssignmentSynchronizer(users, tasks)


@pytest.fixture
def user_service(users: InMemoryDocumentCollection, synchronizer: AssignmentSynchronizer) -> UserService:
    return UserService(users, synchronizer)


@pytest.fixture
def task_service(tasks: InMemoryDocumentCollection, synchronizer: AssignmentSynchronizer) -> TaskService:
    return TaskService(tasks, synchronizer)


# ============================================================================
# HTTP FIXTURES
# ============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings selecting the in-memory backend."""
    return Settings(
        store_backend="memory",
        database_name=TEST_DATABASE,
        log_level="WARNING",
        enable_cors=False,
    )


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """TestClient with the application lifespan (store connection) running."""
    with TestClient(create_app(test_settings)) as test_client:
        yield test_client
