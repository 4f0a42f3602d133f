"""Pytest configuration and shared fixtures.

Fixtures:
1. clock: FakeClock injected into the service (codes and tokens expire on it)
2. mock_logger: MagicMock standing in for LoggerProtocol
3. fast_password_service: deterministic hashing stand-in
4. account_service: AccountService over a fresh InMemoryDatabase
5. event_bus: RecordingEventBus keeping every published event
"""

import inspect
from unittest.mock import MagicMock

import pytest

from account_core.application.services import AccountService
from account_core.core.config import Settings
from account_core.core.enums import Environment
from account_core.infrastructure.persistence.memory import InMemoryDatabase
from tests.utils.fakes import FakeClock, FakePasswordService, RecordingEventBus


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mock_logger() -> MagicMock:
    return MagicMock()


@pytest.fixture
def settings() -> Settings:
    return Settings(environment=Environment.TESTING, database_url=None)


@pytest.fixture
def fast_password_service() -> FakePasswordService:
    return FakePasswordService()


@pytest.fixture
def memory_database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def event_bus(mock_logger) -> RecordingEventBus:
    return RecordingEventBus(logger=mock_logger)


@pytest.fixture
def account_service(
    memory_database, fast_password_service, event_bus, mock_logger, settings, clock
) -> AccountService:
    return AccountService(
        store_factory=memory_database.unit_of_work,
        password_service=fast_password_service,
        event_bus=event_bus,
        logger=mock_logger,
        settings=settings,
        clock=clock,
    )


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real bcrypt or database"
    )


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions.

    This ensures all async tests are properly marked even if
    the developer forgets to add @pytest.mark.asyncio.
    """
    for item in items:
        if inspect.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
