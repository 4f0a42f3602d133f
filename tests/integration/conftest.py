"""Integration fixtures: a file-backed SQLite database per test."""

import pytest
import pytest_asyncio

from account_core.application.services import AccountService
from account_core.infrastructure.persistence import Database
from tests.utils.fakes import FakePasswordService


@pytest_asyncio.fixture
async def database(tmp_path):
    """Fresh schema in a temporary SQLite file (aiosqlite driver)."""
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest.fixture
def sql_account_service(database, event_bus, mock_logger, settings, clock):
    return AccountService(
        store_factory=database.unit_of_work,
        password_service=FakePasswordService(),
        event_bus=event_bus,
        logger=mock_logger,
        settings=settings,
        clock=clock,
    )
