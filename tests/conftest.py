"""Shared test fixtures for the log client test suite."""

import pytest
import pytest_asyncio

from app.core.database import create_engine, create_session_maker
from app.schemas.logs import LogRecord
from app.services.local_store import LocalStore
from tests.factories import load_fixture


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "logs.db")


@pytest_asyncio.fixture
async def engine(db_path):
    """
    Provide a file-backed SQLite engine for tests.

    Each test gets its own database file under tmp_path.
    """
    engine = create_engine(db_path)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def store(engine):
    """A LocalStore over a fresh, initialized database."""
    store = LocalStore(create_session_maker(engine))
    await store.init()
    return store


@pytest.fixture
def all_logs() -> list[LogRecord]:
    return [LogRecord.model_validate(item) for item in load_fixture("all_logs.json")]
