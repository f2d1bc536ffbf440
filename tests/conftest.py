"""
conftest.py
-----------
Shared pytest fixtures for Solo Insight tests.

Provides fixtures for:
- Temporary directories and storage files
- A local InsightDB and its managers
- A remote document store on a temporary SQLite file
- Entry factories with fixed local timestamps
"""
import pytest
from pathlib import Path
from datetime import datetime, timedelta
from tempfile import TemporaryDirectory

from soloinsight.core.exceptions import SyncError
from soloinsight.dataclasses.entry import Entry
from soloinsight.database.document_store import SQLDocumentStore
from soloinsight.database.models.enums import Outcome
from soloinsight.utils.dates import to_ms

# Fixed "now" for statistics tests (local time)
NOW = datetime(2026, 10, 17, 12, 0)


# ----- Path Fixtures -----

@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_db_path(tmp_dir):
    """Temporary local storage path."""
    return tmp_dir / "data" / "solo_insight.db"


@pytest.fixture
def remote_url(tmp_dir):
    """SQLAlchemy URL of a temporary remote store."""
    return f"sqlite:///{tmp_dir / 'remote.db'}"


# ----- Storage Fixtures -----

@pytest.fixture
def test_db(test_db_path):
    """
    Local InsightDB instance.

    Closed (and logged out) after the test.
    """
    from soloinsight.database.manager import InsightDB

    db = InsightDB(db_path=test_db_path)
    yield db
    db.close()


@pytest.fixture
def remote_store(remote_url):
    """Remote document store on a temporary SQLite file."""
    store = SQLDocumentStore(remote_url)
    yield store
    store.dispose()


class FlakyDocumentStore(SQLDocumentStore):
    """Document store whose writes can be switched off to simulate lost connectivity."""

    def __init__(self, url, logger=None):
        super().__init__(url, logger)
        self.offline = False

    def update_fields(self, uid, fields):
        if self.offline:
            raise SyncError("Remote store unreachable: offline")
        return super().update_fields(uid, fields)


@pytest.fixture
def flaky_store(remote_url):
    """Remote store with an `offline` switch for write failures."""
    store = FlakyDocumentStore(remote_url)
    yield store
    store.dispose()


# ----- Manager Fixtures -----

@pytest.fixture
def entry_manager(test_db):
    return test_db.entries


@pytest.fixture
def tag_manager(test_db):
    return test_db.tags


@pytest.fixture
def library_manager(test_db):
    return test_db.library


@pytest.fixture
def achievement_manager(test_db):
    return test_db.achievements


@pytest.fixture
def access_manager(test_db):
    return test_db.access


# ----- Data Factories -----

@pytest.fixture
def now_ms():
    """Epoch ms of the fixed test 'now'."""
    return to_ms(NOW)


@pytest.fixture
def make_entry():
    """
    Factory for Entry records.

    `days_ago` and `hour` place the entry relative to NOW in local time.
    """
    counter = {"n": 0}

    def _make(
        days_ago=0,
        hour=None,
        duration=10,
        intensity=3,
        outcome=Outcome.YES,
        tags=(),
        entry_id=None,
        timestamp=None,
    ):
        counter["n"] += 1
        if timestamp is None:
            moment = NOW - timedelta(days=days_ago)
            if hour is not None:
                moment = moment.replace(hour=hour, minute=0)
            timestamp = to_ms(moment)
        return Entry(
            id=entry_id or f"e{counter['n']}",
            timestamp=timestamp,
            duration=duration,
            intensity=intensity,
            outcome=Outcome(outcome),
            tags=list(tags),
        )

    return _make
