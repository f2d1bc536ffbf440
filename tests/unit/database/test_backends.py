"""
test_backends.py
----------------
Unit tests for LocalBackend and RemoteBackend.
"""
import pytest

from soloinsight.core.exceptions import SyncError
from soloinsight.database.backends import LocalBackend, RemoteBackend
from soloinsight.database.configs.storage_configs import DEFAULT_TAGS
from soloinsight.database.models import StorageSlot


@pytest.fixture
def local_backend(test_db_path):
    backend = LocalBackend(test_db_path)
    yield backend
    backend.dispose()


class TestLocalBackend:
    """Test the on-device slot store."""

    def test_missing_slot_returns_default(self, local_backend):
        assert local_backend.load("entries", []) == []
        assert local_backend.load("language") is None

    def test_store_then_load(self, local_backend):
        local_backend.store("tags", ["A", "B"])
        assert local_backend.load("tags", []) == ["A", "B"]

    def test_store_overwrites_whole_value(self, local_backend):
        local_backend.store("tags", ["A", "B"])
        local_backend.store("tags", ["C"])
        assert local_backend.load("tags") == ["C"]

    def test_values_survive_reopen(self, test_db_path):
        first = LocalBackend(test_db_path)
        first.store("language", "zh")
        first.dispose()

        second = LocalBackend(test_db_path)
        try:
            assert second.load("language") == "zh"
        finally:
            second.dispose()

    def test_corrupt_json_falls_back_to_default(self, local_backend):
        """Test a non-JSON value loads as the default instead of raising."""
        with local_backend.session_scope() as session:
            session.add(StorageSlot(key="solo_insight_entries", value="{not json"))

        assert local_backend.load("entries", []) == []

    def test_unserializable_value_is_swallowed(self, local_backend):
        """Test write failures are logged, never raised."""
        local_backend.store("entries", [object()])
        assert local_backend.load("entries", []) == []

    def test_clear_removes_every_slot(self, local_backend):
        local_backend.store("tags", ["A"])
        local_backend.store("language", "zh")

        local_backend.clear()

        assert local_backend.load("tags") is None
        assert local_backend.load("language") is None

    def test_load_snapshot_defaults(self, local_backend):
        snapshot = local_backend.load_snapshot()
        assert snapshot.entries == []
        assert snapshot.tags == DEFAULT_TAGS
        assert snapshot.ai_access.attempts == 0

    def test_not_remote(self, local_backend):
        assert local_backend.is_remote is False


class TestRemoteBackend:
    """Test slots stored as fields of the user document."""

    def test_load_missing_document_returns_default(self, remote_store):
        backend = RemoteBackend(remote_store, "alice")
        assert backend.load("entries", []) == []

    def test_store_updates_field(self, remote_store):
        remote_store.create("alice", {"language": "en"})
        backend = RemoteBackend(remote_store, "alice")

        backend.store("language", "zh")

        assert remote_store.get("alice")["language"] == "zh"
        assert backend.load("language") == "zh"

    def test_store_without_document_raises(self, remote_store):
        backend = RemoteBackend(remote_store, "nobody")
        with pytest.raises(SyncError, match="No document"):
            backend.store("tags", ["A"])

    def test_missing_uid_raises(self, remote_store):
        backend = RemoteBackend(remote_store, None)
        with pytest.raises(SyncError, match="Permission denied"):
            backend.load("entries", [])
        with pytest.raises(SyncError, match="Permission denied"):
            backend.store("entries", [])

    def test_load_all_fills_defaults(self, remote_store):
        remote_store.create("alice", {"language": "zh"})
        data = RemoteBackend(remote_store, "alice").load_all()
        assert data["language"] == "zh"
        assert data["entries"] == []
        assert data["tags"] == DEFAULT_TAGS

    def test_is_remote(self, remote_store):
        assert RemoteBackend(remote_store, "alice").is_remote is True
