"""
test_snapshot.py
----------------
Unit tests for Snapshot document conversion.
"""
from soloinsight.dataclasses.snapshot import Snapshot
from soloinsight.database.configs.storage_configs import DEFAULT_TAGS


class TestSnapshotDefaults:
    """Test default snapshot contents."""

    def test_fresh_snapshot(self):
        snapshot = Snapshot()
        assert snapshot.entries == []
        assert snapshot.tags == DEFAULT_TAGS
        assert snapshot.tags is not DEFAULT_TAGS
        assert snapshot.language == "en"

    def test_document_has_every_field(self):
        document = Snapshot().to_document()
        assert set(document) == {
            "entries", "tags", "library", "achievements", "aiAccess", "language"
        }


class TestSnapshotFromDocument:
    """Test Snapshot.from_document() recovery rules."""

    def test_empty_document_gives_defaults(self):
        assert Snapshot.from_document({}) == Snapshot()

    def test_malformed_records_skipped(self, make_entry):
        good = make_entry(entry_id="good").to_dict()
        snapshot = Snapshot.from_document(
            {
                "entries": [good, {"no": "id"}, "junk"],
                "library": [{"id": "l1"}, {"title": "no id"}],
                "achievements": {"first_log": "12", "bad": "soon"},
                "language": "fr",
            }
        )
        assert [e.id for e in snapshot.entries] == ["good"]
        assert [i.id for i in snapshot.library] == ["l1"]
        assert snapshot.achievements == {"first_log": 12}
        assert snapshot.language == "en"

    def test_document_round_trip(self, make_entry):
        original = Snapshot(entries=[make_entry(tags=["Toy"])], tags=["Toy"], language="zh")
        assert Snapshot.from_document(original.to_document()) == original

    def test_replace_with_keeps_identity(self, make_entry):
        snapshot = Snapshot()
        other = Snapshot(entries=[make_entry()], language="zh")
        before = id(snapshot)

        snapshot.replace_with(other)

        assert id(snapshot) == before
        assert snapshot.entries == other.entries
        assert snapshot.language == "zh"
