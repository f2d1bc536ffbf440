"""
test_entry_records.py
---------------------
Unit tests for Entry, EntryDraft and LinkedContent.
"""
from dataclasses import replace

import pytest

from soloinsight.core.exceptions import EntryValidationError
from soloinsight.dataclasses.entry import Entry, EntryDraft, LinkedContent
from soloinsight.database.models.enums import Outcome


class TestEntryDraft:
    """Test EntryDraft validation and building."""

    def test_build_assigns_id_and_normalizes(self):
        """Test build produces an Entry with a fresh id and clean tags."""
        entry = EntryDraft(
            duration=15,
            intensity=4,
            outcome="EDGING",
            tags=[" Toy", "Toy", ""],
            timestamp=1_000,
        ).build()

        assert entry.id
        assert entry.timestamp == 1_000
        assert entry.outcome is Outcome.EDGING
        assert entry.tags == ["Toy"]

    def test_two_builds_get_distinct_ids(self):
        draft = EntryDraft(duration=5, intensity=2, timestamp=1)
        assert draft.build().id != draft.build().id

    def test_missing_timestamp_defaults_to_now(self):
        entry = EntryDraft(duration=5, intensity=2).build()
        assert entry.timestamp > 0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"duration": 0, "intensity": 3},
            {"duration": 5, "intensity": 6},
            {"duration": 5, "intensity": 3, "outcome": "MAYBE"},
            {"duration": 5, "intensity": 3, "note": "n" * 501},
        ],
    )
    def test_invalid_draft_rejected(self, kwargs):
        """Test each broken invariant raises EntryValidationError."""
        with pytest.raises(EntryValidationError):
            EntryDraft(**kwargs).build()

    def test_empty_linked_content_dropped(self):
        entry = EntryDraft(
            duration=5, intensity=3, linked_content=LinkedContent()
        ).build()
        assert entry.linked_content is None

    @pytest.mark.parametrize(
        "seconds, minutes",
        [(0, 1), (1, 1), (60, 1), (61, 2), (1800, 30)],
    )
    def test_duration_from_seconds(self, seconds, minutes):
        """Test stopwatch readings round up to whole minutes, minimum 1."""
        assert EntryDraft.duration_from_seconds(seconds) == minutes


class TestEntrySerialization:
    """Test Entry.to_dict() and Entry.from_dict()."""

    def test_to_dict_uses_camel_case(self):
        entry = Entry(
            id="a",
            timestamp=10,
            duration=3,
            intensity=2,
            outcome=Outcome.NO,
            linked_content=LinkedContent(url="https://x.test"),
        )
        data = entry.to_dict()
        assert data["outcome"] == "NO"
        assert data["linkedContent"] == {"url": "https://x.test"}
        assert "linked_content" not in data

    def test_from_dict_restores_entry(self):
        data = {
            "id": "a",
            "timestamp": 10,
            "duration": 3,
            "intensity": 2,
            "outcome": "YES",
            "tags": ["Audio"],
            "note": "hi",
            "linkedContent": {"actor": "Someone"},
        }
        entry = Entry.from_dict(data)
        assert entry.to_dict() == data

    def test_from_dict_accepts_legacy_keys(self):
        """Test records written with 'orgasm'/'contentUsed' still load."""
        entry = Entry.from_dict(
            {
                "id": "old",
                "timestamp": 5,
                "duration": 4,
                "intensity": 1,
                "orgasm": "EDGING",
                "contentUsed": {"url": "https://old.test"},
            }
        )
        assert entry.outcome is Outcome.EDGING
        assert entry.linked_content == LinkedContent(url="https://old.test")

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"id": "x"},
            {"id": "x", "timestamp": "soon"},
            "not a dict",
        ],
    )
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(EntryValidationError):
            Entry.from_dict(data)

    def test_legacy_record_written_back_unchanged(self):
        """Test legacy key names and unknown keys survive a read/write cycle."""
        data = {
            "id": "old",
            "timestamp": 5,
            "duration": 4,
            "intensity": 1,
            "orgasm": "NO",
            "tags": [],
            "note": "",
            "photoData": "data:image/png;base64,AAAA",
            "contentUsed": {"actor": "Ann"},
        }
        entry = Entry.from_dict(data)

        assert entry.extras == {"photoData": "data:image/png;base64,AAAA"}
        assert entry.to_dict() == data

    def test_both_key_names_prefer_current(self):
        """Test a stray legacy key next to the current one is kept verbatim."""
        data = {
            "id": "a",
            "timestamp": 1,
            "duration": 1,
            "intensity": 1,
            "outcome": "YES",
            "orgasm": "NO",
            "tags": [],
            "note": "",
        }
        entry = Entry.from_dict(data)

        assert entry.outcome is Outcome.YES
        assert entry.to_dict() == data

    def test_extras_survive_replace(self):
        entry = Entry.from_dict(
            {"id": "a", "timestamp": 1, "outcome": "YES", "mood": "calm"}
        )
        changed = replace(entry, note="edited")
        assert changed.to_dict()["mood"] == "calm"
        assert changed.to_dict()["note"] == "edited"
