"""
test_library_manager.py
-----------------------
Unit tests for LibraryManager.
"""
from dataclasses import replace

import pytest

from soloinsight.core.exceptions import ValidationError
from soloinsight.database.managers import LibraryManager


class TestNormalizeUrl:
    """Test LibraryManager.normalize_url()."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("example.com/a", "https://example.com/a"),
            ("http://example.com", "http://example.com"),
            ("  ftp://files.test ", "ftp://files.test"),
            ("", None),
            (None, None),
        ],
    )
    def test_normalize(self, raw, expected):
        assert LibraryManager.normalize_url(raw) == expected


class TestLibraryManagerAdd:
    """Test LibraryManager.add()."""

    def test_add_prepends(self, library_manager):
        first = library_manager.add(actor="Ann")
        second = library_manager.add(url="clip.test")
        assert library_manager.list() == [second, first]
        assert second.url == "https://clip.test"

    def test_add_empty_rejected(self, library_manager):
        with pytest.raises(ValidationError):
            library_manager.add(url=" ", actor=None, title="")
        assert library_manager.list() == []

    def test_add_persists(self, library_manager, test_db):
        item = library_manager.add(title="Night")
        assert test_db.local_backend.load("library")[0]["id"] == item.id


class TestLibraryManagerEdit:
    """Test update/delete/favorite/use."""

    def test_update(self, library_manager):
        item = library_manager.add(actor="Ann")
        updated = library_manager.update(replace(item, title="Renamed"))
        assert library_manager.get(item.id).title == "Renamed"
        assert updated.actor == "Ann"

    def test_update_unknown_returns_none(self, library_manager):
        item = library_manager.add(actor="Ann")
        assert library_manager.update(replace(item, id="ghost")) is None

    def test_update_to_empty_rejected(self, library_manager):
        item = library_manager.add(actor="Ann")
        with pytest.raises(ValidationError):
            library_manager.update(replace(item, actor=""))

    def test_delete_confirmed(self, library_manager):
        item = library_manager.add(actor="Ann")
        assert library_manager.delete(item.id, confirm=lambda msg: True) is True
        assert library_manager.list() == []

    def test_delete_declined_or_unknown(self, library_manager):
        item = library_manager.add(actor="Ann")
        assert library_manager.delete(item.id, confirm=lambda msg: False) is False
        assert library_manager.delete("ghost", confirm=None) is False
        assert len(library_manager.list()) == 1

    def test_toggle_favorite(self, library_manager):
        item = library_manager.add(actor="Ann")
        assert library_manager.toggle_favorite(item.id).is_favorite is True
        assert library_manager.toggle_favorite(item.id).is_favorite is False
        assert library_manager.toggle_favorite("ghost") is None

    def test_mark_used(self, library_manager, now_ms):
        item = library_manager.add(actor="Ann")
        assert library_manager.mark_used(item.id, now_ms).last_used_at == now_ms


class TestLibraryManagerSearch:
    """Test LibraryManager.search()."""

    def test_search_term_and_favorites(self, library_manager):
        ann = library_manager.add(actor="Ann", title="Evening")
        library_manager.add(actor="Bob")
        library_manager.toggle_favorite(ann.id)

        assert [i.actor for i in library_manager.search("ann")] == ["Ann"]
        assert [i.actor for i in library_manager.search("", favorites_only=True)] == ["Ann"]
        assert len(library_manager.search()) == 2
