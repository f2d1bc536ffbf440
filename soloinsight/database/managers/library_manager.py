#!/usr/bin/env python3
"""
library_manager.py
--------------------
Manages the personal content library.

Library items are reference links or names the user wants to find again.
New items go to the front of the list. Entries never point at library
items; logging with "save to library" copies url/actor into a new item.

Key Features:
    - Add/update/delete with the same empty-item check as logging input
    - Favorites and last-used tracking
    - Case-insensitive search over title, actor and url

Usage:
    lib_mgr = LibraryManager(context, logger)
    item = lib_mgr.add(url="example.com/clip", actor="Someone")
    lib_mgr.toggle_favorite(item.id)
    lib_mgr.search("some", favorites_only=True)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from dataclasses import replace
from typing import List, Optional, Sequence

# --- Local imports ---
from soloinsight.core.exceptions import ValidationError
from soloinsight.core.validators import DataValidator
from soloinsight.dataclasses.content_item import ContentItem
from soloinsight.database.configs.storage_configs import LIBRARY
from soloinsight.database.decorators import log_database_operation
from soloinsight.utils.dates import TimeLike, to_ms
from .base_manager import BaseManager, ConfirmCallback

_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")


class LibraryManager(BaseManager):
    """Library list operations."""

    @staticmethod
    def normalize_url(url: Optional[str]) -> Optional[str]:
        """
        Add an https:// prefix to a url without a scheme.

        Examples:
            >>> LibraryManager.normalize_url("example.com/a")
            'https://example.com/a'
            >>> LibraryManager.normalize_url("http://example.com")
            'http://example.com'
        """
        url = DataValidator.normalize_string(url)
        if url is None or _SCHEME.match(url):
            return url
        return f"https://{url}"

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list(self) -> List[ContentItem]:
        return list(self.snapshot.library)

    def get(self, item_id: str) -> Optional[ContentItem]:
        return next((i for i in self.snapshot.library if i.id == item_id), None)

    def search(self, term: str = "", favorites_only: bool = False) -> List[ContentItem]:
        """Items matching a search term, optionally favorites only."""
        return [
            item
            for item in self.snapshot.library
            if (not favorites_only or item.is_favorite) and item.matches(term)
        ]

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def _replace_item(self, updated: ContentItem) -> None:
        self.snapshot.library = [
            updated if item.id == updated.id else item for item in self.snapshot.library
        ]
        self._persist(LIBRARY)

    @log_database_operation("add_library_item")
    def add(
        self,
        url: Optional[str] = None,
        actor: Optional[str] = None,
        title: Optional[str] = None,
    ) -> ContentItem:
        """
        Create a library item at the front of the list.

        Raises:
            ValidationError: If url, actor and title are all empty
        """
        item = ContentItem.new(
            url=self.normalize_url(url),
            actor=DataValidator.normalize_string(actor),
            title=DataValidator.normalize_string(title),
        )
        if item.is_empty:
            raise ValidationError("Library item needs a url, actor or title")

        self.snapshot.library = [item, *self.snapshot.library]
        self._persist(LIBRARY)
        return item

    @log_database_operation("update_library_item")
    def update(self, item: ContentItem) -> Optional[ContentItem]:
        """
        Replace the stored item with the same id.

        Returns:
            The stored item, or None for an unknown id

        Raises:
            ValidationError: If url, actor and title are all empty
        """
        if self.get(item.id) is None:
            return None

        updated = replace(
            item,
            url=self.normalize_url(item.url),
            actor=DataValidator.normalize_string(item.actor),
            title=DataValidator.normalize_string(item.title),
        )
        if updated.is_empty:
            raise ValidationError("Library item needs a url, actor or title")

        self._replace_item(updated)
        return updated

    @log_database_operation("delete_library_item")
    def delete(self, item_id: str, confirm: Optional[ConfirmCallback]) -> bool:
        """
        Remove an item after confirmation.

        Returns:
            True if an item was removed
        """
        if self.get(item_id) is None:
            return False
        if not self._confirmed(confirm, "Delete this library item?"):
            return False

        self.snapshot.library = [i for i in self.snapshot.library if i.id != item_id]
        self._persist(LIBRARY)
        return True

    def toggle_favorite(self, item_id: str) -> Optional[ContentItem]:
        item = self.get(item_id)
        if item is None:
            return None
        updated = replace(item, is_favorite=not item.is_favorite)
        self._replace_item(updated)
        return updated

    def mark_used(self, item_id: str, now: TimeLike = None) -> Optional[ContentItem]:
        """Stamp an item's last-used time (default: now)."""
        item = self.get(item_id)
        if item is None:
            return None
        updated = replace(item, last_used_at=to_ms(now))
        self._replace_item(updated)
        return updated

    def replace_all(self, items: Sequence[ContentItem], persist: bool = True) -> None:
        self.snapshot.library = list(items)
        if persist:
            self._persist(LIBRARY)
