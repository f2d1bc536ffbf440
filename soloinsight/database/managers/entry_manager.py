#!/usr/bin/env python3
"""
entry_manager.py
--------------------
The Entry Store: sole writer of the session's entries.

Every mutation replaces the whole 'entries' slot. With the remote backend
the local list is updated first and a failed remote write only produces a
notice.

Key Features:
    - create() validates a draft and assigns a fresh id
    - delete() asks for confirmation; unknown ids are a silent no-op
    - Change listeners (the achievement evaluator registers here)

Usage:
    entry_mgr = EntryManager(context, logger)
    entry = entry_mgr.create(EntryDraft(duration=20, intensity=4))
    entry_mgr.delete(entry.id, confirm=lambda msg: True)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import Callable, List, Optional, Sequence

# --- Local imports ---
from soloinsight.dataclasses.entry import Entry, EntryDraft
from soloinsight.database.configs.storage_configs import ENTRIES
from soloinsight.database.decorators import log_database_operation
from .base_manager import BaseManager, ConfirmCallback

EntryListener = Callable[[List[Entry]], None]


class EntryManager(BaseManager):
    """
    Manages the entries slot.

    Entries keep insertion order; callers sort for display.
    """

    def __init__(self, context, logger=None):
        super().__init__(context, logger)
        self._listeners: List[EntryListener] = []

    # -------------------------------------------------------------------------
    # Listeners
    # -------------------------------------------------------------------------

    def add_listener(self, listener: EntryListener) -> None:
        """Register a callback run with the full list after every change."""
        self._listeners.append(listener)

    def _changed(self) -> None:
        entries = self.list()
        for listener in self._listeners:
            listener(entries)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list(self) -> List[Entry]:
        """Copy of all entries in insertion order."""
        return list(self.snapshot.entries)

    def get(self, entry_id: str) -> Optional[Entry]:
        return next((e for e in self.snapshot.entries if e.id == entry_id), None)

    def exists(self, entry_id: str) -> bool:
        return self.get(entry_id) is not None

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    @log_database_operation("create_entry")
    def create(self, draft: EntryDraft) -> Entry:
        """
        Log a new entry.

        Args:
            draft: User input

        Returns:
            The stored Entry

        Raises:
            EntryValidationError: If the draft breaks an entry invariant
        """
        entry = draft.build()
        self.snapshot.entries = [*self.snapshot.entries, entry]
        self._persist(ENTRIES)
        self._changed()
        return entry

    @log_database_operation("delete_entry")
    def delete(self, entry_id: str, confirm: Optional[ConfirmCallback]) -> List[Entry]:
        """
        Delete an entry after confirmation.

        Args:
            entry_id: Id of the entry to remove
            confirm: Yes/no callback; declining changes nothing

        Returns:
            The entry list after the operation
        """
        if not self._confirmed(confirm, "Delete this entry?"):
            return self.list()

        remaining = [e for e in self.snapshot.entries if e.id != entry_id]
        if len(remaining) == len(self.snapshot.entries):
            return self.list()

        self.snapshot.entries = remaining
        self._persist(ENTRIES)
        self._changed()
        return self.list()

    @log_database_operation("update_entry")
    def update(self, entry: Entry) -> List[Entry]:
        """Replace the stored entry with the same id; unknown ids are ignored."""
        if not self.exists(entry.id):
            return self.list()

        self.snapshot.entries = [
            entry if existing.id == entry.id else existing
            for existing in self.snapshot.entries
        ]
        self._persist(ENTRIES)
        self._changed()
        return self.list()

    def replace_all(
        self, entries: Sequence[Entry], persist: bool = True, notify: bool = True
    ) -> None:
        """
        Overwrite the whole list (backup import, remote push).

        Args:
            entries: New list
            persist: Write the slot back (False for data that came from it)
            notify: Run change listeners afterwards
        """
        self.snapshot.entries = list(entries)
        if persist:
            self._persist(ENTRIES)
        if notify:
            self._changed()
