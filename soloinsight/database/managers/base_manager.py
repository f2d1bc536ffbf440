#!/usr/bin/env python3
"""
base_manager.py
--------------------
Base manager shared by every slot manager.

Managers mutate the session's in-memory Snapshot first, then persist the
whole slot through the active backend. With the remote backend that write
can fail; the failure becomes a Notice and the optimistic local update is
kept (no rollback, no retry).

Key Features:
    - StoreContext: backend, snapshot and notices shared by all managers
    - _persist(): write a slot, converting SyncError into a notice
    - Listener registry for change notifications

Usage:
    Subclass BaseManager for each slot and mutate self.snapshot, then call
    self._persist(<slot>):

    class TagManager(BaseManager):
        def add(self, tag: str) -> List[str]:
            self.snapshot.tags = [*self.snapshot.tags, tag]
            self._persist(TAGS)
            return self.snapshot.tags
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from abc import ABC
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional

# --- Local imports ---
from soloinsight.core.exceptions import SyncError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.dataclasses.snapshot import Snapshot
from soloinsight.utils.dates import now_ms

if TYPE_CHECKING:
    from soloinsight.database.backends import StorageBackend

ConfirmCallback = Callable[[str], bool]


@dataclass
class Notice:
    """A dismissable, non-blocking message for the user."""

    message: str
    created_at: int = field(default_factory=now_ms)


@dataclass
class StoreContext:
    """
    State shared by all managers of one facade.

    The backend is swapped on login/logout; the snapshot object is kept
    and overwritten in place so every manager sees the same data.
    """

    backend: "StorageBackend"
    snapshot: Snapshot = field(default_factory=Snapshot)
    notices: List[Notice] = field(default_factory=list)


class BaseManager(ABC):
    """
    Abstract base for slot managers.

    Attributes:
        context: Shared backend/snapshot/notices
        logger: Optional logger for operation tracking
    """

    def __init__(self, context: StoreContext, logger: Optional[InsightLogger] = None):
        self.context = context
        self.logger = logger

    @property
    def snapshot(self) -> Snapshot:
        return self.context.snapshot

    @property
    def backend(self) -> "StorageBackend":
        return self.context.backend

    def _persist(self, slot: str) -> bool:
        """
        Write one slot of the snapshot through the active backend.

        Returns:
            True if the write went through, False if it became a notice
        """
        try:
            self.backend.store(slot, self.snapshot.serialize(slot))
        except SyncError as e:
            self._notify_failure(e, slot)
            return False
        return True

    def _notify_failure(self, error: SyncError, slot: str) -> None:
        safe_logger(self.logger).log_error(error, {"operation": "persist", "slot": slot})
        self.context.notices.append(Notice(f"Sync failed for {slot}: {error}"))

    @staticmethod
    def _confirmed(confirm: Optional[ConfirmCallback], message: str) -> bool:
        return confirm is None or bool(confirm(message))
