#!/usr/bin/env python3
"""
backends.py
-----------
Persistence backends for the user's slots.

Both backends expose the same two-call contract over the logical slots
(entries, tags, achievements, library, aiAccess, language):

    load(slot, default) -> value
    store(slot, value)  -> None

LocalBackend:
    SQLite file accessed through SQLAlchemy, one row per slot in
    `storage_slots`. Synchronous and forgiving: a missing, unreadable or
    non-JSON value loads as the default, and write failures are logged
    and swallowed. Nothing here raises to callers.

RemoteBackend:
    One field of the authenticated user's document in a SQLDocumentStore.
    Connectivity and permission failures raise SyncError; the managers turn
    those into notices.

Usage:
    backend = LocalBackend(db_path, logger=logger)
    entries = backend.load("entries", [])
    backend.store("language", "zh")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Optional, Union

# --- Third party ---
from sqlalchemy import create_engine, delete, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from soloinsight.core.exceptions import SyncError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.dataclasses.snapshot import Snapshot
from .configs.storage_configs import SLOT_CONFIGS, SLOTS, default_for
from .document_store import SQLDocumentStore
from .models import Base, StorageSlot


class StorageBackend(ABC):
    """Key-value contract shared by the local and remote backends."""

    logger: Optional[InsightLogger] = None

    @abstractmethod
    def load(self, slot: str, default: Any = None) -> Any:
        """Value of a slot, or default if absent."""

    @abstractmethod
    def store(self, slot: str, value: Any) -> None:
        """Replace the whole value of a slot."""

    @property
    def is_remote(self) -> bool:
        return False

    def load_all(self) -> Dict[str, Any]:
        """Every slot's stored value (defaults where absent)."""
        return {config.slot: self.load(config.slot, config.default()) for config in SLOT_CONFIGS}

    def load_snapshot(self) -> Snapshot:
        """Parse every slot into a Snapshot."""
        return Snapshot.from_document(self.load_all(), self.logger)


class LocalBackend(StorageBackend):
    """
    On-device slot store.

    Attributes:
        db_path: SQLite database file
        engine: SQLAlchemy engine
        logger: Optional logger
    """

    def __init__(
        self, db_path: Union[str, Path], logger: Optional[InsightLogger] = None
    ) -> None:
        self.db_path = Path(db_path).expanduser()
        self.logger = logger

        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self.engine: Engine = create_engine(f"sqlite:///{self.db_path}", future=True)
        self.SessionLocal: sessionmaker = sessionmaker(
            bind=self.engine, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(bind=self.engine, tables=[StorageSlot.__table__])

        safe_logger(self.logger).log_debug(
            "Local storage ready", {"db_path": str(self.db_path)}
        )

    @contextmanager
    def session_scope(self):
        """Transactional scope: commit on success, rollback on error."""
        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    @staticmethod
    def _key(slot: str) -> str:
        return SLOTS[slot].local_key

    def load(self, slot: str, default: Any = None) -> Any:
        """
        Read a slot.

        Returns:
            The decoded value, or default when the slot is missing,
            unreadable or not valid JSON
        """
        key = self._key(slot)
        try:
            with self.session_scope() as session:
                row = session.get(StorageSlot, key)
                raw = row.value if row is not None else None
        except SQLAlchemyError as e:
            safe_logger(self.logger).log_warning(
                "Local slot unreadable, using default", {"key": key, "error": str(e)}
            )
            return default

        if raw is None:
            return default

        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            safe_logger(self.logger).log_warning(
                "Local slot is not valid JSON, using default", {"key": key, "error": str(e)}
            )
            return default

    def store(self, slot: str, value: Any) -> None:
        """Write a slot. Failures are logged, never raised."""
        key = self._key(slot)
        try:
            payload = json.dumps(value, ensure_ascii=False)
            with self.session_scope() as session:
                row = session.get(StorageSlot, key)
                if row is None:
                    session.add(StorageSlot(key=key, value=payload))
                else:
                    row.value = payload
        except (SQLAlchemyError, TypeError, ValueError) as e:
            safe_logger(self.logger).log_warning(
                "Local slot write failed", {"key": key, "error": str(e)}
            )

    def clear(self) -> None:
        """Delete every slot (full wipe)."""
        try:
            with self.session_scope() as session:
                session.execute(delete(StorageSlot))
        except SQLAlchemyError as e:
            safe_logger(self.logger).log_warning("Local wipe failed", {"error": str(e)})
            return
        safe_logger(self.logger).log_operation("local_storage_cleared")

    def dispose(self) -> None:
        self.engine.dispose()


class RemoteBackend(StorageBackend):
    """
    Slots as fields of one user's remote document.

    Attributes:
        document_store: Document store holding the user's document
        uid: Authenticated user id
    """

    def __init__(
        self,
        document_store: SQLDocumentStore,
        uid: Optional[str],
        logger: Optional[InsightLogger] = None,
    ) -> None:
        self.document_store = document_store
        self.uid = uid
        self.logger = logger

    @property
    def is_remote(self) -> bool:
        return True

    def _require_uid(self) -> str:
        if not self.uid:
            raise SyncError("Permission denied: no authenticated user")
        return self.uid

    def load(self, slot: str, default: Any = None) -> Any:
        """
        Read one field of the user document.

        Raises:
            SyncError: On connectivity loss or missing user
        """
        document = self.document_store.get(self._require_uid())
        if document is None or slot not in document:
            return default
        return document[slot]

    def load_all(self) -> Dict[str, Any]:
        document = self.document_store.get(self._require_uid()) or {}
        return {
            config.slot: document.get(config.slot, default_for(config.slot))
            for config in SLOT_CONFIGS
        }

    def store(self, slot: str, value: Any) -> None:
        """
        Replace one field of the user document.

        Raises:
            SyncError: On connectivity loss, missing user or missing document
        """
        self.document_store.update_fields(self._require_uid(), {slot: value})
