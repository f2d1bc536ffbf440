#!/usr/bin/env python3
"""
document_store.py
-----------------
Remote per-user document store.

Each authenticated user owns exactly one JSON document holding entries,
tags, library, achievements, aiAccess, language and createdAt. The store
runs on any SQLAlchemy URL (a shared PostgreSQL server in production, an
SQLite file in tests).

Semantics:
    - create(uid, data): write a brand-new document
    - update_fields(uid, fields): replace the named top-level fields whole;
      no version token, so two devices racing on one field simply
      overwrite each other (last write wins)
    - subscribe(uid, callback): push the full document to the callback
      immediately and after every change made through this store, including
      changes the subscriber made itself; None is pushed while no document
      exists

Usage:
    store = SQLDocumentStore("sqlite:///remote.db", logger=logger)
    sub = store.subscribe(uid, lambda doc: print(doc["entries"]))
    store.update_fields(uid, {"language": "zh"})
    sub.cancel()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
from contextlib import contextmanager
from typing import Any, Callable, Dict, List, Optional

# --- Third party ---
from sqlalchemy import create_engine, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

# --- Local imports ---
from soloinsight.core.exceptions import SyncError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from .decorators import handle_sync_errors, log_database_operation
from .models import Base, UserDocument

DocumentCallback = Callable[[Optional[Dict[str, Any]]], None]


class Subscription:
    """
    Handle for a standing document subscription.

    Cancelling is idempotent; a cancelled subscription never fires again.
    """

    def __init__(self, store: "SQLDocumentStore", uid: str, callback: DocumentCallback):
        self.store = store
        self.uid = uid
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        if self.active:
            self.active = False
            self.store._remove_subscription(self)


class SQLDocumentStore:
    """
    SQL-backed store of one JSON document per user.

    Attributes:
        url: SQLAlchemy database URL
        engine: SQLAlchemy engine
        logger: Optional logger
    """

    def __init__(self, url: str, logger: Optional[InsightLogger] = None) -> None:
        """
        Connect to the store and make sure the documents table exists.

        Args:
            url: SQLAlchemy URL of the remote database
            logger: Optional logger

        Raises:
            SyncError: If the store cannot be reached
        """
        self.url = url
        self.logger = logger
        self._subscriptions: Dict[str, List[Subscription]] = {}

        try:
            self.engine: Engine = create_engine(url, future=True, pool_pre_ping=True)
            self.SessionLocal: sessionmaker = sessionmaker(
                bind=self.engine, expire_on_commit=False, future=True
            )
            Base.metadata.create_all(bind=self.engine, tables=[UserDocument.__table__])
        except SQLAlchemyError as e:
            safe_logger(self.logger).log_error(e, {"operation": "document_store_init"})
            raise SyncError(f"Remote store unreachable: {e}") from e

        safe_logger(self.logger).log_operation("document_store_ready", {"url": self._safe_url})

    @property
    def _safe_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

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

    # ---- Reads ----
    @staticmethod
    def _decode(row: UserDocument) -> Dict[str, Any]:
        try:
            data = json.loads(row.data)
        except json.JSONDecodeError as e:
            raise SyncError(f"Corrupt remote document for {row.uid}: {e}") from e
        if not isinstance(data, dict):
            raise SyncError(f"Corrupt remote document for {row.uid}: not an object")
        return data

    @handle_sync_errors
    @log_database_operation("get_document")
    def get(self, uid: str) -> Optional[Dict[str, Any]]:
        """
        Fetch a user's document.

        Returns:
            The decoded document, or None if it does not exist

        Raises:
            SyncError: On connectivity loss or a corrupt document
        """
        self._require_uid(uid)
        with self.session_scope() as session:
            row = session.get(UserDocument, uid)
            return self._decode(row) if row else None

    def exists(self, uid: str) -> bool:
        return self.get(uid) is not None

    # ---- Writes ----
    @handle_sync_errors
    @log_database_operation("create_document")
    def create(self, uid: str, data: Dict[str, Any]) -> None:
        """
        Create (or overwrite) a user's document.

        Raises:
            SyncError: On connectivity loss
        """
        self._require_uid(uid)
        payload = json.dumps(data, ensure_ascii=False)
        with self.session_scope() as session:
            row = session.get(UserDocument, uid)
            if row is None:
                session.add(UserDocument(uid=uid, data=payload))
            else:
                row.data = payload
        self._notify(uid)

    @handle_sync_errors
    @log_database_operation("update_document_fields")
    def update_fields(self, uid: str, fields: Dict[str, Any]) -> None:
        """
        Replace top-level fields of an existing document.

        Args:
            uid: Document owner
            fields: Field name -> new value (each written whole)

        Raises:
            SyncError: If the document is missing or the store is unreachable
        """
        self._require_uid(uid)
        with self.session_scope() as session:
            row = session.get(UserDocument, uid)
            if row is None:
                raise SyncError(f"No document to update for user {uid}")
            data = self._decode(row)
            data.update(fields)
            row.data = json.dumps(data, ensure_ascii=False)

        safe_logger(self.logger).log_debug(
            "Updated document fields", {"uid": uid, "fields": sorted(fields)}
        )
        self._notify(uid)

    @handle_sync_errors
    def delete(self, uid: str) -> bool:
        """Delete a user's document. Returns False if there was none."""
        self._require_uid(uid)
        with self.session_scope() as session:
            row = session.get(UserDocument, uid)
            if row is None:
                return False
            session.delete(row)
        self._notify(uid)
        return True

    # ---- Subscriptions ----
    def subscribe(self, uid: str, callback: DocumentCallback) -> Subscription:
        """
        Register a callback for every change to a user's document.

        The current document is delivered immediately.

        Raises:
            SyncError: If the initial read fails
        """
        self._require_uid(uid)
        subscription = Subscription(self, uid, callback)
        self._subscriptions.setdefault(uid, []).append(subscription)
        safe_logger(self.logger).log_debug("Subscribed to document", {"uid": uid})

        try:
            callback(self.get(uid))
        except SyncError:
            subscription.cancel()
            raise
        return subscription

    def _remove_subscription(self, subscription: Subscription) -> None:
        subs = self._subscriptions.get(subscription.uid, [])
        if subscription in subs:
            subs.remove(subscription)
        if not subs:
            self._subscriptions.pop(subscription.uid, None)
        safe_logger(self.logger).log_debug(
            "Cancelled document subscription", {"uid": subscription.uid}
        )

    def subscriber_count(self, uid: str) -> int:
        return len(self._subscriptions.get(uid, []))

    def _notify(self, uid: str) -> None:
        subs = [s for s in self._subscriptions.get(uid, []) if s.active]
        if not subs:
            return
        document = self.get(uid)
        for subscription in subs:
            if subscription.active:
                subscription.callback(document)

    @staticmethod
    def _require_uid(uid: Optional[str]) -> None:
        if not uid:
            raise SyncError("Permission denied: no authenticated user")

    def dispose(self) -> None:
        """Drop all subscriptions and release pooled connections."""
        for subs in list(self._subscriptions.values()):
            for subscription in list(subs):
                subscription.cancel()
        self.engine.dispose()
