#!/usr/bin/env python3
"""
manager.py
--------------------
Storage facade for Solo Insight.

Provides the InsightDB class, the single entry point the CLI (or any
front-end) talks to. It owns the session snapshot and wires the managers,
the statistics engine and the backends together.

Handles:
    - Local storage on startup, remote storage after login
    - First-login merge of local data into the user's document
    - Standing subscription: every remote push overwrites the snapshot
    - Achievement evaluation after every entry change
    - Backup export/import and full local wipe
    - Dismissable notices for failed remote writes

Core Operations:
    Entries:
        - log_entry: Create an entry (optionally saving its content to the library)
        - entries.delete / entries.list / entries.update
    Library & Tags:
        - library.add / library.search / library.toggle_favorite ...
        - tags.add / tags.list
    Statistics:
        - analytics.get_dashboard / get_monthly / get_insights / get_heatmap
    Session:
        - login(uid, store) / logout()
    Data:
        - export_backup / import_backup / wipe
        - set_language / language

Usage:
    db = InsightDB(db_path=DB_PATH, log_dir=LOG_DIR)
    entry = db.log_entry(EntryDraft(duration=20, intensity=4, tags=["Toy"]))
    stats = db.analytics.get_dashboard(db.entries.list())

    store = SQLDocumentStore(remote_url, logger=db.logger)
    db.login(uid, store)
    ...
    db.logout()
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# --- Local imports ---
from soloinsight.core.exceptions import SyncError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.dataclasses.access_state import AiAccessState
from soloinsight.dataclasses.entry import Entry, EntryDraft
from soloinsight.dataclasses.snapshot import (
    Snapshot,
    parse_achievements,
    parse_entries,
    parse_language,
    parse_library,
    parse_tags,
)
from .backends import LocalBackend, RemoteBackend, StorageBackend
from .configs.storage_configs import (
    ACHIEVEMENTS,
    AI_ACCESS,
    BACKUP_PLATFORM,
    ENTRIES,
    INSIGHTS,
    LANGUAGE,
    LIBRARY,
    MIGRATED_USERS,
    TAGS,
)
from .document_store import SQLDocumentStore
from .export_manager import PLATFORM, ExportManager
from .managers import (
    AccessManager,
    AchievementManager,
    EntryManager,
    LibraryManager,
    Notice,
    SettingsManager,
    StoreContext,
    TagManager,
)
from .managers.base_manager import ConfirmCallback
from .query_analytics import QueryAnalytics
from .session import UserSession
from .sync_manager import MergeResult, SyncManager


class InsightDB:
    """
    Facade over storage, managers and statistics for one user.

    Attributes:
        db_path: Local storage file
        logger: Optional logger
        local_backend: The on-device backend (always open)
        context: Active backend, snapshot and notices shared by managers
        session: Active UserSession, or None while logged out
    """

    # ---- Initialization ----
    def __init__(
        self,
        db_path: Union[str, Path],
        log_dir: Optional[Union[str, Path]] = None,
        logger: Optional[InsightLogger] = None,
    ) -> None:
        """
        Open local storage and load the local snapshot.

        Args:
            db_path: Path to the local SQLite file
            log_dir: Directory for log files (optional)
            logger: Existing logger to use instead of creating one
        """
        self.db_path = Path(db_path).expanduser().resolve()

        # --- Logging ---
        if logger is not None:
            self.logger: Optional[InsightLogger] = logger
        elif log_dir:
            self.logger = InsightLogger(
                Path(log_dir).expanduser().resolve() / "system",
                component_name="storage",
            )
        else:
            self.logger = None

        self.local_backend = LocalBackend(self.db_path, logger=self.logger)
        self.context = StoreContext(
            backend=self.local_backend,
            snapshot=self.local_backend.load_snapshot(),
        )
        self.session: Optional[UserSession] = None
        self._evaluation_suspended = False

        # Service components
        self.export_manager = ExportManager(self.logger)
        self.query_analytics = QueryAnalytics(self.logger)

        # Slot managers share one context
        self._entry_manager = EntryManager(self.context, self.logger)
        self._tag_manager = TagManager(self.context, self.logger)
        self._library_manager = LibraryManager(self.context, self.logger)
        self._achievement_manager = AchievementManager(self.context, self.logger)
        self._access_manager = AccessManager(self.context, self.logger)
        self._settings_manager = SettingsManager(self.context, self.logger)

        self._entry_manager.add_listener(self._on_entries_changed)

        safe_logger(self.logger).log_operation(
            "storage_opened",
            {"db_path": str(self.db_path), "entries": len(self.snapshot.entries)},
        )

    # -------------------------------------------------------------------------
    # Manager Properties
    # -------------------------------------------------------------------------

    @property
    def snapshot(self) -> Snapshot:
        return self.context.snapshot

    @property
    def backend(self) -> StorageBackend:
        return self.context.backend

    @property
    def entries(self) -> EntryManager:
        """The Entry Store."""
        return self._entry_manager

    @property
    def tags(self) -> TagManager:
        return self._tag_manager

    @property
    def library(self) -> LibraryManager:
        return self._library_manager

    @property
    def achievements(self) -> AchievementManager:
        return self._achievement_manager

    @property
    def access(self) -> AccessManager:
        return self._access_manager

    @property
    def analytics(self) -> QueryAnalytics:
        return self.query_analytics

    @property
    def is_remote(self) -> bool:
        return self.session is not None

    # -------------------------------------------------------------------------
    # Notices
    # -------------------------------------------------------------------------

    @property
    def notices(self) -> List[Notice]:
        """Pending failure notices, oldest first."""
        return list(self.context.notices)

    def dismiss_notices(self) -> int:
        """Clear all notices. Returns how many were dismissed."""
        count = len(self.context.notices)
        self.context.notices.clear()
        return count

    # -------------------------------------------------------------------------
    # Entries
    # -------------------------------------------------------------------------

    def _on_entries_changed(self, entries: List[Entry]) -> None:
        if not self._evaluation_suspended:
            self._achievement_manager.evaluate(entries)

    def log_entry(self, draft: EntryDraft, save_to_library: bool = False) -> Entry:
        """
        Log a session.

        Args:
            draft: User input
            save_to_library: Also create a library item from the draft's
                url/actor (ignored when neither is set)

        Returns:
            The stored Entry

        Raises:
            EntryValidationError: If the draft is invalid
        """
        entry = self._entry_manager.create(draft)
        linked = entry.linked_content
        if save_to_library and linked is not None and not linked.is_empty:
            self._library_manager.add(url=linked.url, actor=linked.actor)
        return entry

    # -------------------------------------------------------------------------
    # Settings
    # -------------------------------------------------------------------------

    def language(self) -> str:
        return self._settings_manager.language()

    def set_language(self, language: str) -> str:
        """
        Change the interface language.

        Raises:
            ValidationError: For anything other than 'en' or 'zh'
        """
        result = self._settings_manager.set_language(language)
        if self.session is not None:
            self.session.language = result
        return result

    # -------------------------------------------------------------------------
    # Backups
    # -------------------------------------------------------------------------

    def export_backup(self, path: Union[str, Path], platform: Optional[str] = None) -> Path:
        """
        Write the current snapshot to a backup file.

        Without an explicit platform, the label of the last imported backup
        is reused once, so an import followed by an export gives the same
        file back.
        """
        imported_platform = self.local_backend.load(BACKUP_PLATFORM)
        written = self.export_manager.export_backup(
            self.snapshot,
            path,
            platform or imported_platform,
            insights=self.local_backend.load(INSIGHTS),
        )
        if imported_platform is not None:
            self.local_backend.store(BACKUP_PLATFORM, None)
        return written

    def import_backup(self, path: Union[str, Path], confirm: Optional[ConfirmCallback]) -> bool:
        """
        Overwrite collections with the contents of a backup file.

        The file is validated before confirmation is asked; fields absent
        from the file are left untouched. Data is applied as-is: achievements
        are not re-evaluated against the imported entries.

        Returns:
            True if the backup was applied, False if declined

        Raises:
            BackupError: If the file is not a valid backup (nothing applied)
        """
        fields = self.export_manager.read_backup(path)
        if confirm is not None and not confirm("Importing will overwrite existing data. Continue?"):
            return False

        self._evaluation_suspended = True
        try:
            self._apply_fields(fields, persist=True)
        finally:
            self._evaluation_suspended = False

        # Device-local extras
        if INSIGHTS in fields:
            self.local_backend.store(INSIGHTS, fields[INSIGHTS])
        self.local_backend.store(BACKUP_PLATFORM, fields.get(PLATFORM))

        safe_logger(self.logger).log_operation(
            "backup_imported", {"path": str(path), "fields": sorted(fields)}
        )
        return True

    def _apply_fields(self, fields: Dict[str, Any], persist: bool) -> None:
        """Overwrite snapshot collections from document-shaped fields."""
        if ACHIEVEMENTS in fields:
            self._achievement_manager.replace_all(
                parse_achievements(fields[ACHIEVEMENTS]), persist=persist
            )
        if TAGS in fields:
            self._tag_manager.replace_all(parse_tags(fields[TAGS]), persist=persist)
        if LIBRARY in fields:
            self._library_manager.replace_all(
                parse_library(fields[LIBRARY], self.logger), persist=persist
            )
        if AI_ACCESS in fields:
            self._access_manager.replace(
                AiAccessState.from_dict(fields[AI_ACCESS]), persist=persist
            )
        if LANGUAGE in fields:
            self._settings_manager.replace(parse_language(fields[LANGUAGE]), persist=persist)
        if ENTRIES in fields:
            self._entry_manager.replace_all(
                parse_entries(fields[ENTRIES], self.logger), persist=persist, notify=False
            )

    def wipe(self, confirm: Optional[ConfirmCallback]) -> bool:
        """
        Delete all local data, achievements included.

        An active remote session is logged out first; the remote document
        is not touched.

        Returns:
            True if the wipe ran, False if declined
        """
        if confirm is not None and not confirm("Delete ALL local data? This cannot be undone."):
            return False

        if self.session is not None:
            self.logout()
        self.local_backend.clear()
        self.snapshot.replace_with(Snapshot())
        safe_logger(self.logger).log_operation("local_data_wiped")
        return True

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def login(
        self, uid: str, store: SQLDocumentStore, merge: Optional[bool] = None
    ) -> MergeResult:
        """
        Start a remote session for a user.

        Steps:
            1. Merge the current local snapshot into the user's document
            2. Switch persistence to the remote document
            3. Subscribe; the first push loads the document into the snapshot

        The merge is a one-time migration per user on this device: once it
        has succeeded, later logins skip it unless merge=True is passed, so
        entries deleted remotely are not brought back from local data.

        A session for another user is logged out first.

        Args:
            uid: Authenticated user id
            store: Remote document store
            merge: True to always merge, False to never merge, None to merge
                only if this user has not been migrated from this device

        Returns:
            MergeResult of the merge (skipped=True when no merge ran)

        Raises:
            SyncError: If the store cannot be reached (still logged out)
        """
        if not uid:
            raise SyncError("Permission denied: no authenticated user")
        if self.session is not None:
            self.logout()

        if merge is None:
            merge = not self.is_migrated(uid)
        if merge:
            result = SyncManager(store, self.logger).sync_local_to_remote(uid, self.snapshot)
            self._mark_migrated(uid)
        else:
            result = MergeResult(skipped=True)

        self.context.backend = RemoteBackend(store, uid, logger=self.logger)
        session = UserSession(uid, store, language=self.snapshot.language, logger=self.logger)
        self.session = session
        try:
            session.attach(store.subscribe(uid, self._apply_remote))
        except SyncError:
            self.logout()
            raise

        safe_logger(self.logger).log_operation(
            "user_logged_in",
            {
                "uid": uid,
                "merged": not result.skipped,
                "created": result.created,
                "entries_added": result.entries_added,
                "library_added": result.library_added,
            },
        )
        return result

    def is_migrated(self, uid: str) -> bool:
        """True once local data has been merged into this user's document."""
        migrated = self.local_backend.load(MIGRATED_USERS, [])
        return isinstance(migrated, list) and uid in migrated

    def _mark_migrated(self, uid: str) -> None:
        migrated = self.local_backend.load(MIGRATED_USERS, [])
        if not isinstance(migrated, list):
            migrated = []
        if uid not in migrated:
            self.local_backend.store(MIGRATED_USERS, [*migrated, uid])

    def _apply_remote(self, document: Optional[Dict[str, Any]]) -> None:
        """Subscription callback: the remote document replaces the snapshot."""
        if document is None or self.session is None:
            return

        self.snapshot.replace_with(Snapshot.from_document(document, self.logger))
        self.session.language = self.snapshot.language
        safe_logger(self.logger).log_debug(
            "Snapshot replaced from remote", {"entries": len(self.snapshot.entries)}
        )
        if not self._evaluation_suspended:
            self._achievement_manager.evaluate(self.snapshot.entries)

    def logout(self) -> None:
        """End the remote session and return to local data."""
        if self.session is None:
            return

        uid = self.session.uid
        self.session.close()
        self.session = None
        self.context.backend = self.local_backend
        self.snapshot.replace_with(self.local_backend.load_snapshot())
        safe_logger(self.logger).log_operation("user_logged_out", {"uid": uid})

    # ----- Lifecycle -----
    def close(self) -> None:
        """Log out and release the local database."""
        self.logout()
        self.local_backend.dispose()

    def __enter__(self) -> "InsightDB":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        del exc_type, exc_val, exc_tb
        self.close()
