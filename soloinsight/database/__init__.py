#!/usr/bin/env python3
"""
Solo Insight Storage Package
----------------------------
Storage, sync and statistics for Solo Insight.

This package provides:
- The InsightDB facade
- Local (SQLite slot) and remote (per-user document) backends
- First-login merge
- Slot managers (entries, tags, library, achievements, access gate)
- Statistics over the entry list
- Backup export/import
"""

from .manager import InsightDB
from soloinsight.core.exceptions import (
    AccessLockedError,
    BackupError,
    EntryValidationError,
    StorageError,
    SyncError,
    ValidationError,
)
from .backends import LocalBackend, RemoteBackend, StorageBackend
from .document_store import SQLDocumentStore, Subscription
from .export_manager import ExportManager
from .query_analytics import QueryAnalytics
from .session import UserSession
from .sync_manager import MergeResult, SyncManager
from .decorators import (
    log_database_operation,
    handle_sync_errors,
)

__all__ = [
    # Main facade
    "InsightDB",
    # Exceptions
    "StorageError",
    "SyncError",
    "BackupError",
    "ValidationError",
    "EntryValidationError",
    "AccessLockedError",
    # Backends
    "StorageBackend",
    "LocalBackend",
    "RemoteBackend",
    "SQLDocumentStore",
    "Subscription",
    # Services
    "ExportManager",
    "QueryAnalytics",
    "SyncManager",
    "MergeResult",
    "UserSession",
    # Decorators
    "log_database_operation",
    "handle_sync_errors",
]
