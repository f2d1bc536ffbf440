#!/usr/bin/env python3
"""
sync_manager.py
---------------
First-login merge of local data into the remote user document.

Merge rules:
    - No remote document: create it from the full local snapshot plus
      createdAt.
    - Remote document exists: merge entries, library and tags only.
      * entries/library: de-duplicated by id; remote items first in their
        own order, then local items whose id the remote lacks. On an id
        collision the remote item wins whole.
      * tags: set union, remote order first, then new local tags.
      * achievements, aiAccess, language: remote value kept.
      * Written in a single update_fields call, and only when new entries
        or library items were found. A tags-only difference is not written.

Usage:
    sync = SyncManager(store, logger=logger)
    result = sync.sync_local_to_remote(uid, local_snapshot)
    if result.written:
        ...
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

# --- Local imports ---
from soloinsight.core.exceptions import SyncError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.dataclasses.snapshot import Snapshot
from soloinsight.utils.dates import now_ms
from .configs.storage_configs import ENTRIES, LIBRARY, TAGS
from .decorators import log_database_operation
from .document_store import SQLDocumentStore


@dataclass
class MergeResult:
    """
    Outcome of a login-time merge.

    Fields:
    - created:       A new remote document was created
    - entries_added: Local entries appended to the remote list
    - library_added: Local library items appended to the remote list
    - tags_added:    Local tags unioned into the remote list
    - written:       The remote document was written at all
    - skipped:       No merge ran (user already migrated from this device)
    """
    created:       bool = False
    entries_added: int  = 0
    library_added: int  = 0
    tags_added:    int  = 0
    written:       bool = False
    skipped:       bool = False


def merge_by_id(
    remote: Iterable[Dict[str, Any]], local: Iterable[Dict[str, Any]]
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Append local records whose id the remote list lacks.

    Args:
        remote: Remote records (order kept, win on collision)
        local: Local records

    Returns:
        (merged list, number of local records added)

    Examples:
        >>> merge_by_id([{"id": "a"}], [{"id": "a"}, {"id": "b"}])
        ([{'id': 'a'}, {'id': 'b'}], 1)
    """
    merged = list(remote or [])
    seen = {item.get("id") for item in merged if isinstance(item, dict)}
    added = 0
    for item in local or []:
        item_id = item.get("id") if isinstance(item, dict) else None
        if item_id is None or item_id in seen:
            continue
        seen.add(item_id)
        merged.append(item)
        added += 1
    return merged, added


def merge_tags(remote: Iterable[str], local: Iterable[str]) -> Tuple[List[str], int]:
    """
    Union of two tag lists, remote order first.

    Returns:
        (merged list, number of local tags added)
    """
    merged = list(remote or [])
    seen = set(merged)
    added = 0
    for tag in local or []:
        if tag not in seen:
            seen.add(tag)
            merged.append(tag)
            added += 1
    return merged, added


class SyncManager:
    """
    Runs the first-login merge against a document store.

    Attributes:
        store: Remote document store
        logger: Optional logger
    """

    def __init__(
        self, store: SQLDocumentStore, logger: Optional[InsightLogger] = None
    ) -> None:
        self.store = store
        self.logger = logger

    @log_database_operation("sync_local_to_remote")
    def sync_local_to_remote(self, uid: str, local: Snapshot) -> MergeResult:
        """
        Merge the local snapshot into the user's remote document.

        Args:
            uid: Authenticated user id
            local: Current local snapshot (not modified)

        Returns:
            MergeResult describing what was written

        Raises:
            SyncError: If the remote store cannot be read or written
        """
        if not uid:
            raise SyncError("Permission denied: no authenticated user")

        remote = self.store.get(uid)

        if remote is None:
            document = local.to_document()
            document["createdAt"] = now_ms()
            self.store.create(uid, document)
            result = MergeResult(
                created=True,
                entries_added=len(local.entries),
                library_added=len(local.library),
                tags_added=len(local.tags),
                written=True,
            )
            safe_logger(self.logger).log_info(
                "Created remote document from local data",
                {"uid": uid, "entries": result.entries_added},
            )
            return result

        entries, entries_added = merge_by_id(
            remote.get(ENTRIES) or [], local.serialize(ENTRIES)
        )
        library, library_added = merge_by_id(
            remote.get(LIBRARY) or [], local.serialize(LIBRARY)
        )
        tags, tags_added = merge_tags(remote.get(TAGS) or [], local.serialize(TAGS))

        result = MergeResult(
            entries_added=entries_added,
            library_added=library_added,
            tags_added=tags_added,
        )

        if entries_added or library_added:
            self.store.update_fields(
                uid, {ENTRIES: entries, LIBRARY: library, TAGS: tags}
            )
            result.written = True

        safe_logger(self.logger).log_info(
            "Merged local data into remote document",
            {
                "uid": uid,
                "entries_added": entries_added,
                "library_added": library_added,
                "tags_added": tags_added,
                "written": result.written,
            },
        )
        return result
