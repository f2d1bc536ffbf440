"""
Solo Insight
============

A personal habit tracker: log private sessions, see derived statistics,
unlock achievements and keep a small library of reference content.

Data lives in a local SQLite key-value store or, after login, in one
remote JSON document per user; the first login merges local data into
that document.

Main Components:
    - database: Storage facade, backends, sync, managers, statistics
    - dataclasses: Entry, ContentItem, AiAccessState and Snapshot records
    - core: Logging, validation, configuration, paths, exceptions
    - utils: Timestamp helpers

Primary Interfaces:
    - soloinsight.database.cli: Command-line interface (solo-insight)
    - soloinsight.database.manager.InsightDB: Main storage interface

Example Usage:
    >>> from soloinsight import InsightDB, EntryDraft
    >>> from soloinsight.core.paths import DB_PATH, LOG_DIR
    >>> db = InsightDB(db_path=DB_PATH, log_dir=LOG_DIR)
    >>> db.log_entry(EntryDraft(duration=20, intensity=4, tags=["Relaxation"]))
"""

__version__ = "1.0.0"

# Expose primary interfaces for convenience
from soloinsight.database.manager import InsightDB
from soloinsight.dataclasses.entry import Entry, EntryDraft
from soloinsight.core.paths import DATA_DIR, DB_PATH, LOG_DIR, BACKUP_DIR

__all__ = [
    "InsightDB",
    "Entry",
    "EntryDraft",
    "DATA_DIR",
    "DB_PATH",
    "LOG_DIR",
    "BACKUP_DIR",
]
