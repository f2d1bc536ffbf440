#!/usr/bin/env python3
"""
export_manager.py
-----------------
Backup export and import for Solo Insight.

A backup is a single JSON object:

    {
      "entries": [...], "tags": [...], "achievements": {...},
      "library": [...], "aiAccess": {...}, "language": "en",
      "version": 2, "backupDate": "2026-10-17T08:00:00.000000Z",
      "platform": "linux"
    }

Saved insights ("insights") are only written when the device holds some.

Import rules:
    - The file must be a JSON object with at least one of entries/tags
    - Each collection present must have the right shape (list/dict/str)
    - Present fields overwrite their collection whole; absent or unknown
      fields are skipped
    - Any violation raises BackupError and nothing is applied

Writes are staged in a temporary file next to the destination and moved
into place, so an interrupted export never leaves a half-written backup.

Usage:
    exporter = ExportManager(logger=logger)
    path = exporter.export_backup(snapshot, BACKUP_DIR / exporter.backup_filename())
    data = exporter.read_backup(path)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import json
import platform as platform_module
import shutil
import tempfile
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

# --- Local imports ---
from soloinsight.core.exceptions import BackupError
from soloinsight.core.logging_manager import InsightLogger, safe_logger
from soloinsight.dataclasses.snapshot import Snapshot
from soloinsight.utils.dates import iso_utc
from .configs.storage_configs import (
    ACHIEVEMENTS,
    AI_ACCESS,
    ENTRIES,
    INSIGHTS,
    LANGUAGE,
    LIBRARY,
    TAGS,
)
from .decorators import log_database_operation

BACKUP_VERSION = 2
PLATFORM = "platform"

# Field name -> required JSON type for a present field
BACKUP_FIELDS: Dict[str, type] = {
    ENTRIES: list,
    TAGS: list,
    ACHIEVEMENTS: dict,
    LIBRARY: list,
    AI_ACCESS: dict,
    LANGUAGE: str,
    INSIGHTS: list,
}


class ExportManager:
    """
    Builds, writes and validates backup files.

    Attributes:
        logger: Optional logger
    """

    def __init__(self, logger: Optional[InsightLogger] = None) -> None:
        self.logger = logger

    @staticmethod
    def backup_filename(day: Optional[date] = None) -> str:
        """
        Default backup file name for a day.

        Examples:
            >>> ExportManager.backup_filename(date(2026, 10, 17))
            'solo-insight-backup-2026-10-17.json'
        """
        day = day or date.today()
        return f"solo-insight-backup-{day.isoformat()}.json"

    @staticmethod
    def build_backup(
        snapshot: Snapshot,
        platform: Optional[str] = None,
        insights: Optional[List[Any]] = None,
    ) -> Dict[str, Any]:
        """Backup object for a snapshot."""
        data = snapshot.to_document()
        if insights is not None:
            data[INSIGHTS] = list(insights)
        data["version"] = BACKUP_VERSION
        data["backupDate"] = iso_utc()
        data[PLATFORM] = platform or platform_module.system().lower() or "unknown"
        return data

    @log_database_operation("export_backup")
    def export_backup(
        self,
        snapshot: Snapshot,
        path: Union[str, Path],
        platform: Optional[str] = None,
        insights: Optional[List[Any]] = None,
    ) -> Path:
        """
        Write a backup file.

        Args:
            snapshot: Data to export
            path: Destination file (parent directories are created)
            platform: Platform label stored in the file
            insights: Saved insights to carry along (omitted when None)

        Returns:
            Path of the written file
        """
        path = Path(path).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        data = self.build_backup(snapshot, platform, insights)

        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=".solo-insight-",
            suffix=".json",
            delete=False,
        ) as handle:
            json.dump(data, handle, ensure_ascii=False, indent=2)
            temp_path = Path(handle.name)
        shutil.move(str(temp_path), str(path))

        safe_logger(self.logger).log_info(
            "Backup exported",
            {"path": str(path), "entries": len(data[ENTRIES])},
        )
        return path

    @staticmethod
    def validate_backup(data: Any) -> Dict[str, Any]:
        """
        Check the shape of parsed backup data.

        Returns:
            Only the recognized fields that are present

        Raises:
            BackupError: If the data is not a usable backup
        """
        if not isinstance(data, dict):
            raise BackupError("Invalid backup file format: top level is not an object")
        if ENTRIES not in data and TAGS not in data:
            raise BackupError("Invalid backup file format: no entries or tags")

        fields: Dict[str, Any] = {}
        for name, expected in BACKUP_FIELDS.items():
            if name not in data:
                continue
            if not isinstance(data[name], expected):
                raise BackupError(
                    f"Invalid backup file format: '{name}' must be a {expected.__name__}"
                )
            fields[name] = data[name]

        # Platform is a label only; a malformed one is dropped, not rejected
        if isinstance(data.get(PLATFORM), str):
            fields[PLATFORM] = data[PLATFORM]
        return fields

    @log_database_operation("read_backup")
    def read_backup(self, path: Union[str, Path]) -> Dict[str, Any]:
        """
        Parse and validate a backup file.

        Raises:
            BackupError: If the file cannot be read or is not a valid backup
        """
        path = Path(path).expanduser()
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise BackupError(f"Cannot read backup file {path}: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise BackupError(f"Invalid backup file format: {e}") from e

        fields = self.validate_backup(data)
        safe_logger(self.logger).log_debug(
            "Backup file validated", {"path": str(path), "fields": sorted(fields)}
        )
        return fields
