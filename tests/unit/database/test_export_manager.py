"""
test_export_manager.py
----------------------
Unit tests for backup export and validation.
"""
import json
from datetime import date

import pytest

from soloinsight.core.exceptions import BackupError
from soloinsight.dataclasses.snapshot import Snapshot
from soloinsight.database.export_manager import BACKUP_VERSION, ExportManager


@pytest.fixture
def exporter():
    return ExportManager()


class TestExportBackup:
    """Test ExportManager.export_backup()."""

    def test_filename(self):
        assert (
            ExportManager.backup_filename(date(2026, 10, 17))
            == "solo-insight-backup-2026-10-17.json"
        )

    def test_writes_all_fields(self, exporter, tmp_dir, make_entry):
        snapshot = Snapshot(entries=[make_entry(tags=["Toy"])], language="zh")
        path = exporter.export_backup(snapshot, tmp_dir / "out" / "b.json", platform="linux")

        data = json.loads(path.read_text(encoding="utf-8"))
        assert set(data) == {
            "entries", "tags", "achievements", "library", "aiAccess",
            "language", "version", "backupDate", "platform",
        }
        assert data["version"] == BACKUP_VERSION
        assert data["platform"] == "linux"
        assert data["language"] == "zh"
        assert data["backupDate"].endswith("Z")

    def test_no_temp_files_left(self, exporter, tmp_dir):
        exporter.export_backup(Snapshot(), tmp_dir / "b.json")
        assert [p.name for p in tmp_dir.iterdir()] == ["b.json"]

    def test_overwrites_existing(self, exporter, tmp_dir):
        target = tmp_dir / "b.json"
        target.write_text("old", encoding="utf-8")
        exporter.export_backup(Snapshot(), target)
        assert json.loads(target.read_text(encoding="utf-8"))["entries"] == []


class TestValidateBackup:
    """Test ExportManager.validate_backup() and read_backup()."""

    def test_only_known_present_fields_returned(self):
        fields = ExportManager.validate_backup(
            {"tags": ["A"], "language": "en", "version": 2, "extra": 1}
        )
        assert fields == {"tags": ["A"], "language": "en"}

    @pytest.mark.parametrize(
        "data",
        [
            [],
            "text",
            {"library": []},
            {"entries": {}},
            {"tags": "A"},
            {"entries": [], "achievements": []},
            {"entries": [], "language": 3},
        ],
    )
    def test_rejects_invalid(self, data):
        with pytest.raises(BackupError):
            ExportManager.validate_backup(data)

    def test_read_invalid_json(self, exporter, tmp_dir):
        path = tmp_dir / "bad.json"
        path.write_text("{oops", encoding="utf-8")
        with pytest.raises(BackupError, match="Invalid backup file format"):
            exporter.read_backup(path)

    def test_read_missing_file(self, exporter, tmp_dir):
        with pytest.raises(BackupError, match="Cannot read"):
            exporter.read_backup(tmp_dir / "absent.json")

    def test_read_round_trip(self, exporter, tmp_dir, make_entry):
        snapshot = Snapshot(entries=[make_entry()])
        path = exporter.export_backup(snapshot, tmp_dir / "b.json")
        fields = exporter.read_backup(path)
        assert fields["entries"] == snapshot.serialize("entries")
