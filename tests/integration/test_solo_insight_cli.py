#!/usr/bin/env python3
"""
Integration tests for the solo-insight CLI.

Runs commands end to end against a temporary local store and, for the
sync tests, a temporary SQLite remote store.
"""
import json
import re

import pytest
from click.testing import CliRunner

from soloinsight.database.cli import cli
from soloinsight.database.document_store import SQLDocumentStore
from soloinsight.database.managers import PASSPHRASE

ID_PATTERN = re.compile(r"\(([0-9a-f]{32})\)")


class TestSoloInsightCLI:
    """Test CLI commands with temporary storage."""

    @pytest.fixture
    def runner(self):
        """Create Click test runner."""
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        """Temporary storage, log and config locations."""
        return {
            "db_path": tmp_path / "data" / "solo_insight.db",
            "log_dir": tmp_path / "logs",
            "config": tmp_path / "config.yaml",
            "remote_url": f"sqlite:///{tmp_path / 'remote.db'}",
            "tmp": tmp_path,
        }

    def invoke_cli(self, runner, test_dirs, args, remote_user=None, **kwargs):
        """Helper to invoke CLI with test configuration."""
        base_args = [
            "--db-path", str(test_dirs["db_path"]),
            "--log-dir", str(test_dirs["log_dir"]),
            "--config", str(test_dirs["config"]),
        ]
        if remote_user:
            base_args += ["--remote-url", test_dirs["remote_url"], "--user", remote_user]
        return runner.invoke(cli, base_args + args, **kwargs)

    def log_session(self, runner, test_dirs, *extra, remote_user=None):
        result = self.invoke_cli(
            runner, test_dirs, ["log", "-d", "20", "-i", "4", *extra], remote_user=remote_user
        )
        assert result.exit_code == 0, result.output
        return ID_PATTERN.search(result.output).group(1)

    def test_cli_help(self, runner):
        """Test that CLI help lists the commands."""
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("log", "stats", "export", "import", "sync", "library"):
            assert name in result.output

    def test_init_command(self, runner, test_dirs):
        """Test 'init' creates local storage."""
        result = self.invoke_cli(runner, test_dirs, ["init"])

        assert result.exit_code == 0, result.output
        assert "Ready!" in result.output
        assert "Entries: 0" in result.output
        assert test_dirs["db_path"].exists()

    def test_log_and_list(self, runner, test_dirs):
        """Test logging a session and listing it."""
        entry_id = self.log_session(runner, test_dirs, "-t", "Toy", "-n", "quiet evening")

        result = self.invoke_cli(runner, test_dirs, ["list"])

        assert result.exit_code == 0
        assert f"id: {entry_id}" in result.output
        assert "#Toy" in result.output
        assert "quiet evening" in result.output

    def test_first_log_announces_achievement(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["log", "-d", "45", "-i", "3"])

        assert result.exit_code == 0, result.output
        assert "Achievement unlocked: first_log" in result.output
        assert "Achievement unlocked: marathon" in result.output

    def test_log_from_stopwatch_seconds(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["log", "--seconds", "61", "-i", "2"])
        assert "Logged 2 min" in result.output

    def test_log_requires_duration(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["log", "-i", "2"])
        assert result.exit_code == 2
        assert "--duration or --seconds" in result.output

    def test_log_rejects_out_of_range_intensity(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["log", "-d", "5", "-i", "9"])
        assert result.exit_code == 2

    def test_log_adds_new_tags(self, runner, test_dirs):
        self.log_session(runner, test_dirs, "-t", "Morning")
        result = self.invoke_cli(runner, test_dirs, ["tags"])
        assert "Morning" in result.output

    def test_delete_entry(self, runner, test_dirs):
        entry_id = self.log_session(runner, test_dirs)

        missing = self.invoke_cli(runner, test_dirs, ["delete", "nope", "--yes"])
        assert "No entry with id nope" in missing.output

        declined = self.invoke_cli(runner, test_dirs, ["delete", entry_id], input="n\n")
        assert "Cancelled" in declined.output

        deleted = self.invoke_cli(runner, test_dirs, ["delete", entry_id, "--yes"])
        assert "Entry deleted" in deleted.output

        listing = self.invoke_cli(runner, test_dirs, ["list"])
        assert "No entries yet" in listing.output

    def test_stats_and_insights(self, runner, test_dirs):
        self.log_session(runner, test_dirs)

        stats = self.invoke_cli(runner, test_dirs, ["stats"])
        assert stats.exit_code == 0, stats.output
        assert re.search(r"Sessions \(30d\):\s+1\b", stats.output)
        assert re.search(r"Completion rate:\s+100%", stats.output)

        insights = self.invoke_cli(runner, test_dirs, ["insights"])
        assert insights.exit_code == 0, insights.output
        assert re.search(r"Sessions:\s+1\b", insights.output)

        for command in (["month"], ["heatmap"], ["month", "--month", "2026-01"]):
            result = self.invoke_cli(runner, test_dirs, command)
            assert result.exit_code == 0, result.output

    def test_insights_empty(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["insights"])
        assert "No entries yet" in result.output

    def test_language(self, runner, test_dirs):
        assert self.invoke_cli(runner, test_dirs, ["language"]).output.strip() == "en"
        self.invoke_cli(runner, test_dirs, ["language", "zh"])
        assert self.invoke_cli(runner, test_dirs, ["language"]).output.strip() == "zh"

    def test_config_language_seeds_fresh_install(self, runner, test_dirs):
        test_dirs["config"].write_text("language: zh\n", encoding="utf-8")
        result = self.invoke_cli(runner, test_dirs, ["language"])
        assert result.output.strip() == "zh"

    def test_invalid_config_fails(self, runner, test_dirs):
        test_dirs["config"].write_text("language: fr\n", encoding="utf-8")
        result = self.invoke_cli(runner, test_dirs, ["init"])
        assert result.exit_code == 1
        assert "ValidationError" in result.output

    def test_export_import_round_trip(self, runner, test_dirs):
        """Test export, wipe, then import restores the entry."""
        entry_id = self.log_session(runner, test_dirs)
        backup = test_dirs["tmp"] / "backup.json"

        exported = self.invoke_cli(runner, test_dirs, ["export", str(backup)])
        assert exported.exit_code == 0, exported.output
        assert json.loads(backup.read_text(encoding="utf-8"))["entries"][0]["id"] == entry_id

        wiped = self.invoke_cli(runner, test_dirs, ["wipe", "--yes"])
        assert "All local data deleted" in wiped.output

        imported = self.invoke_cli(runner, test_dirs, ["import", str(backup), "--yes"])
        assert "Backup imported" in imported.output

        listing = self.invoke_cli(runner, test_dirs, ["list"])
        assert entry_id in listing.output

    def test_import_invalid_backup(self, runner, test_dirs):
        backup = test_dirs["tmp"] / "bad.json"
        backup.write_text(json.dumps({"library": []}), encoding="utf-8")

        result = self.invoke_cli(runner, test_dirs, ["import", str(backup), "--yes"])

        assert result.exit_code == 1
        assert "BackupError" in result.output

    def test_library_workflow(self, runner, test_dirs):
        added = self.invoke_cli(
            runner, test_dirs, ["library", "add", "--url", "clip.test", "--actor", "Ann"]
        )
        assert added.exit_code == 0, added.output
        item_id = ID_PATTERN.search(added.output).group(1)

        fav = self.invoke_cli(runner, test_dirs, ["library", "fav", item_id])
        assert "★ Favorited" in fav.output

        listing = self.invoke_cli(runner, test_dirs, ["library", "list", "--favorites"])
        assert "https://clip.test" in listing.output

        used = self.invoke_cli(runner, test_dirs, ["library", "use", item_id])
        assert "Marked as used" in used.output

        deleted = self.invoke_cli(runner, test_dirs, ["library", "delete", item_id, "--yes"])
        assert "Library item deleted" in deleted.output

        empty = self.invoke_cli(runner, test_dirs, ["library", "list"])
        assert "No library items" in empty.output

    def test_log_save_to_library(self, runner, test_dirs):
        self.log_session(runner, test_dirs, "--actor", "Ann", "--save-to-library")
        listing = self.invoke_cli(runner, test_dirs, ["library", "list"])
        assert "Ann" in listing.output

    def test_unlock(self, runner, test_dirs):
        wrong = self.invoke_cli(runner, test_dirs, ["unlock", "--passphrase", "guess"])
        assert wrong.exit_code == 1
        assert "4 attempts left" in wrong.output

        right = self.invoke_cli(runner, test_dirs, ["unlock"], input=f"{PASSPHRASE}\n")
        assert right.exit_code == 0, right.output
        assert "AI insights unlocked" in right.output

    def test_unlock_lockout(self, runner, test_dirs):
        for _ in range(5):
            self.invoke_cli(runner, test_dirs, ["unlock", "--passphrase", "guess"])

        result = self.invoke_cli(runner, test_dirs, ["unlock", "--passphrase", PASSPHRASE])

        assert result.exit_code == 2
        assert "AccessLockedError" in result.output

    def test_achievements(self, runner, test_dirs):
        self.log_session(runner, test_dirs)
        result = self.invoke_cli(runner, test_dirs, ["achievements"])
        assert "✅ First Step" in result.output
        assert "🔒 Marathon" in result.output


class TestSyncCLI:
    """Test the remote session through the CLI."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def test_dirs(self, tmp_path):
        return {
            "db_path": tmp_path / "data" / "solo_insight.db",
            "log_dir": tmp_path / "logs",
            "config": tmp_path / "config.yaml",
            "remote_url": f"sqlite:///{tmp_path / 'remote.db'}",
        }

    def invoke_cli(self, runner, test_dirs, args, user=None):
        base_args = [
            "--db-path", str(test_dirs["db_path"]),
            "--log-dir", str(test_dirs["log_dir"]),
            "--config", str(test_dirs["config"]),
        ]
        if user:
            base_args += ["--remote-url", test_dirs["remote_url"], "--user", user]
        return runner.invoke(cli, base_args + args)

    def remote_document(self, test_dirs, user):
        store = SQLDocumentStore(test_dirs["remote_url"])
        try:
            return store.get(user)
        finally:
            store.dispose()

    def test_sync_requires_remote_settings(self, runner, test_dirs):
        result = self.invoke_cli(runner, test_dirs, ["sync"])
        assert result.exit_code == 2
        assert "--remote-url and --user" in result.output

    def test_sync_creates_then_noops(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["log", "-d", "10", "-i", "3"])

        first = self.invoke_cli(runner, test_dirs, ["sync"], user="alice")
        assert first.exit_code == 0, first.output
        assert "Remote document created from local data" in first.output
        assert "Remote entries: 1" in first.output

        second = self.invoke_cli(runner, test_dirs, ["sync"], user="alice")
        assert "Already in sync" in second.output

    def test_remote_commands_write_remote_document(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["sync"], user="alice")

        result = self.invoke_cli(runner, test_dirs, ["log", "-d", "35", "-i", "5"], user="alice")
        assert result.exit_code == 0, result.output

        document = self.remote_document(test_dirs, "alice")
        assert len(document["entries"]) == 1
        assert "marathon" in document["achievements"]

        local = self.invoke_cli(runner, test_dirs, ["list"])
        assert "No entries yet" in local.output

    def test_merge_into_existing_document(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["sync"], user="alice")
        self.invoke_cli(runner, test_dirs, ["log", "-d", "10", "-i", "3"])

        result = self.invoke_cli(runner, test_dirs, ["sync"], user="alice")

        assert "Merged 1 entries" in result.output
        assert len(self.remote_document(test_dirs, "alice")["entries"]) == 1

    def test_deleted_remote_entry_stays_deleted(self, runner, test_dirs):
        """Test later remote commands do not merge local entries back in."""
        logged = self.invoke_cli(runner, test_dirs, ["log", "-d", "10", "-i", "3"])
        entry_id = ID_PATTERN.search(logged.output).group(1)

        first = self.invoke_cli(runner, test_dirs, ["list"], user="alice")
        assert entry_id in first.output

        deleted = self.invoke_cli(runner, test_dirs, ["delete", entry_id, "--yes"], user="alice")
        assert "Entry deleted" in deleted.output

        result = self.invoke_cli(runner, test_dirs, ["list"], user="alice")
        assert result.exit_code == 0, result.output
        assert entry_id not in result.output
        assert self.remote_document(test_dirs, "alice")["entries"] == []

    def test_local_entries_after_migration_need_sync(self, runner, test_dirs):
        self.invoke_cli(runner, test_dirs, ["list"], user="alice")
        self.invoke_cli(runner, test_dirs, ["log", "-d", "10", "-i", "3"])

        self.invoke_cli(runner, test_dirs, ["stats"], user="alice")
        assert self.remote_document(test_dirs, "alice")["entries"] == []

        result = self.invoke_cli(runner, test_dirs, ["sync"], user="alice")
        assert "Merged 1 entries" in result.output

    @pytest.mark.parametrize("command", [["list"], ["sync"]])
    def test_remote_store_disposed_after_command(self, runner, test_dirs, monkeypatch, command):
        disposed = []
        original_dispose = SQLDocumentStore.dispose

        def tracking_dispose(store):
            disposed.append(store)
            original_dispose(store)

        monkeypatch.setattr(SQLDocumentStore, "dispose", tracking_dispose)

        result = self.invoke_cli(runner, test_dirs, command, user="alice")

        assert result.exit_code == 0, result.output
        assert len(disposed) == 1
