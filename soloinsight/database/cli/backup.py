"""
Backup Commands
---------------

Export, import and wipe.

Commands:
    - export: Write a JSON backup
    - import: Overwrite data from a JSON backup
    - wipe: Delete all local data

Usage:
    # Export to the backup directory
    solo-insight export

    # Restore without prompting
    solo-insight import ~/solo-insight-backup-2026-10-17.json --yes
"""
from pathlib import Path

import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import BackupError, StorageError
from . import confirm_callback, echo_notices, get_db


@click.command()
@click.argument("path", required=False, type=click.Path())
@click.pass_context
def export(ctx, path):
    """Export all data to a JSON backup file."""
    try:
        db = get_db(ctx)
        target = Path(path) if path else ctx.obj["backup_dir"] / db.export_manager.backup_filename()
        written = db.export_backup(target)
        click.echo(f"✅ Backup written: {written}")

    except (StorageError, OSError) as e:
        handle_cli_error(ctx, e, "export", {"path": str(path)})


@click.command("import")
@click.argument("path", type=click.Path(exists=True))
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_backup(ctx, path, yes):
    """Import a JSON backup (overwrites existing data)."""
    try:
        db = get_db(ctx)
        if db.import_backup(Path(path), confirm_callback(yes)):
            click.echo("✅ Backup imported")
        else:
            click.echo("Cancelled")
        echo_notices(db)

    except (BackupError, StorageError) as e:
        handle_cli_error(ctx, e, "import", {"path": path})


@click.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def wipe(ctx, yes):
    """Delete ALL local data, achievements included."""
    try:
        db = get_db(ctx, login=False)
        if db.wipe(confirm_callback(yes)):
            click.echo("🗑️  All local data deleted")
        else:
            click.echo("Cancelled")

    except StorageError as e:
        handle_cli_error(ctx, e, "wipe")
