#!/usr/bin/env python3
"""
Solo Insight CLI
----------------

Command-line interface over the InsightDB facade.

This module provides the main CLI group and the shared context setup for
all commands. Settings come from the YAML config file (see core.config);
any option given on the command line overrides the file.

Command Structure:
    - Setup (init, language)
    - Entries (log, list, delete, tags, add-tag)
    - Statistics (stats, month, insights, heatmap)
    - Library (library add/list/fav/delete/use)
    - Achievements & gate (achievements, unlock)
    - Backups (export, import, wipe)
    - Sync (sync)

Remote mode:
    With both --remote-url and --user set (flags or config), every command
    logs in first and then works on the remote data. Local data is merged
    into the user's document only on the first login from this device;
    run `sync` to merge again.

Usage:
    # Log a session
    solo-insight log --duration 20 --intensity 4 --tag Toy

    # Dashboard numbers
    solo-insight stats

    # Merge local data into a remote account
    solo-insight --remote-url sqlite:///remote.db --user alice sync
"""
from pathlib import Path

import click

from soloinsight.core.config import load_config
from soloinsight.core.exceptions import ValidationError
from soloinsight.core.logging_manager import handle_cli_error, setup_logger
from soloinsight.database import InsightDB, SQLDocumentStore
from soloinsight.database.configs.storage_configs import LANGUAGE


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=None,
    help="Path to local storage file",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Path to log directory",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to YAML config file",
)
@click.option(
    "--remote-url",
    default=None,
    help="SQLAlchemy URL of the remote document store",
)
@click.option(
    "--user",
    default=None,
    help="User id for the remote document store",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, config_path, remote_url, user, verbose):
    """Solo Insight: private habit tracking from the terminal."""
    ctx.ensure_object(dict)

    try:
        config = load_config(Path(config_path) if config_path else None)
    except ValidationError as e:
        handle_cli_error(ctx, e, "load_config", {"config": config_path})

    ctx.obj["config"] = config
    ctx.obj["db_path"] = Path(db_path) if db_path else config.db_path
    ctx.obj["log_dir"] = Path(log_dir) if log_dir else config.log_dir
    ctx.obj["backup_dir"] = config.backup_dir
    ctx.obj["remote_url"] = remote_url or config.remote_url
    ctx.obj["user"] = user or config.user
    ctx.obj["verbose"] = verbose
    ctx.obj["logger"] = setup_logger(ctx.obj["log_dir"], "cli")


def get_db(ctx, login: bool = True) -> InsightDB:
    """
    Get or create the storage facade from context.

    Args:
        ctx: Click context
        login: Start the remote session when --remote-url and --user are set

    Raises:
        SyncError: If the remote store cannot be reached during login
    """
    if "db" not in ctx.obj:
        db = InsightDB(
            db_path=ctx.obj["db_path"],
            log_dir=ctx.obj["log_dir"],
        )
        ctx.obj["db"] = db
        ctx.find_root().call_on_close(db.close)

        # Config language only seeds a fresh install
        if db.local_backend.load(LANGUAGE) is None:
            db.set_language(ctx.obj["config"].language)

    db = ctx.obj["db"]
    if login and db.session is None and ctx.obj["remote_url"] and ctx.obj["user"]:
        db.login(ctx.obj["user"], open_store(ctx, db))
    return db


def open_store(ctx, db: InsightDB) -> SQLDocumentStore:
    """Open the remote document store, disposed when the command ends."""
    store = SQLDocumentStore(ctx.obj["remote_url"], logger=db.logger)
    ctx.find_root().call_on_close(store.dispose)
    return store


def confirm_callback(assume_yes: bool):
    """Yes/no callback for managers: None skips the prompt."""
    if assume_yes:
        return None
    return lambda message: click.confirm(f"⚠️  {message}", default=False)


def echo_notices(db: InsightDB) -> None:
    """Print and dismiss pending sync notices."""
    for notice in db.notices:
        click.echo(f"⚠️  {notice.message}", err=True)
    db.dismiss_notices()


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init, language  # noqa: E402
from .entries import log, list_entries, delete, tags, add_tag  # noqa: E402
from .stats import stats, month, insights, heatmap  # noqa: E402
from .library import library  # noqa: E402
from .backup import export, import_backup, wipe  # noqa: E402
from .sync import sync  # noqa: E402
from .access import achievements, unlock  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(language)
cli.add_command(log)
cli.add_command(list_entries)
cli.add_command(delete)
cli.add_command(tags)
cli.add_command(add_tag)
cli.add_command(stats)
cli.add_command(month)
cli.add_command(insights)
cli.add_command(heatmap)
cli.add_command(export)
cli.add_command(import_backup)
cli.add_command(wipe)
cli.add_command(sync)
cli.add_command(achievements)
cli.add_command(unlock)

# Register command groups
cli.add_command(library)


if __name__ == "__main__":
    cli(obj={})
