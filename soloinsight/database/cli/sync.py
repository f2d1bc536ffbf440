"""
Sync Command
------------

Log in to the remote document store and merge local data into it.

Remote-mode commands only merge on the first login from a device; this
command merges every time it runs.

Usage:
    solo-insight --remote-url postgresql://host/insight --user alice sync
"""
import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import StorageError
from . import get_db, open_store


@click.command()
@click.pass_context
def sync(ctx):
    """Merge local data into the remote user document."""
    remote_url = ctx.obj["remote_url"]
    user = ctx.obj["user"]
    if not remote_url or not user:
        raise click.UsageError("sync needs --remote-url and --user (or config values)")

    try:
        db = get_db(ctx, login=False)
        click.echo(f"🔄 Syncing local data for {user}...")
        result = db.login(user, open_store(ctx, db), merge=True)

        if result.created:
            click.echo("✨ Remote document created from local data")
        elif result.written:
            click.echo(
                f"✅ Merged {result.entries_added} entries, "
                f"{result.library_added} library items, {result.tags_added} tags"
            )
        else:
            click.echo("✅ Already in sync")
        click.echo(f"📊 Remote entries: {len(db.entries.list())}")

    except StorageError as e:
        handle_cli_error(ctx, e, "sync", {"user": user})
