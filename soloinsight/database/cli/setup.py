"""
Setup Commands
--------------

Local storage initialization and preferences.

Commands:
    - init: Create local storage and show where data lives
    - language: Show or change the interface language
"""
import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import StorageError, ValidationError
from soloinsight.database.models.enums import Language
from . import echo_notices, get_db


@click.command()
@click.pass_context
def init(ctx):
    """Initialize local storage."""
    try:
        click.echo("🚀 Initializing Solo Insight storage...")
        db = get_db(ctx, login=False)
        click.echo(f"🗄️  Storage: {db.db_path}")
        click.echo(f"📝 Logs:    {ctx.obj['log_dir']}")
        click.echo(f"💾 Backups: {ctx.obj['backup_dir']}")
        click.echo(f"📊 Entries: {len(db.entries.list())}")
        click.echo("✅ Ready!")

    except StorageError as e:
        handle_cli_error(ctx, e, "init")


@click.command()
@click.argument("code", required=False, type=click.Choice(Language.choices()))
@click.pass_context
def language(ctx, code):
    """Show or set the interface language (en, zh)."""
    try:
        db = get_db(ctx)
        if code is None:
            click.echo(db.language())
            return

        db.set_language(code)
        click.echo(f"✅ Language set to {code}")
        echo_notices(db)

    except (StorageError, ValidationError) as e:
        handle_cli_error(ctx, e, "language", {"language": code})
