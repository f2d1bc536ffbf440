"""
Achievement & Gate Commands
---------------------------

Commands:
    - achievements: Show locked/unlocked achievements
    - unlock: Enter the AI feature passphrase
"""
import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import AccessLockedError, StorageError
from soloinsight.utils.dates import to_local
from . import echo_notices, get_db


@click.command()
@click.pass_context
def achievements(ctx):
    """Show achievements."""
    try:
        db = get_db(ctx)
        click.echo("\n🏆 Achievements")
        click.echo("=" * 50)
        for config, unlocked_at in db.achievements.status():
            if unlocked_at is None:
                click.echo(f"🔒 {config.title:<12} {config.description}")
            else:
                when = to_local(unlocked_at).strftime("%Y-%m-%d")
                click.echo(f"✅ {config.title:<12} {config.description} ({when})")

    except StorageError as e:
        handle_cli_error(ctx, e, "achievements")


@click.command()
@click.option(
    "--passphrase",
    prompt=True,
    hide_input=True,
    help="AI feature passphrase",
)
@click.pass_context
def unlock(ctx, passphrase):
    """Unlock the AI insights feature."""
    try:
        db = get_db(ctx)
        if db.access.attempt(passphrase):
            click.echo("🔓 AI insights unlocked")
        else:
            click.echo(
                f"❌ Wrong passphrase ({db.access.remaining_attempts()} attempts left)",
                err=True,
            )
        echo_notices(db)
        if not db.access.is_unlocked():
            ctx.exit(1)

    except AccessLockedError as e:
        handle_cli_error(ctx, e, "unlock", exit_code=2)
    except StorageError as e:
        handle_cli_error(ctx, e, "unlock")
