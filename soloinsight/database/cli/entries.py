"""
Entry Commands
--------------

Logging, browsing and deleting sessions, plus the tag list.

Commands:
    - log: Log a session
    - list: List sessions, newest first
    - delete: Delete a session
    - tags: Show known tags
    - add-tag: Add a custom tag

Usage:
    # Log 25 minutes at intensity 4, timed with a stopwatch
    solo-insight log --seconds 1490 --intensity 4 --tag Toy --tag Audio

    # Log a past session and keep its link in the library
    solo-insight log -d 15 -i 3 --at "2026-10-01 22:30" \\
        --url example.com/clip --save-to-library

    # Delete without prompting
    solo-insight delete 3f9c0c1e... --yes
"""
import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import StorageError, ValidationError
from soloinsight.dataclasses.entry import EntryDraft, LinkedContent
from soloinsight.database.models.enums import Outcome
from soloinsight.utils.dates import to_local, to_ms
from . import confirm_callback, echo_notices, get_db


@click.command()
@click.option("-d", "--duration", type=int, default=None, help="Duration in minutes")
@click.option(
    "--seconds",
    type=float,
    default=None,
    help="Stopwatch reading in seconds (rounded up to minutes)",
)
@click.option("-i", "--intensity", type=click.IntRange(1, 5), required=True, help="Intensity 1-5")
@click.option(
    "-o",
    "--outcome",
    type=click.Choice(Outcome.choices(), case_sensitive=False),
    default=Outcome.YES.value,
    show_default=True,
    help="How the session ended",
)
@click.option("-t", "--tag", "tag_names", multiple=True, help="Tag (repeatable)")
@click.option("-n", "--note", default="", help="Private note (max 500 characters)")
@click.option(
    "--at",
    "when",
    type=click.DateTime(formats=["%Y-%m-%d %H:%M", "%Y-%m-%dT%H:%M", "%Y-%m-%d"]),
    default=None,
    help="Session time (default: now)",
)
@click.option("--url", default=None, help="Content link used")
@click.option("--actor", default=None, help="Content creator/actor")
@click.option("--save-to-library", is_flag=True, help="Also save url/actor to the library")
@click.pass_context
def log(ctx, duration, seconds, intensity, outcome, tag_names, note, when, url, actor, save_to_library):
    """Log a session."""
    try:
        if duration is None and seconds is None:
            raise click.UsageError("Give --duration or --seconds")
        if duration is None:
            duration = EntryDraft.duration_from_seconds(seconds)

        db = get_db(ctx)
        unlocked = []
        db.achievements.on_unlock(unlocked.append)

        for name in tag_names:
            if name.strip() and not db.tags.exists(name.strip()):
                db.tags.add(name)

        draft = EntryDraft(
            duration=duration,
            intensity=intensity,
            outcome=outcome.upper(),
            tags=list(tag_names),
            note=note,
            timestamp=to_ms(when) if when else None,
            linked_content=LinkedContent(url=url, actor=actor) if (url or actor) else None,
        )
        entry = db.log_entry(draft, save_to_library=save_to_library)
        click.echo(f"✅ Logged {entry.duration} min at intensity {entry.intensity} ({entry.id})")

        for achievement_id in unlocked:
            click.echo(f"🏆 Achievement unlocked: {achievement_id}")
        echo_notices(db)

    except (StorageError, ValidationError) as e:
        handle_cli_error(ctx, e, "log")


@click.command("list")
@click.option("--limit", type=int, default=20, show_default=True, help="Maximum rows")
@click.pass_context
def list_entries(ctx, limit):
    """List sessions, newest first."""
    try:
        db = get_db(ctx)
        entries = sorted(db.entries.list(), key=lambda e: e.timestamp, reverse=True)

        if not entries:
            click.echo("No entries yet")
            return

        click.echo(f"\n📓 Entries ({len(entries)})")
        click.echo("=" * 70)
        for entry in entries[:limit]:
            when = to_local(entry.timestamp).strftime("%Y-%m-%d %H:%M")
            tags = " ".join(f"#{t}" for t in entry.tags)
            click.echo(
                f"{when}  {entry.duration:>3} min  {'★' * entry.intensity:<5}  "
                f"{entry.outcome.display_name:<6}  {tags}"
            )
            click.echo(f"    id: {entry.id}")
            if entry.note:
                click.echo(f"    📝 {entry.note}")

    except StorageError as e:
        handle_cli_error(ctx, e, "list")


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete(ctx, entry_id, yes):
    """Delete a session by id."""
    try:
        db = get_db(ctx)
        if not db.entries.exists(entry_id):
            click.echo(f"No entry with id {entry_id}")
            return

        before = len(db.entries.list())
        remaining = db.entries.delete(entry_id, confirm_callback(yes))
        if len(remaining) < before:
            click.echo("🗑️  Entry deleted")
        else:
            click.echo("Cancelled")
        echo_notices(db)

    except StorageError as e:
        handle_cli_error(ctx, e, "delete", {"entry_id": entry_id})


@click.command()
@click.pass_context
def tags(ctx):
    """Show known tags."""
    try:
        db = get_db(ctx)
        for name in db.tags.list():
            click.echo(f"  • {name}")

    except StorageError as e:
        handle_cli_error(ctx, e, "tags")


@click.command("add-tag")
@click.argument("name")
@click.pass_context
def add_tag(ctx, name):
    """Add a custom tag."""
    try:
        db = get_db(ctx)
        db.tags.add(name)
        click.echo(f"✅ Tag added: {name.strip()}")
        echo_notices(db)

    except (StorageError, ValidationError) as e:
        handle_cli_error(ctx, e, "add-tag", {"tag": name})
