"""
Library Commands
----------------

Personal content library.

Commands:
    - library add: Save a link, actor or title
    - library list: List items (search, favorites)
    - library fav: Toggle favorite
    - library delete: Remove an item
    - library use: Mark an item as used now

Usage:
    solo-insight library add --url example.com/clip --title "Rainy night"
    solo-insight library list --search rain --favorites
"""
import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import StorageError, ValidationError
from soloinsight.utils.dates import to_local
from . import confirm_callback, echo_notices, get_db


@click.group()
@click.pass_context
def library(ctx: click.Context) -> None:
    """Manage the content library."""
    pass


@library.command("add")
@click.option("--url", default=None, help="Link")
@click.option("--actor", default=None, help="Actor/creator")
@click.option("--title", default=None, help="Nickname for the item")
@click.pass_context
def add(ctx, url, actor, title):
    """Add a library item."""
    try:
        db = get_db(ctx)
        item = db.library.add(url=url, actor=actor, title=title)
        click.echo(f"✅ Saved to library ({item.id})")
        echo_notices(db)

    except (StorageError, ValidationError) as e:
        handle_cli_error(ctx, e, "library add")


@library.command("list")
@click.option("--search", "term", default="", help="Filter by title, actor or url")
@click.option("--favorites", is_flag=True, help="Favorites only")
@click.pass_context
def list_items(ctx, term, favorites):
    """List library items."""
    try:
        db = get_db(ctx)
        items = db.library.search(term, favorites_only=favorites)

        if not items:
            click.echo("No library items")
            return

        for item in items:
            star = "★" if item.is_favorite else " "
            label = item.title or item.actor or item.url
            click.echo(f"{star} {label}")
            if item.actor and item.actor != label:
                click.echo(f"    👤 {item.actor}")
            if item.url and item.url != label:
                click.echo(f"    🔗 {item.url}")
            if item.last_used_at:
                click.echo(f"    ⏱️  last used {to_local(item.last_used_at):%Y-%m-%d %H:%M}")
            click.echo(f"    id: {item.id}")

    except StorageError as e:
        handle_cli_error(ctx, e, "library list")


@library.command("fav")
@click.argument("item_id")
@click.pass_context
def fav(ctx, item_id):
    """Toggle an item's favorite flag."""
    try:
        db = get_db(ctx)
        item = db.library.toggle_favorite(item_id)
        if item is None:
            click.echo(f"No library item with id {item_id}")
            return
        click.echo("★ Favorited" if item.is_favorite else "☆ Unfavorited")
        echo_notices(db)

    except StorageError as e:
        handle_cli_error(ctx, e, "library fav", {"item_id": item_id})


@library.command("delete")
@click.argument("item_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_item(ctx, item_id, yes):
    """Delete a library item."""
    try:
        db = get_db(ctx)
        if db.library.delete(item_id, confirm_callback(yes)):
            click.echo("🗑️  Library item deleted")
        else:
            click.echo("Nothing deleted")
        echo_notices(db)

    except StorageError as e:
        handle_cli_error(ctx, e, "library delete", {"item_id": item_id})


@library.command("use")
@click.argument("item_id")
@click.pass_context
def use(ctx, item_id):
    """Mark an item as used now."""
    try:
        db = get_db(ctx)
        item = db.library.mark_used(item_id)
        if item is None:
            click.echo(f"No library item with id {item_id}")
            return
        click.echo(f"⏱️  Marked as used: {item.title or item.actor or item.url}")
        echo_notices(db)

    except StorageError as e:
        handle_cli_error(ctx, e, "library use", {"item_id": item_id})
