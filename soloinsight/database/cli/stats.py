"""
Statistics Commands
-------------------

Derived views over the entry list.

Commands:
    - stats: Dashboard numbers and the last 7 days
    - month: Monthly totals and that month's sessions
    - insights: All-time patterns
    - heatmap: Month calendar with activity levels

Usage:
    solo-insight stats
    solo-insight month --month 2026-09
    solo-insight heatmap
"""
from datetime import date

import click

from soloinsight.core.logging_manager import handle_cli_error
from soloinsight.core.exceptions import StorageError
from soloinsight.utils.dates import to_local
from . import get_db

MONTH_OPTION = click.option(
    "--month",
    "month_ref",
    type=click.DateTime(formats=["%Y-%m"]),
    default=None,
    help="Month as YYYY-MM (default: current month)",
)

HEAT_SYMBOLS = ["·", "░", "▒", "▓", "█"]


@click.command()
@click.pass_context
def stats(ctx):
    """Show dashboard statistics."""
    try:
        db = get_db(ctx)
        entries = db.entries.list()
        dashboard = db.analytics.get_dashboard(entries)

        click.echo("\n📊 Last 30 days")
        click.echo("=" * 40)
        click.echo(f"Sessions (30d):     {dashboard['count30']}")
        click.echo(f"Sessions (90d):     {dashboard['count90']}")
        click.echo(f"Avg duration:       {dashboard['avgDuration']} min")
        click.echo(f"Avg intensity:      {dashboard['avgIntensity']:.1f}/5")
        click.echo(f"Completion rate:    {dashboard['outcomeRate']}%")
        click.echo(f"Longest break:      {dashboard['maxInterval']} days")

        click.echo("\n📈 Last 7 days")
        for bucket in db.analytics.get_daily_series(entries):
            bar = "█" * bucket.count
            click.echo(f"  {bucket.label}  {bar:<6} {bucket.count}  avg {bucket.intensity:.1f}")

    except StorageError as e:
        handle_cli_error(ctx, e, "stats")


@click.command()
@MONTH_OPTION
@click.pass_context
def month(ctx, month_ref):
    """Show totals and sessions for one month."""
    try:
        db = get_db(ctx)
        reference = month_ref.date() if month_ref else date.today()
        result = db.analytics.get_monthly(db.entries.list(), reference)

        click.echo(f"\n📅 {reference.strftime('%B %Y')}")
        click.echo("=" * 40)
        click.echo(f"Sessions:       {result.total_sessions}")
        click.echo(f"Total duration: {result.total_duration} min")
        click.echo(f"Avg intensity:  {result.avg_intensity:.1f}")

        for entry in result.entries:
            when = to_local(entry.timestamp).strftime("%d %a %H:%M")
            click.echo(f"  • {when}  {entry.duration} min  i{entry.intensity}  {entry.outcome.display_name}")

    except StorageError as e:
        handle_cli_error(ctx, e, "month")


@click.command()
@click.pass_context
def insights(ctx):
    """Show all-time patterns."""
    try:
        db = get_db(ctx)
        data = db.analytics.get_insights(db.entries.list())

        if not data["count"]:
            click.echo("No entries yet")
            return

        click.echo("\n🔍 Deep insights")
        click.echo("=" * 40)
        click.echo(f"Sessions:        {data['count']}")
        click.echo(f"Avg duration:    {data['avgDuration']} min")
        click.echo(f"Avg intensity:   {data['avgIntensity']:.1f}/5")
        click.echo(f"Longest streak:  {data['longestStreak']} sessions")
        click.echo(f"Avg interval:    {data['avgInterval']:.1f} days")
        click.echo(f"Edging rate:     {data['edgingRate']}%")

        click.echo("\n🕑 Time of day")
        for index, count in enumerate(data["timeOfDay"]):
            click.echo(f"  {index * 2:02d}-{index * 2 + 2:02d}h  {'█' * count} {count}")

        if data["topTags"]:
            click.echo("\n🏷️  Top tags")
            for stat in data["topTags"]:
                click.echo(f"  #{stat.tag:<16} {stat.count:>3}×  avg {stat.avg_intensity:.1f}")

        click.echo("\n🗓️  Recent sessions")
        for point in data["recent"]:
            click.echo(f"  {point['date']}  {point['duration']:>3} min  i{point['intensity']}")

    except StorageError as e:
        handle_cli_error(ctx, e, "insights")


@click.command()
@MONTH_OPTION
@click.pass_context
def heatmap(ctx, month_ref):
    """Show a month calendar shaded by activity."""
    try:
        db = get_db(ctx)
        reference = month_ref.date() if month_ref else date.today()
        levels = db.analytics.get_heatmap(db.entries.list(), reference)

        click.echo(f"\n🔥 {reference.strftime('%B %Y')}")
        click.echo(" S  M  T  W  T  F  S")

        days = sorted(levels)
        padding = (days[0].weekday() + 1) % 7
        cells = ["  "] * padding + [f" {HEAT_SYMBOLS[levels[day]]}" for day in days]
        for start in range(0, len(cells), 7):
            click.echo(" ".join(cells[start:start + 7]))

    except StorageError as e:
        handle_cli_error(ctx, e, "heatmap")
