import click
from flask.cli import with_appcontext

from feedback_portal.extensions import db
from feedback_portal.services.errors import ServiceError
from feedback_portal.services.ratings import get_admin_snapshot, list_officers_with_ratings
from feedback_portal.services.roster import read_roster, replace_roster
from feedback_portal.utils.helpers import format_rating, round_overall


@click.command("init-db")
@with_appcontext
def init_db():
    """Create the officers/feedback tables if missing (no-op when present)."""
    db.create_all()
    click.echo("Tables are ready: officers, feedback")


@click.group()
def roster():
    """Officer roster maintenance."""


@roster.command("import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option("--sheet", default=None, help="Worksheet name (default: first sheet).")
@click.option("--force", is_flag=True, help="Also delete existing feedback, which would otherwise be orphaned.")
@click.option("--dry-run", is_flag=True, help="Read and classify rows; write nothing.")
@with_appcontext
def roster_import(path, sheet, force, dry_run):
    """
    Replace the ENTIRE officer roster from a spreadsheet with
    "First Name", "Last Name", "Job Title" columns.

    Officer ids are regenerated; run before launch, never alongside live traffic.
    """
    try:
        rows = read_roster(path, sheet_name=sheet)
        result = replace_roster(db.session, rows, force=force, dry_run=dry_run)
    except ServiceError as e:
        raise click.ClickException(str(e))

    prefix = "[dry run] " if result.dry_run else ""
    click.echo(f"{prefix}Found {result.found} rows")
    click.echo(f"{prefix}Imported {result.imported} officers")
    click.echo(f"{prefix}Skipped {result.skipped} rows missing a first or last name")
    if result.feedback_deleted:
        click.echo(f"Deleted {result.feedback_deleted} feedback rows")


@click.group()
def ratings():
    """Rating reports."""


@ratings.command("summary")
@with_appcontext
def ratings_summary():
    """Print every officer's rating plus the global average."""
    snapshot = get_admin_snapshot(db.session)
    click.echo(f"Total feedback: {snapshot.total_feedback}")
    click.echo(f"Overall average: {round_overall(snapshot.overall_average_rating):.2f}")
    for r in list_officers_with_ratings(db.session):
        title = f" ({r.job_title})" if r.job_title else ""
        click.echo(f"{r.last_name}, {r.first_name}{title}: {format_rating(r.avg_rating)} [{r.feedback_count}]")


def register_cli(app):
    app.cli.add_command(init_db)
    app.cli.add_command(roster)
    app.cli.add_command(ratings)
