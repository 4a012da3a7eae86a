"""``flask seed`` commands: shared exercise templates and a demo account."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext
from sqlalchemy.exc import SQLAlchemyError

from simplytrack.core.extensions import db
from simplytrack.seeds import seed_data

LOGGER = logging.getLogger(__name__)


def _seed(*, demo: bool, verbose: bool) -> None:
    try:
        summary = seed_data.run_all(db, demo=demo, verbose=verbose)
    except (SQLAlchemyError, ValueError) as exc:
        db.session.rollback()
        raise click.ClickException(f"Seeding failed: {exc}") from exc

    click.echo("Seed summary:")
    if not summary:
        click.echo("  (no changes)")
        return
    width = max(len(name) for name in summary)
    for table in sorted(summary):
        counters = summary[table]
        click.echo(
            f"  {table.ljust(width)}  created={counters['created']:>2}"
            f"  existing={counters['existing']:>2}"
        )
    if demo:
        click.echo(f"Demo login: {seed_data.DEMO_USER['email']} / {seed_data.DEMO_USER['password']}")


@click.group("seed")
@click.option("--verbose", is_flag=True, help="Log each seeding step.")
@click.pass_context
def seed_cli(ctx: click.Context, verbose: bool) -> None:
    """Development database seeding."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    level = logging.DEBUG if verbose else logging.INFO
    for name in (seed_data.__name__, __name__):
        logging.getLogger(name).setLevel(level)


@seed_cli.command("run")
@click.option("--demo/--no-demo", default=True, show_default=True, help="Also create the demo account.")
@click.pass_context
@with_appcontext
def run_command(ctx: click.Context, demo: bool) -> None:
    """Create shared exercise templates and a demo account (idempotent)."""
    _seed(demo=demo, verbose=ctx.obj["verbose"])


@seed_cli.command("fresh")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation.")
@click.option("--demo/--no-demo", default=True, show_default=True, help="Also create the demo account.")
@click.pass_context
@with_appcontext
def fresh_command(ctx: click.Context, yes: bool, demo: bool) -> None:
    """Drop every table, recreate the schema and seed it again."""
    config = current_app.config
    if not (config.get("DEBUG") or config.get("TESTING")):
        raise click.UsageError(
            "The 'flask seed fresh' command is restricted to non-production environments."
        )
    if not yes:
        click.confirm("Drop and recreate all SimplyTrack tables?", abort=True)

    tables = sorted(db.metadata.tables)
    db.session.remove()
    db.drop_all()
    db.create_all()
    LOGGER.info("Recreated %d tables: %s", len(tables), ", ".join(tables))
    _seed(demo=demo, verbose=ctx.obj["verbose"])
