"""Standalone command: create and seed the shelf database."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from sqlalchemy.exc import SQLAlchemyError

from shelfctl.commands._base import ShelfCommand
from shelfctl.infrastructure.database.engine import init_database, seed_books

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext


@click.command(
    "init",
    cls=ShelfCommand,
    examples="""\
  shelfctl init
  shelfctl init --book "Book 1" --book "Book 2"
  shelfctl --json init --book "Dune\"""",
)
@click.option("--book", "titles", multiple=True, help="Title to seed (repeatable).")
@click.pass_obj
def init_cmd(app: AppContext, titles: tuple[str, ...]) -> None:
    """Create the books table and optionally seed titles. Idempotent."""
    url = app.settings.database_url
    try:
        engine = init_database(url)
    except (SQLAlchemyError, OSError) as exc:
        msg = f"Could not initialize database {url!r}: {exc}"
        raise click.ClickException(msg) from exc
    try:
        seeded = seed_books(engine, titles)
    finally:
        engine.dispose()
    app.emit("init", {"database": url, "seeded": seeded})
