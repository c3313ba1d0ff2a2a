"""Command group: read books through the BookService."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from shelfctl.commands._base import ShelfGroup

if TYPE_CHECKING:
    from shelfctl.commands._context import AppContext

_BOOKS_EXAMPLES = """\
  shelfctl books list
  shelfctl --json books list
  shelfctl books get "Book 2"
  shelfctl -q books get "Book 2\""""


@click.group(cls=ShelfGroup, examples=_BOOKS_EXAMPLES)
def books() -> None:
    """List and look up books."""


@books.command(
    name="list",
    examples="""\
  shelfctl books list
  shelfctl -q books list
  shelfctl --json books list""",
)
@click.pass_obj
def list_books(app: AppContext) -> None:
    """List every book from the primary source."""
    titles, error = app.extract("list_books", app.service.all(), [])
    app.emit("list_books", {"books": titles, "count": len(titles)}, error)


@books.command(
    examples="""\
  shelfctl books get "Book 1"
  shelfctl --json books get "Book 1\""""
)
@click.argument("book_id")
@click.pass_obj
def get(app: AppContext, book_id: str) -> None:
    """Look up a single book by id. A missing book is not an error."""
    book, error = app.extract("get_book", app.service.book_by_id(book_id), None)
    app.emit("get_book", {"id": book_id, "book": book}, error)
