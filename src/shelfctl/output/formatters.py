"""Rich/JSON output helpers.

The CLI renders a CommandResult for humans (Rich), for scripts (--quiet,
bare values one per line) or for machines (--json).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from shelfctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from shelfctl.output.envelope import CommandResult


@dataclass(frozen=True)
class OutputSettings:
    """Output-mode flags taken from the global CLI options."""

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False


def format_result(result: CommandResult, *, settings: OutputSettings | None = None) -> str:
    """Format a CommandResult for display.

    JSON wins over quiet; quiet wins over the Rich renderer.
    """
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose)


def render_quiet(result: CommandResult) -> str:
    """Minimal output: titles only, or a single error line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"
    if "books" in result.data:
        return "\n".join(str(book) for book in result.data["books"])
    if "book" in result.data:
        book = result.data["book"]
        return "" if book is None else str(book)
    return f"OK: {result.op}"


def render_result(result: CommandResult, *, verbose: bool = False) -> str:
    """Render a CommandResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()
    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console)
    else:
        _render_error(result, console, verbose=verbose)
    return get_output(console).rstrip("\n")


def _status_line(console: Console, result: CommandResult) -> None:
    console.print(Text("OK", style="shelf.ok"), Text(f"  {result.op}", style="shelf.op"))


def _render_books(result: CommandResult, console: Console) -> None:
    _status_line(console, result)
    books: list[str] = result.data.get("books", [])
    if not books:
        console.print(Text("  (no books)", style="shelf.key"))
        return
    table = Table(show_header=True, header_style="shelf.key", show_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Title", style="shelf.title")
    for index, book in enumerate(books, start=1):
        table.add_row(str(index), book)
    console.print(table)


def _render_book(result: CommandResult, console: Console) -> None:
    _status_line(console, result)
    console.print(Text("  id: ", style="shelf.key"), Text(str(result.data.get("id", ""))), sep="")
    book = result.data.get("book")
    if book is None:
        console.print(Text("  (not found)", style="shelf.key"))
    else:
        console.print(Text("  book: ", style="shelf.key"), Text(book, style="shelf.title"), sep="")


def _render_generic(result: CommandResult, console: Console) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        console.print(Text(f"  {key}: ", style="shelf.key"), Text(str(value)), sep="")


def _render_error(result: CommandResult, console: Console, *, verbose: bool = False) -> None:
    msg = result.error.message if result.error else "Unknown error"
    console.print(
        Text("ERROR", style="shelf.error"),
        Text(f"  {result.op}", style="shelf.op"),
        Text(f" — {msg}"),
        sep="",
    )
    if result.error is None:
        return
    for cause in result.error.detail.get("causes", []):
        line = f"  caused by {cause['type']}"
        if cause.get("message"):
            line += f": {cause['message']}"
        console.print(Text(line, style="shelf.cause"))
    if verbose:
        console.print(Text(f"  code: {result.error.code}", style="shelf.key"))


_OP_RENDERERS: dict[str, Callable[[CommandResult, Any], None]] = {
    "list_books": _render_books,
    "get_book": _render_book,
}
