"""Subcommand modules for shelfctl.

Provides register_commands() which uses deferred imports to keep
``shelfctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register command groups and standalone commands on the root CLI group."""
    from shelfctl.commands.books import books
    from shelfctl.commands.init_cmd import init_cmd

    cli.add_command(books)
    cli.add_command(init_cmd)
