"""Click command classes for shelfctl.

Commands and groups built with ``examples=`` grow an eager ``--examples``
flag that prints the (dedented) examples and exits, and their ``--help``
ends with a one-line pointer to it.
"""

from __future__ import annotations

import inspect
from typing import Any

import click


class _ExamplesMixin:
    """Shared ``examples=`` handling for :class:`ShelfCommand` and :class:`ShelfGroup`."""

    examples: str | None
    params: list[click.Parameter]

    def _init_examples(self, examples: str | None) -> None:
        self.examples = inspect.cleandoc(examples) if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or not self.examples:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        for line in self.examples.splitlines():
            click.echo(f"  {line}" if line else "")
        ctx.exit(0)

    def _examples_hint(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        if self.examples:
            formatter.write_paragraph()
            formatter.write_text(f"Run '{ctx.command_path} --examples' for usage examples.")


class ShelfCommand(_ExamplesMixin, click.Command):
    """Click Command that accepts an ``examples`` parameter."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        self._examples_hint(ctx, formatter)


class ShelfGroup(_ExamplesMixin, click.Group):
    """Click Group whose subcommands default to :class:`ShelfCommand`."""

    command_class = ShelfCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._init_examples(examples)

    def format_epilog(self, ctx: click.Context, formatter: click.HelpFormatter) -> None:
        super().format_epilog(ctx, formatter)
        self._examples_hint(ctx, formatter)
