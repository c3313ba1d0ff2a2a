"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Builds the repositories and the BookService lazily,
and owns the program boundary: extracting values from service Results
and emitting them with the right exit status.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import click
import structlog
from sqlalchemy.exc import ArgumentError

from shelfctl.config.logging import configure_logging
from shelfctl.infrastructure.database.engine import create_db_engine
from shelfctl.infrastructure.repositories import DatabaseBookRepository, DocumentBookRepository
from shelfctl.output.envelope import CommandResult, ErrorPayload
from shelfctl.output.formatters import OutputSettings, format_result
from shelfctl.services.books import BookService

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

    from shelfctl.config.models import SourceKind
    from shelfctl.config.settings import ShelfSettings
    from shelfctl.domain.errors import ServiceError
    from shelfctl.domain.result import Result
    from shelfctl.infrastructure.repositories import BookRepository

T = TypeVar("T")

log = structlog.get_logger("shelfctl.boundary")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Nothing touches the database until a command asks for the service,
    so ``--help`` and ``--version`` stay side-effect free.
    """

    def __init__(self, settings: ShelfSettings) -> None:
        self.settings = settings
        self._engine: Engine | None = None
        self._service: BookService | None = None
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def engine(self) -> Engine:
        """Engine for the configured database URL (created on first access)."""
        if self._engine is None:
            url = self.settings.database_url
            try:
                self._engine = create_db_engine(url)
            except ArgumentError as exc:
                msg = f"Invalid database url {url!r}: {exc}"
                raise click.ClickException(msg) from exc
        return self._engine

    @property
    def service(self) -> BookService:
        """BookService wired from the ``[sources]`` settings."""
        if self._service is None:
            sources = self.settings.sources
            self._service = BookService(
                primary=self._repository(sources.primary),
                secondary=self._repository(sources.secondary),
            )
        return self._service

    def _repository(self, kind: SourceKind) -> BookRepository:
        if kind == "database":
            return DatabaseBookRepository(self.engine)
        path = self.settings.document_path
        if path is not None:
            return DocumentBookRepository(path=path)
        return DocumentBookRepository(self.settings.document.payload)

    def extract(
        self, op: str, result: Result[T, ServiceError], default: T
    ) -> tuple[T, ServiceError | None]:
        """Unwrap *result* with ``get_or_else``.

        On failure the error is logged and *default* is substituted. The
        error is handed back so the caller can still report it.
        """
        failures: list[ServiceError] = []

        def _fallback(error: ServiceError) -> T:
            extra: dict[str, Any] = {"exc_info": error} if self.settings.verbose else {}
            log.error(error.message, op=op, code=error.code, **extra)
            failures.append(error)
            return default

        value = result.get_or_else(_fallback)
        return value, (failures[0] if failures else None)

    def emit(self, op: str, data: dict[str, Any], error: ServiceError | None = None) -> None:
        """Format and output a command outcome with correct exit semantics.

        * Success: writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        result = CommandResult(
            ok=error is None,
            op=op,
            data=data,
            error=ErrorPayload.from_error(error) if error is not None else None,
        )
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

    def close(self) -> None:
        """Dispose the engine, if one was created."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
