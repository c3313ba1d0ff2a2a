"""Shared pytest fixtures and test helpers for shelfctl tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from shelfctl.domain.errors import RepositoryError
from shelfctl.domain.result import Failure, Result, Success
from shelfctl.infrastructure.database.engine import (
    default_database_url,
    init_database,
    seed_books,
)


class StubRepository:
    """In-memory BookRepository returning canned results and counting calls."""

    def __init__(
        self,
        books: list[str] | None = None,
        *,
        error: RepositoryError | None = None,
    ) -> None:
        self._books = books or []
        self._error = error
        self.calls: list[tuple[str, str | None]] = []

    def fetch_all(self) -> Result[list[str], RepositoryError]:
        self.calls.append(("fetch_all", None))
        if self._error is not None:
            return Failure(self._error)
        return Success(list(self._books))

    def fetch_by_id(self, book_id: str) -> Result[str | None, RepositoryError]:
        self.calls.append(("fetch_by_id", book_id))
        if self._error is not None:
            return Failure(self._error)
        return Success(next((b for b in self._books if b == book_id), None))


def repository_error(message: str = "Error when get books") -> RepositoryError:
    """A RepositoryError with a realistic low-level cause."""
    return RepositoryError(message, ConnectionError("connection refused"))


@pytest.fixture
def stub_repository() -> type[StubRepository]:
    """The StubRepository class, for building primaries and secondaries."""
    return StubRepository


@pytest.fixture
def make_repository_error() -> Callable[..., RepositoryError]:
    """Factory for RepositoryError values with a low-level cause."""
    return repository_error


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    """Default SQLite URL under a temporary shelf root."""
    return default_database_url(tmp_path)


@pytest.fixture
def db_engine(db_url: str) -> Generator[Engine]:
    """Initialized engine with an empty ``books`` table."""
    engine = init_database(db_url)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def seeded_engine(db_engine: Engine) -> Engine:
    """Engine whose ``books`` table holds "Book 1" and "Book 2"."""
    seed_books(db_engine, ["Book 2", "Book 1"])
    return db_engine


@pytest.fixture
def _isolated_shelf(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp shelf root with no stray config or env overrides.

    Use via ``@pytest.mark.usefixtures("_isolated_shelf")`` on command test
    classes.
    """
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SHELFCTL_CONFIG", raising=False)
    for name in (
        "SHELFCTL_SOURCES__PRIMARY",
        "SHELFCTL_SOURCES__SECONDARY",
        "SHELFCTL_DOCUMENT__PAYLOAD",
        "SHELFCTL_DOCUMENT__PATH",
        "SHELFCTL_DATABASE__URL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() side effects between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    shelf = logging.getLogger("shelfctl")
    shelf_level = shelf.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    shelf.setLevel(shelf_level)
