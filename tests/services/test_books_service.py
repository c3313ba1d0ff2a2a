"""Tests for BookService composition and error translation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from sqlalchemy.engine import Engine

from shelfctl.domain.errors import RepositoryError, ServiceError
from shelfctl.domain.result import Failure, Success
from shelfctl.infrastructure.repositories import DatabaseBookRepository, DocumentBookRepository
from shelfctl.services.books import BookService

ErrorFactory = Callable[..., RepositoryError]


class TestAll:
    def test_returns_primary_value(self, stub_repository: type) -> None:
        service = BookService(stub_repository(["Book 1"]), stub_repository(["Other"]))
        assert service.all() == Success(["Book 1"])

    def test_secondary_called_once_after_primary_success(self, stub_repository: type) -> None:
        secondary = stub_repository([])
        BookService(stub_repository(["Book 1"]), secondary).all()
        assert secondary.calls == [("fetch_all", None)]

    def test_failing_secondary_is_invisible(
        self, stub_repository: type, make_repository_error: ErrorFactory
    ) -> None:
        secondary = stub_repository(error=make_repository_error())
        service = BookService(stub_repository(["Book 1", "Book 2"]), secondary)
        assert service.all() == Success(["Book 1", "Book 2"])
        assert secondary.calls == [("fetch_all", None)]

    def test_primary_failure_wraps_error(
        self, stub_repository: type, make_repository_error: ErrorFactory
    ) -> None:
        repo_error = make_repository_error("Error when get books")
        result = BookService(stub_repository(error=repo_error), stub_repository(["x"])).all()
        assert isinstance(result, Failure)
        assert isinstance(result.error, ServiceError)
        assert result.error.message == "Error from service when get books"
        assert result.error.cause is repo_error
        assert result.error.__cause__ is repo_error

    def test_primary_failure_skips_secondary(
        self, stub_repository: type, make_repository_error: ErrorFactory
    ) -> None:
        secondary = stub_repository(["Book 1"])
        result = BookService(stub_repository(error=make_repository_error()), secondary).all()
        assert result.is_failure()
        assert secondary.calls == []


class TestBookById:
    def test_found(self, stub_repository: type) -> None:
        service = BookService(stub_repository(["Book 1", "Book 2"]), stub_repository([]))
        assert service.book_by_id("Book 2") == Success("Book 2")

    def test_absent_is_success_none(self, stub_repository: type) -> None:
        service = BookService(stub_repository(["Book 1"]), stub_repository([]))
        assert service.book_by_id("Book 3") == Success(None)

    def test_secondary_gets_same_id(self, stub_repository: type) -> None:
        secondary = stub_repository([])
        BookService(stub_repository(["Book 1"]), secondary).book_by_id("Book 1")
        assert secondary.calls == [("fetch_by_id", "Book 1")]

    def test_failing_secondary_is_invisible(
        self, stub_repository: type, make_repository_error: ErrorFactory
    ) -> None:
        secondary = stub_repository(error=make_repository_error("Error when get book"))
        service = BookService(stub_repository(["Book 1"]), secondary)
        assert service.book_by_id("Book 1") == Success("Book 1")

    def test_primary_failure_wraps_error(
        self, stub_repository: type, make_repository_error: ErrorFactory
    ) -> None:
        repo_error = make_repository_error("Error when get book")
        service = BookService(stub_repository(error=repo_error), stub_repository(["Book 1"]))
        result = service.book_by_id("Book 1")
        assert isinstance(result, Failure)
        assert result.error.message == "Error from service when get book"
        assert result.error.cause is repo_error
        assert isinstance(result.error.root_cause(), ConnectionError)


class TestSecondaryLogging:
    def test_secondary_failure_logged_at_debug(
        self,
        stub_repository: type,
        make_repository_error: ErrorFactory,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="shelfctl.services.books")
        failing = stub_repository(error=make_repository_error())
        BookService(stub_repository(["a"]), failing).all()
        records = [r for r in caplog.records if r.name == "shelfctl.services.books"]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert records[0].exc_info is not None

    def test_secondary_success_not_logged(
        self, stub_repository: type, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="shelfctl.services.books")
        BookService(stub_repository(["a"]), stub_repository(["b"])).all()
        assert not [r for r in caplog.records if r.name == "shelfctl.services.books"]


class TestWithRealRepositories:
    def test_database_primary_broken_document_secondary(self, seeded_engine: Engine) -> None:
        service = BookService(
            DatabaseBookRepository(seeded_engine),
            DocumentBookRepository('["Book 1", "Book 2"'),
        )
        assert service.all() == Success(["Book 1", "Book 2"])
        assert service.book_by_id("123") == Success(None)

    def test_broken_document_primary(self, seeded_engine: Engine) -> None:
        service = BookService(
            DocumentBookRepository('["Book 1", "Book 2"'),
            DatabaseBookRepository(seeded_engine),
        )
        result = service.all()
        assert isinstance(result, Failure)
        assert result.error.message == "Error from service when get books"
        assert result.error.cause.message == "Error when get books"


class _RaisingRepository:
    """Breaks the repository contract by raising instead of returning."""

    def fetch_all(self) -> object:
        raise RuntimeError("secondary exploded")

    def fetch_by_id(self, book_id: str) -> object:
        raise RuntimeError("secondary exploded")


class TestRaisingSecondary:
    def test_all_keeps_primary_value(self, stub_repository: type) -> None:
        service = BookService(stub_repository(["Book 1"]), _RaisingRepository())
        assert service.all() == Success(["Book 1"])

    def test_book_by_id_keeps_primary_value(self, stub_repository: type) -> None:
        service = BookService(stub_repository(["Book 1"]), _RaisingRepository())
        assert service.book_by_id("Book 1") == Success("Book 1")

    def test_raise_logged_at_debug(
        self, stub_repository: type, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="shelfctl.services.books")
        BookService(stub_repository(["a"]), _RaisingRepository()).all()
        records = [r for r in caplog.records if r.name == "shelfctl.services.books"]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert "raised" in records[0].getMessage()

    def test_non_utf8_document_secondary(self, stub_repository: type, tmp_path: Path) -> None:
        doc = tmp_path / "books.json"
        doc.write_bytes(b'["Book \xff"]')
        service = BookService(stub_repository(["Book 1"]), DocumentBookRepository(path=doc))
        assert service.all() == Success(["Book 1"])
