"""Book repository backed by a JSON document (inline text or a file)."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from shelfctl.domain.errors import RepositoryError
from shelfctl.domain.result import Result, attempt
from shelfctl.domain.types import Book, BookId

logger = logging.getLogger(__name__)

_BOOKS = TypeAdapter(list[str])

# Malformed JSON, wrong shape, unreadable or non-UTF-8 file.
_ACCESS_ERRORS = (ValidationError, OSError, UnicodeDecodeError)


class DocumentBookRepository:
    """Parses a JSON array of titles on every call.

    Pass either the raw document text or a *path*; a path is re-read per
    call so edits to the file are picked up.
    """

    def __init__(self, raw_books: str | None = None, *, path: Path | None = None) -> None:
        if (raw_books is None) == (path is None):
            msg = "Provide exactly one of raw_books or path"
            raise ValueError(msg)
        self._raw_books = raw_books
        self._path = path

    def fetch_all(self) -> Result[list[Book], RepositoryError]:
        return attempt(
            self._load,
            catch=_ACCESS_ERRORS,
            wrap=lambda exc: RepositoryError("Error when get books", exc),
        )

    def fetch_by_id(self, book_id: BookId) -> Result[Book | None, RepositoryError]:
        return attempt(
            lambda: next((book for book in self._load() if book == book_id), None),
            catch=_ACCESS_ERRORS,
            wrap=lambda exc: RepositoryError("Error when get book", exc),
        )

    def _load(self) -> list[Book]:
        if self._path is not None:
            logger.debug("Reading book document %s", self._path)
            raw = self._path.read_text(encoding="utf-8")
        else:
            assert self._raw_books is not None
            raw = self._raw_books
        return _BOOKS.validate_json(raw)

    def __repr__(self) -> str:
        source = f"path={self._path!s}" if self._path is not None else "inline"
        return f"DocumentBookRepository({source})"
