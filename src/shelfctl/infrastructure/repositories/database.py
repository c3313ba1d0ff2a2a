"""Book repository backed by the ``books`` table via SQLAlchemy Core."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from shelfctl.domain.errors import RepositoryError
from shelfctl.domain.result import Result, attempt
from shelfctl.domain.types import Book, BookId
from shelfctl.infrastructure.database.schema import books


class DatabaseBookRepository:
    """Encapsulates SQL for reading books.

    Every call opens its own connection and releases it on exit, whether
    the query succeeded or the driver raised.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def fetch_all(self) -> Result[list[Book], RepositoryError]:
        return attempt(
            self._select_names,
            catch=(SQLAlchemyError,),
            wrap=lambda exc: RepositoryError("Error when get books", exc),
        )

    def fetch_by_id(self, book_id: BookId) -> Result[Book | None, RepositoryError]:
        return attempt(
            lambda: self._select_name(book_id),
            catch=(SQLAlchemyError,),
            wrap=lambda exc: RepositoryError("Error when get book", exc),
        )

    def _select_names(self) -> list[Book]:
        stmt = select(books.c.name).order_by(books.c.id)
        with self._engine.connect() as conn:
            return [str(name) for name in conn.execute(stmt).scalars()]

    def _select_name(self, book_id: BookId) -> Book | None:
        stmt = select(books.c.name).where(books.c.id == book_id)
        with self._engine.connect() as conn:
            name = conn.execute(stmt).scalars().first()
        return str(name) if name is not None else None

    def __repr__(self) -> str:
        return f"DatabaseBookRepository({self._engine.url!r})"
