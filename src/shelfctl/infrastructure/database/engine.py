"""Database engine setup.

SQLite is the default backing store at ``{shelf_root}/.shelfctl/shelf.db``;
any SQLAlchemy URL can be configured instead. SQLAlchemy Core (not ORM)
is used because shelfctl is a short-lived CLI process with a single table.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Engine, make_url

from shelfctl.infrastructure.database.schema import books, metadata

DB_DIRNAME = ".shelfctl"
DB_FILENAME = "shelf.db"


def default_database_url(shelf_root: Path) -> str:
    """Return the SQLite URL for the shelf database under *shelf_root*."""
    return f"sqlite:///{shelf_root / DB_DIRNAME / DB_FILENAME}"


def create_db_engine(url: str) -> Engine:
    """Create an engine for *url*; SQLite connections get WAL mode."""
    engine = create_engine(url, echo=False)

    if engine.dialect.name == "sqlite":

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    return engine


def init_database(url: str) -> Engine:
    """Create the ``books`` table behind *url* and return the engine.

    For file-backed SQLite the parent directory is created first.
    Idempotent, so safe to call on an existing database.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite" and parsed.database not in (None, "", ":memory:"):
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_db_engine(url)
    metadata.create_all(engine)
    return engine


def seed_books(engine: Engine, titles: Iterable[str]) -> int:
    """Insert *titles* (id = title), skipping ids already present.

    Returns the number of rows inserted.
    """
    inserted = 0
    with engine.begin() as conn:
        for title in titles:
            row = conn.execute(select(books.c.id).where(books.c.id == title)).first()
            if row is None:
                conn.execute(insert(books).values(id=title, name=title))
                inserted += 1
    return inserted
