"""Shelf database engine and schema via SQLAlchemy Core."""

from shelfctl.infrastructure.database.engine import (
    create_db_engine,
    default_database_url,
    init_database,
    seed_books,
)
from shelfctl.infrastructure.database.schema import books, metadata

__all__ = [
    "books",
    "create_db_engine",
    "default_database_url",
    "init_database",
    "metadata",
    "seed_books",
]
