"""SQLAlchemy Core table definitions for the shelf database."""

from __future__ import annotations

from sqlalchemy import Column, MetaData, Table, Text

metadata = MetaData()

books = Table(
    "books",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
)
