"""Shared type aliases for the book domain."""

from __future__ import annotations

from typing import TypeAlias

# A book is its title; in the document source the title doubles as the id.
Book: TypeAlias = str
BookId: TypeAlias = str
