"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, shelfctl.toml only contains
overrides. A fresh shelf needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, model_validator

SourceKind = Literal["database", "document"]


class SourcesConfig(BaseModel):
    """[sources] section: which repository backs each service slot."""

    model_config = {"frozen": True}

    primary: SourceKind = "database"
    secondary: SourceKind = "document"


class DocumentConfig(BaseModel):
    """[document] section.

    ``path`` wins over ``payload`` when both are set.
    """

    model_config = {"frozen": True}

    payload: str = "[]"
    path: Path | None = None


class DatabaseConfig(BaseModel):
    """[database] section. ``url`` defaults to SQLite under the shelf root."""

    model_config = {"frozen": True}

    url: str | None = None

    @model_validator(mode="after")
    def _reject_blank_url(self) -> DatabaseConfig:
        if self.url is not None and not self.url.strip():
            msg = "database.url must not be empty"
            raise ValueError(msg)
        return self
