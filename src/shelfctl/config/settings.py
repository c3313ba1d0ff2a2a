"""Unified settings: CLI flags and env vars layered over TOML config.

Priority chain (highest to lowest):
  1. Init kwargs: CLI flags passed by Click
  2. Env vars: ``SHELFCTL_*`` prefix, ``__`` for nested sections
  3. TOML file: ``shelfctl.toml`` discovered via walk-up
  4. Code defaults: baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from shelfctl.config.discovery import find_config
from shelfctl.config.models import DatabaseConfig, DocumentConfig, SourcesConfig
from shelfctl.infrastructure.database.engine import default_database_url


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``shelfctl.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ShelfSettings(BaseSettings):
    """Settings for the shelfctl CLI, frozen after construction.

    Attributes:
        shelf_root: Directory holding ``shelfctl.toml`` (or CWD when no
            config was found). Relative paths resolve against it.
        config_path: The TOML file in use, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SHELFCTL_",
        "env_nested_delimiter": "__",
    }

    shelf_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    sources: SourcesConfig = Field(default_factory=SourcesConfig)
    document: DocumentConfig = Field(default_factory=DocumentConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    @property
    def database_url(self) -> str:
        """Configured database URL, or the SQLite file under the shelf root."""
        return self.database.url or default_database_url(self.shelf_root)

    @property
    def document_path(self) -> Path | None:
        """Document file path resolved against the shelf root."""
        path = self.document.path
        if path is None or path.is_absolute():
            return path
        return self.shelf_root / path

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        shelf_root: Path | None = None,
        **cli_flags: Any,
    ) -> ShelfSettings:
        """Construct settings from a CLI invocation.

        Discovers ``shelfctl.toml`` via walk-up (or explicit *config_path*),
        resolves *shelf_root* from the config file's parent directory,
        and merges CLI flags as highest-priority overrides.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if not p.is_file():
                msg = f"Config file not found: {config_path}"
                raise click.ClickException(msg)
            toml_path = p
        else:
            toml_path = find_config(shelf_root)

        resolved_root = shelf_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                shelf_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        except ValidationError as exc:
            msg = f"Invalid configuration: {exc}"
            raise click.ClickException(msg) from exc
        finally:
            _tls.toml_path = None
