"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TASKCATALOG_*`` prefix
  3. TOML file    — ``taskcatalog.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from taskcatalog.config.discovery import find_config
from taskcatalog.config.models import (
    CatalogConfig,
    PluginsConfig,
    ReferencesConfig,
    ValidationConfig,
)
from taskcatalog.domain.rules import ReferenceRules, ValidationRules


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``taskcatalog.toml`` file."""

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
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class CatalogSettings(BaseSettings):
    """Settings for one taskcatalog invocation.

    Attributes:
        catalog_root: Directory holding the tasks directory and the index
            (parent of ``taskcatalog.toml``, ``--root``, or CWD).
        config_path: The TOML file in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TASKCATALOG_",
        "env_nested_delimiter": "__",
    }

    catalog_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    references: ReferencesConfig = Field(default_factory=ReferencesConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

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
        catalog_root: Path | None = None,
        **cli_flags: Any,
    ) -> CatalogSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* wins; otherwise ``taskcatalog.toml`` is
        discovered from *catalog_root* (or CWD). The root defaults to the
        config file's directory.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(catalog_root)

        resolved_root = catalog_root
        if resolved_root is None:
            resolved_root = toml_path.parent if toml_path else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                catalog_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    # --- Derived paths and rules ---

    @property
    def tasks_path(self) -> Path:
        return self.catalog_root / self.catalog.tasks_dir

    @property
    def index_path(self) -> Path:
        return self.catalog_root / self.catalog.index_file

    def reference_rules(self) -> ReferenceRules:
        return self.references.to_rules(self.catalog.document_name)

    def validation_rules(self) -> ValidationRules:
        return self.validation.to_rules()
