"""Catalog — the single dependency injected into every service.

Owns the resolved paths, the immutable rule objects built from settings,
and the (lazily loaded) plugin manager. Services never touch settings or
the filesystem layout directly.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from taskcatalog.infrastructure.filesystem import (
    CatalogIOError,
    find_task_folders,
    list_folder_files,
)

if TYPE_CHECKING:
    from taskcatalog.config.settings import CatalogSettings
    from taskcatalog.domain.rules import ReferenceRules, ValidationRules
    from taskcatalog.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


class Catalog:
    """A task catalog rooted at ``settings.catalog_root``."""

    def __init__(self, settings: CatalogSettings) -> None:
        self._settings = settings
        self._reference_rules = settings.reference_rules()
        self._validation_rules = settings.validation_rules()
        self._plugin_manager: PluginManager | None = None

    @property
    def settings(self) -> CatalogSettings:
        return self._settings

    @property
    def root(self) -> Path:
        return self._settings.catalog_root

    @property
    def tasks_path(self) -> Path:
        return self._settings.tasks_path

    @property
    def index_path(self) -> Path:
        return self._settings.index_path

    @property
    def reference_rules(self) -> ReferenceRules:
        return self._reference_rules

    @property
    def validation_rules(self) -> ValidationRules:
        return self._validation_rules

    @property
    def plugin_manager(self) -> PluginManager | None:
        """Loaded plugin manager, or None when plugins are disabled."""
        if not self._settings.plugins.enabled:
            return None
        if self._plugin_manager is None:
            from taskcatalog.plugins.manager import PluginManager

            pm = PluginManager()
            names = pm.discover_and_load()
            logger.debug("Loaded plugins: %s", names)
            self._plugin_manager = pm
        return self._plugin_manager

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def folder_path(self, folder: str) -> Path:
        return self.tasks_path / folder

    def document_path(self, folder: str) -> Path:
        return self.folder_path(folder) / self._settings.catalog.document_name

    def entry_path(self, folder: str) -> str:
        """Index path for *folder*: ``<tasks_dir>/<folder>`` with forward slashes."""
        return f"{self._settings.catalog.tasks_dir.strip('/')}/{folder}"

    def has_document(self, folder: str) -> bool:
        path = self.document_path(folder)
        try:
            return path.is_file()
        except OSError as exc:
            raise CatalogIOError(path, "stat", exc) from exc

    def find_folders(self) -> list[str]:
        """Non-hidden task folders that contain a document, sorted by name."""
        return [f for f in find_task_folders(self.tasks_path) if self.has_document(f)]

    def folder_files(self, folder: str) -> list[str]:
        return list_folder_files(self.folder_path(folder))
