"""Pluggy hook specifications for catalog lifecycle events.

Hooks are dispatched synchronously, in folder order, after the step they
describe has completed.
"""

from __future__ import annotations

import pluggy

PROJECT_NAME = "taskcatalog"

hookspec = pluggy.HookspecMarker(PROJECT_NAME)
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)


class TaskCatalogHookSpec:
    """Hook specifications for the taskcatalog plugin system."""

    @hookspec
    def post_sync(
        self,
        folder: str,
        path: str,
        added: list[str],
        removed: list[str],
    ) -> None:
        """Called after a document's References section was rewritten."""

    @hookspec
    def post_index(self, index_path: str, task_count: int) -> None:
        """Called after the index file has been written."""

    @hookspec
    def post_validate(
        self,
        valid: int,
        invalid: int,
        error_count: int,
        warning_count: int,
    ) -> None:
        """Called after a validation pass."""
