"""Filesystem operations for the task catalog.

INVARIANT: Files are truth. Every document read or write is one scoped
``open()`` so the handle is released on every exit path; any ``OSError``
(or undecodable document) is re-raised as :class:`CatalogIOError`
carrying the offending path.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


class CatalogIOError(OSError):
    """A document or index could not be read or written."""

    def __init__(self, path: Path, action: str, cause: Exception) -> None:
        self.path = path
        self.action = action
        reason = getattr(cause, "strerror", None) or cause
        super().__init__(f"Failed to {action} {path}: {reason}")


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def find_task_folders(tasks_dir: Path) -> list[str]:
    """Return non-hidden subdirectory names of *tasks_dir*, sorted.

    A missing tasks directory yields an empty list.
    """
    if not tasks_dir.is_dir():
        return []
    try:
        return sorted(
            entry.name
            for entry in tasks_dir.iterdir()
            if entry.is_dir() and not entry.name.startswith(".")
        )
    except OSError as exc:
        raise CatalogIOError(tasks_dir, "list", exc) from exc


def list_folder_files(folder: Path) -> list[str]:
    """Return the names of regular files directly inside *folder*."""
    try:
        return sorted(entry.name for entry in folder.iterdir() if entry.is_file())
    except OSError as exc:
        raise CatalogIOError(folder, "list", exc) from exc


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_document(path: Path) -> str:
    """Read a task document as UTF-8 text, preserving line endings.

    Undecodable bytes are reported like any other read failure.
    """
    try:
        with path.open("r", encoding="utf-8", newline="") as fh:
            return fh.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogIOError(path, "read", exc) from exc


def write_document(path: Path, content: str) -> None:
    """Overwrite a task document with *content*."""
    try:
        with path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(content)
    except OSError as exc:
        raise CatalogIOError(path, "write", exc) from exc


def write_index(path: Path, tasks: list[dict[str, Any]]) -> None:
    """Write the ``{"tasks": [...]}`` index as indented JSON."""
    payload = json.dumps({"tasks": tasks}, indent=2, ensure_ascii=False)
    write_document(path, payload + "\n")
