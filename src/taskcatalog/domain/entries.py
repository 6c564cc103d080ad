"""Catalog entries and run-level consistency checks.

Pure functions over the accumulated entries of one indexing run. The
checks only report; deciding that a finding aborts the run is the
indexer's job.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CatalogEntry:
    """One successfully processed task document."""

    id: str
    name: str
    path: str
    folder: str

    @property
    def folder_mismatch(self) -> bool:
        return self.id != self.folder

    def to_index(self) -> dict[str, Any]:
        """The serialized form written to the index."""
        return {"id": self.id, "name": self.name, "path": self.path}


def find_folder_mismatches(entries: list[CatalogEntry]) -> list[CatalogEntry]:
    """Entries whose id differs from their folder name, in input order."""
    return [e for e in entries if e.folder_mismatch]


def find_duplicate_ids(entries: list[CatalogEntry]) -> dict[str, int]:
    """Map each id declared more than once to its count, in first-seen order."""
    counts = Counter(e.id for e in entries)
    return {task_id: n for task_id, n in counts.items() if n > 1}


def sort_entries(entries: list[CatalogEntry]) -> list[CatalogEntry]:
    """Order entries by id (lexicographic)."""
    return sorted(entries, key=lambda e: e.id)
