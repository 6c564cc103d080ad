"""IndexService — reference synchronization and index generation.

Folders are processed one at a time in name order: sync the References
section, persist if it changed, then read the frontmatter. Run-level
checks (folder/id mismatch, duplicate ids) run only after every folder
has been seen, and report every offender. Documents rewritten before a
run-level failure stay rewritten.
"""

from __future__ import annotations

from typing import Any

import structlog

from taskcatalog.domain.entries import (
    CatalogEntry,
    find_duplicate_ids,
    find_folder_mismatches,
    sort_entries,
)
from taskcatalog.domain.frontmatter import FrontmatterError, extract_frontmatter
from taskcatalog.domain.references import SyncResult, list_eligible_files, synchronize
from taskcatalog.infrastructure.filesystem import (
    CatalogIOError,
    read_document,
    write_document,
    write_index,
)
from taskcatalog.services.base import BaseService
from taskcatalog.services.result import ServiceResult

log = structlog.get_logger(__name__)


class IndexService(BaseService):
    """Keeps documents' references current and builds the catalog index."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def sync(self) -> ServiceResult:
        """Synchronize every folder's References section; no index is written."""
        warnings: list[str] = []
        updated: list[dict[str, Any]] = []
        try:
            folders = self._catalog.find_folders()
            for folder in folders:
                result = self.sync_folder(folder, warnings)
                if result.changed:
                    updated.append(_update_record(folder, result))
        except CatalogIOError as exc:
            return _io_failure("sync", exc, warnings)

        return ServiceResult(
            ok=True,
            op="sync",
            data={"folders": len(folders), "updated": updated, "count": len(updated)},
            warnings=warnings,
        )

    def generate(self) -> ServiceResult:
        """Sync every folder, check consistency, and write the index."""
        warnings: list[str] = []
        index_path = self._catalog.index_path

        if not self._catalog.tasks_path.is_dir():
            warnings.append(
                f"No tasks directory found at {self._catalog.tasks_path}; writing empty index"
            )
            try:
                write_index(index_path, [])
            except CatalogIOError as exc:
                return _io_failure("index", exc, warnings)
            return ServiceResult(
                ok=True,
                op="index",
                data={"path": str(index_path), "count": 0, "tasks": [], "updated": []},
                warnings=warnings,
            )

        entries: list[CatalogEntry] = []
        updated: list[dict[str, Any]] = []
        try:
            for folder in self._catalog.find_folders():
                result = self.sync_folder(folder, warnings)
                if result.changed:
                    updated.append(_update_record(folder, result))
                entry = self._read_entry(folder, warnings)
                if entry is not None:
                    entries.append(entry)
        except CatalogIOError as exc:
            return _io_failure("index", exc, warnings)

        failure = self._check_consistency(entries, updated, warnings)
        if failure is not None:
            return failure

        ordered = sort_entries(entries)
        tasks = [e.to_index() for e in ordered]
        try:
            write_index(index_path, tasks)
        except CatalogIOError as exc:
            return _io_failure("index", exc, warnings)
        log.info("index_written", path=str(index_path), count=len(tasks))

        self._dispatch_event(
            "post_index",
            {"index_path": str(index_path), "task_count": len(tasks)},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op="index",
            data={"path": str(index_path), "count": len(tasks), "tasks": tasks, "updated": updated},
            warnings=warnings,
        )

    def sync_folder(self, folder: str, warnings: list[str]) -> SyncResult:
        """Read, synchronize, and (if changed) rewrite one folder's document.

        Raises:
            CatalogIOError: The document or folder could not be read or written.
        """
        doc_path = self._catalog.document_path(folder)
        content = read_document(doc_path)
        eligible = list_eligible_files(
            self._catalog.folder_files(folder), self._catalog.reference_rules
        )
        result = synchronize(content, eligible)
        if not result.changed:
            return result

        write_document(doc_path, result.text)
        log.info("references_updated", folder=folder, added=result.added, removed=result.removed)
        self._dispatch_event(
            "post_sync",
            {
                "folder": folder,
                "path": str(doc_path),
                "added": result.added,
                "removed": result.removed,
            },
            warnings,
        )
        return result

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _read_entry(self, folder: str, warnings: list[str]) -> CatalogEntry | None:
        """Extract the catalog entry for *folder*, or None to skip it."""
        content = read_document(self._catalog.document_path(folder))
        try:
            data, _body = extract_frontmatter(content)
        except FrontmatterError as exc:
            log.warning("folder_skipped", folder=folder, reason=str(exc))
            warnings.append(f"{folder}: skipped, {exc}")
            return None

        task_id = data.get("id")
        name = data.get("name")
        if not task_id or not name:
            log.warning("folder_skipped", folder=folder, reason="missing id or name")
            warnings.append(f"{folder}: skipped, missing required frontmatter (id, name)")
            return None

        return CatalogEntry(
            id=task_id,
            name=name,
            path=self._catalog.entry_path(folder),
            folder=folder,
        )

    @staticmethod
    def _check_consistency(
        entries: list[CatalogEntry],
        updated: list[dict[str, Any]],
        warnings: list[str],
    ) -> ServiceResult | None:
        mismatched = find_folder_mismatches(entries)
        duplicates = find_duplicate_ids(entries)
        duplicate_lines = [f'"{task_id}" appears {n} times' for task_id, n in duplicates.items()]

        # Shared ids imply a mismatch, so the mismatch failure carries both lists.
        if mismatched:
            return ServiceResult.failure(
                "index",
                "FOLDER_MISMATCH",
                "Task folder name does not match task ID",
                data={"updated": updated},
                warnings=warnings,
                offenders=[f'folder "{e.folder}" has id "{e.id}"' for e in mismatched]
                + duplicate_lines,
                mismatches=[{"folder": e.folder, "id": e.id} for e in mismatched],
                duplicates=duplicates,
            )

        if duplicates:
            return ServiceResult.failure(
                "index",
                "DUPLICATE_ID",
                "Duplicate task IDs found",
                data={"updated": updated},
                warnings=warnings,
                offenders=duplicate_lines,
                duplicates=duplicates,
            )
        return None


def _update_record(folder: str, result: SyncResult) -> dict[str, Any]:
    return {"folder": folder, "added": result.added, "removed": result.removed}


def _io_failure(op: str, exc: CatalogIOError, warnings: list[str]) -> ServiceResult:
    log.error("io_error", path=str(exc.path), action=exc.action)
    return ServiceResult.failure(
        op,
        "IO_ERROR",
        str(exc),
        warnings=warnings,
        path=str(exc.path),
        offenders=[str(exc)],
    )
