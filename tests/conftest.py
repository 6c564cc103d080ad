"""Shared pytest fixtures and test helpers for taskcatalog tests."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskcatalog.config.settings import CatalogSettings
from taskcatalog.infrastructure.catalog import Catalog


def task_document(
    task_id: str | None = "sample-task",
    name: str | None = "Sample",
    task_type: str | None = "task",
    *,
    prompt: str = "Do the sample thing.",
    references: str | None = None,
) -> str:
    """Build a task.md text; pass None to omit a frontmatter key."""
    fm_lines = ["---"]
    if task_id is not None:
        fm_lines.append(f"id: {task_id}")
    if name is not None:
        fm_lines.append(f"name: {name}")
    if task_type is not None:
        fm_lines.append(f"type: {task_type}")
    fm_lines.append("---")
    body = f"\n# Task\n\n**Prompt:**\n{prompt}\n"
    if references is not None:
        body += f"\n{references}\n"
    return "\n".join(fm_lines) + "\n" + body


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def catalog_root(tmp_path: Path) -> Path:
    """Temporary catalog root with an empty ``tasks/`` directory."""
    (tmp_path / "tasks").mkdir()
    return tmp_path


@pytest.fixture
def catalog(catalog_root: Path, monkeypatch: pytest.MonkeyPatch) -> Catalog:
    """Catalog on the temp root with entry-point plugins disabled."""
    monkeypatch.delenv("TASKCATALOG_CONFIG", raising=False)
    monkeypatch.setenv("TASKCATALOG_PLUGINS__ENABLED", "false")
    settings = CatalogSettings.from_cli(catalog_root=catalog_root)
    return Catalog(settings)


@pytest.fixture
def make_task(catalog_root: Path) -> Callable[..., Path]:
    """Create ``tasks/<folder>/task.md`` plus optional sibling files.

    Returns the folder path.
    """

    def _make(
        folder: str,
        content: str | None = None,
        files: Iterable[str] = (),
        **doc_kwargs: object,
    ) -> Path:
        path = catalog_root / "tasks" / folder
        path.mkdir(parents=True, exist_ok=True)
        if content is None:
            doc_kwargs.setdefault("task_id", folder)
            content = task_document(**doc_kwargs)  # type: ignore[arg-type]
        (path / "task.md").write_text(content, encoding="utf-8")
        for name in files:
            (path / name).write_text(f"contents of {name}\n", encoding="utf-8")
        return path

    return _make


@pytest.fixture
def _isolated_catalog(catalog_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from the temp catalog root with plugins disabled."""
    monkeypatch.chdir(catalog_root)
    monkeypatch.delenv("TASKCATALOG_CONFIG", raising=False)
    monkeypatch.setenv("TASKCATALOG_PLUGINS__ENABLED", "false")


@pytest.fixture
def task_doc() -> Callable[..., str]:
    """Expose :func:`task_document` to tests."""
    return task_document
