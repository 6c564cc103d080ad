"""Tests for filesystem operations — discovery, document I/O, index writing."""

import json
from pathlib import Path

import pytest

from taskcatalog.infrastructure.filesystem import (
    CatalogIOError,
    find_task_folders,
    list_folder_files,
    read_document,
    write_document,
    write_index,
)


class TestFindTaskFolders:
    def test_missing_directory_is_empty(self, tmp_path: Path) -> None:
        assert find_task_folders(tmp_path / "nope") == []

    def test_sorted_and_hidden_skipped(self, tmp_path: Path) -> None:
        for name in ("zeta", "alpha", ".hidden", "mid"):
            (tmp_path / name).mkdir()
        (tmp_path / "stray.md").write_text("x", encoding="utf-8")
        assert find_task_folders(tmp_path) == ["alpha", "mid", "zeta"]

    def test_unlistable_directory_raises(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def _denied(self: Path):
            raise PermissionError(13, "Permission denied")

        monkeypatch.setattr(Path, "iterdir", _denied)
        with pytest.raises(CatalogIOError) as exc_info:
            find_task_folders(tmp_path)
        assert exc_info.value.path == tmp_path
        assert exc_info.value.action == "list"
        assert "Permission denied" in str(exc_info.value)


class TestListFolderFiles:
    def test_regular_files_only(self, tmp_path: Path) -> None:
        (tmp_path / "b.json").write_text("{}", encoding="utf-8")
        (tmp_path / "a.diff").write_text("", encoding="utf-8")
        (tmp_path / "sub").mkdir()
        assert list_folder_files(tmp_path) == ["a.diff", "b.json"]

    def test_missing_folder_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogIOError) as exc_info:
            list_folder_files(tmp_path / "gone")
        assert exc_info.value.path == tmp_path / "gone"
        assert exc_info.value.action == "list"


class TestDocumentIO:
    def test_round_trip_preserves_crlf(self, tmp_path: Path) -> None:
        path = tmp_path / "task.md"
        write_document(path, "a\r\nb\r\n")
        assert path.read_bytes() == b"a\r\nb\r\n"
        assert read_document(path) == "a\r\nb\r\n"

    def test_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "task.md"
        write_document(path, "naïve café\n")
        assert read_document(path) == "naïve café\n"

    def test_read_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogIOError, match="Failed to read"):
            read_document(tmp_path / "missing.md")

    def test_undecodable_bytes_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "task.md"
        path.write_bytes(b"---\nid: sample-task\nname: S\xff\n---\n")
        with pytest.raises(CatalogIOError) as exc_info:
            read_document(path)
        assert exc_info.value.path == path
        assert exc_info.value.action == "read"
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_write_into_missing_dir_raises(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogIOError) as exc_info:
            write_document(tmp_path / "no" / "task.md", "x")
        assert exc_info.value.action == "write"
        assert isinstance(exc_info.value, OSError)


class TestWriteIndex:
    def test_layout(self, tmp_path: Path) -> None:
        path = tmp_path / "metadata.json"
        write_index(path, [{"id": "a", "name": "A", "path": "tasks/a"}])
        text = path.read_text(encoding="utf-8")
        assert text.endswith("}\n")
        assert '\n  "tasks": [' in text
        assert json.loads(text) == {"tasks": [{"id": "a", "name": "A", "path": "tasks/a"}]}

    def test_empty(self, tmp_path: Path) -> None:
        path = tmp_path / "metadata.json"
        write_index(path, [])
        assert json.loads(path.read_text(encoding="utf-8")) == {"tasks": []}

    def test_non_ascii_kept(self, tmp_path: Path) -> None:
        path = tmp_path / "metadata.json"
        write_index(path, [{"id": "a", "name": "Café", "path": "tasks/a"}])
        assert "Café" in path.read_text(encoding="utf-8")
