"""Tests for the index and sync commands."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from taskcatalog.cli import cli


@pytest.mark.usefixtures("_isolated_catalog")
class TestIndexCommand:
    def test_writes_index(
        self, cli_runner: CliRunner, catalog_root: Path, make_task: Callable[..., Path]
    ) -> None:
        make_task("beta-task", name="Beta", references="**References:**")
        make_task("alpha-task", name="Alpha", references="**References:**")
        result = cli_runner.invoke(cli, ["index"])
        assert result.exit_code == 0, result.output
        assert "with 2 tasks" in result.output
        data = json.loads((catalog_root / "metadata.json").read_text(encoding="utf-8"))
        assert [t["id"] for t in data["tasks"]] == ["alpha-task", "beta-task"]

    def test_mismatch_exits_nonzero(
        self, cli_runner: CliRunner, catalog_root: Path, make_task: Callable[..., Path]
    ) -> None:
        make_task("foo-task", task_id="bar-task")
        result = cli_runner.invoke(cli, ["index"])
        assert result.exit_code == 1
        assert 'folder "foo-task" has id "bar-task"' in result.output
        assert not (catalog_root / "metadata.json").exists()

    def test_shared_id_exits_nonzero(
        self, cli_runner: CliRunner, catalog_root: Path, make_task: Callable[..., Path]
    ) -> None:
        make_task("a", task_id="shared-id")
        make_task("b", task_id="shared-id")
        result = cli_runner.invoke(cli, ["index"])
        assert result.exit_code == 1
        assert '"shared-id" appears 2 times' in result.output
        assert not (catalog_root / "metadata.json").exists()

    def test_json_output(self, cli_runner: CliRunner, make_task: Callable[..., Path]) -> None:
        make_task("alpha-task", files=["a.json"])
        result = cli_runner.invoke(cli, ["--json", "index"])
        assert result.exit_code == 0
        payload = json.loads(result.output)
        assert payload["ok"] is True
        assert payload["data"]["count"] == 1
        assert payload["data"]["updated"][0]["added"] == ["a.json"]

    def test_quiet_output(self, cli_runner: CliRunner, make_task: Callable[..., Path]) -> None:
        make_task("alpha-task", references="**References:**")
        result = cli_runner.invoke(cli, ["-q", "index"])
        assert result.exit_code == 0
        assert result.output.strip() == "alpha-task"

    def test_skipped_folder_warning(
        self, cli_runner: CliRunner, make_task: Callable[..., Path]
    ) -> None:
        make_task("nameless", name=None, references="**References:**")
        result = cli_runner.invoke(cli, ["index"])
        assert result.exit_code == 0
        assert "WARNING: nameless: skipped" in result.output

    def test_root_option(
        self, cli_runner: CliRunner, tmp_path_factory: pytest.TempPathFactory
    ) -> None:
        other = tmp_path_factory.mktemp("other")
        (other / "tasks" / "x-task").mkdir(parents=True)
        (other / "tasks" / "x-task" / "task.md").write_text(
            "---\nid: x-task\nname: X\ntype: task\n---\n**Prompt:**\nGo.\n", encoding="utf-8"
        )
        result = cli_runner.invoke(cli, ["--root", str(other), "index"])
        assert result.exit_code == 0, result.output
        assert (other / "metadata.json").is_file()

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["index", "--examples"])
        assert result.exit_code == 0
        assert "taskcatalog --root ./catalog index" in result.output


@pytest.mark.usefixtures("_isolated_catalog")
class TestSyncCommand:
    def test_updates_documents(
        self, cli_runner: CliRunner, catalog_root: Path, make_task: Callable[..., Path]
    ) -> None:
        folder = make_task("sample-task", files=["a.json", "b.diff"])
        result = cli_runner.invoke(cli, ["sync"])
        assert result.exit_code == 0, result.output
        assert "1 of 1 documents updated" in result.output
        text = (folder / "task.md").read_text(encoding="utf-8")
        assert "- file:///a.json\n- git+file:///b.diff\n" in text
        assert not (catalog_root / "metadata.json").exists()

    def test_quiet_lists_updated_folders(
        self, cli_runner: CliRunner, make_task: Callable[..., Path]
    ) -> None:
        make_task("a-task", files=["x.txt"])
        make_task("b-task", references="**References:**")
        result = cli_runner.invoke(cli, ["-q", "sync"])
        assert result.output.strip() == "a-task"

    def test_second_run_changes_nothing(
        self, cli_runner: CliRunner, make_task: Callable[..., Path]
    ) -> None:
        make_task("a-task", files=["x.txt"])
        cli_runner.invoke(cli, ["sync"])
        result = cli_runner.invoke(cli, ["sync"])
        assert "0 of 1 documents updated" in result.output
