"""Operation-specific Rich renderers for ServiceResult.

Renderers are dispatched by ``result.op``. Failed results always list
every offender; a failed validation additionally prints the full report.
Dynamic text is escaped because messages quote regexes and Markdown.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.markup import escape
from rich.text import Text

from taskcatalog.output.console import SEVERITY_STYLES, create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from taskcatalog.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich."""
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Minimal output for ``--quiet``: ids or folders, one per line."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        lines = [f"ERROR: {result.op} — {msg}"]
        if result.error:
            lines.extend(f"  - {o}" for o in result.error.detail.get("offenders", []))
        return "\n".join(lines)

    if result.op == "index":
        return "\n".join(task["id"] for task in result.data.get("tasks", []))
    if result.op == "sync":
        return "\n".join(item["folder"] for item in result.data.get("updated", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    console.print(Text("OK", style="cat.ok"), Text(f"  {result.op}", style="cat.op"))


def _field(console: Console, key: str, value: Any) -> None:
    console.print(f"  [cat.key]{key}:[/cat.key] {escape(str(value))}")


def _render_updates(console: Console, updated: list[dict[str, Any]]) -> None:
    for item in updated:
        console.print(f"  [cat.folder]{escape(item['folder'])}[/cat.folder]: references updated")
        if item.get("added"):
            console.print(f"    [cat.added]+ Added:[/cat.added] {escape(', '.join(item['added']))}")
        if item.get("removed"):
            removed = escape(", ".join(item["removed"]))
            console.print(f"    [cat.removed]- Removed:[/cat.removed] {removed}")


def _render_findings(console: Console, title: str, findings: list[dict[str, Any]]) -> None:
    if not findings:
        return
    console.print(f"\n[bold]{title}[/bold]")
    by_task: dict[str, list[dict[str, Any]]] = {}
    for finding in findings:
        by_task.setdefault(str(finding.get("task", "unknown")), []).append(finding)

    for task, task_findings in by_task.items():
        console.print(f"\n  [cat.folder]{escape(task)}[/cat.folder]")
        for finding in task_findings:
            sev = str(finding.get("severity", "warning"))
            style = SEVERITY_STYLES.get(sev, "")
            code = escape(str(finding.get("code", "")))
            console.print(f"    [{style}]{code}[/{style}]: {escape(str(finding.get('message', '')))}")


# ── Error ─────────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    if result.op == "validate" and result.data:
        _render_validate_report(result, console)
        console.print()

    msg = result.error.message if result.error else "Unknown error"
    console.print(
        Text("ERROR", style="cat.error"),
        Text(f"  {result.op}", style="cat.op"),
        Text(f" — {msg}"),
    )
    if result.error is None:
        return

    for offender in result.error.detail.get("offenders", []):
        console.print(f"  - {escape(str(offender))}")
    if result.error.code == "FOLDER_MISMATCH":
        console.print(
            "\nThe folder name must match the task ID in the frontmatter. "
            "Rename the folder or update the ID."
        )
    if result.error.detail.get("duplicates"):
        console.print("\nEach task must have a unique ID. Fix the duplicate IDs and try again.")

    if verbose:
        extra = {k: v for k, v in result.error.detail.items() if k != "offenders"}
        if extra:
            console.print("  [cat.key]detail:[/cat.key]")
            for key, value in extra.items():
                _field(console, f"  {key}", value)


# ── Operation renderers ───────────────────────────────────────────────


def _render_index(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_updates(console, result.data.get("updated", []))
    tasks = result.data.get("tasks", [])
    console.print(
        f"[cat.ok]OK[/cat.ok]  Generated [cat.path]{escape(str(result.data.get('path', '')))}"
        f"[/cat.path] with {len(tasks)} tasks"
    )
    for task in tasks:
        console.print(f"  - [cat.id]{escape(task['id'])}[/cat.id]: {escape(task['name'])}")


def _render_sync(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    updated = result.data.get("updated", [])
    _render_updates(console, updated)
    folders = result.data.get("folders", 0)
    console.print(
        f"[cat.ok]OK[/cat.ok]  {len(updated)} of {folders} documents updated"
    )


def _render_validate_report(result: ServiceResult, console: Console) -> None:
    data = result.data
    console.print("[bold]Task Validation Report[/bold]\n")
    console.print("[bold]Summary[/bold]")
    console.print(f"  Valid tasks: [cat.ok]{data.get('valid', 0)}[/cat.ok]")
    console.print(f"  Invalid tasks: [cat.error]{data.get('invalid', 0)}[/cat.error]")
    console.print(f"  Warnings: [cat.warning]{data.get('warning_count', 0)}[/cat.warning]")
    _render_findings(console, "Errors", data.get("errors", []))
    _render_findings(console, "Warnings", data.get("warnings", []))


def _render_validate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_validate_report(result, console)
    console.print(f"\n[cat.ok]OK[/cat.ok]  {result.data.get('checked', 0)} tasks checked")


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)


_OP_RENDERERS: dict[str, Any] = {
    "index": _render_index,
    "sync": _render_sync,
    "validate": _render_validate,
}
