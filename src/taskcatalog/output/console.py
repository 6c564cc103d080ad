"""Rich Console factory and theme for taskcatalog output.

Consoles render into a StringIO buffer so renderers keep a
``ServiceResult -> str`` contract. Without a terminal (tests, pipes)
Rich drops color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CATALOG_THEME = Theme(
    {
        "cat.ok": "bold green",
        "cat.error": "bold red",
        "cat.warning": "bold yellow",
        "cat.op": "bold cyan",
        "cat.key": "dim",
        "cat.id": "bold blue",
        "cat.path": "dim",
        "cat.folder": "bold",
        "cat.added": "green",
        "cat.removed": "red",
    }
)

SEVERITY_STYLES: dict[str, str] = {
    "error": "cat.error",
    "warning": "cat.warning",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=CATALOG_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()
