"""Flat frontmatter extraction.

Task documents open with a ``---`` delimited block of ``key: value`` lines.
Only scalar values are understood. Nested structures, list items and
comments are skipped rather than rejected.
"""

from __future__ import annotations

import re

_FRONTMATTER_DELIMITER = "---"
_BOM = "\ufeff"

_KEY_VALUE_PATTERN = re.compile(r"^([A-Za-z_][A-Za-z0-9_-]*)\s*:(?:\s+(.*))?$")


class FrontmatterError(ValueError):
    """Raised when an opening ``---`` marker has no matching close."""


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def parse_frontmatter_lines(lines: list[str]) -> dict[str, str]:
    """Parse ``key: value`` lines into a mapping, skipping malformed lines.

    Indented lines (list items, nested mappings) and comments are ignored.
    A later duplicate key overwrites an earlier one.
    """
    data: dict[str, str] = {}
    for line in lines:
        if not line.strip() or line[0].isspace() or line.lstrip().startswith("#"):
            continue
        match = _KEY_VALUE_PATTERN.match(line.rstrip())
        if match is None:
            continue
        key, value = match.group(1), match.group(2) or ""
        data[key] = _unquote(value.strip())
    return data


def extract_frontmatter(content: str) -> tuple[dict[str, str], str]:
    """Split *content* into ``(frontmatter, body)``.

    The first line must be ``---`` for a block to exist; otherwise the whole
    text is body and the mapping is empty. Handles ``\\r\\n`` line endings
    and a leading byte-order mark.

    Raises:
        FrontmatterError: The opening marker exists but no closing marker follows.
    """
    if content.startswith(_BOM):
        content = content[len(_BOM) :]
    normalized = content.replace("\r\n", "\n")
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != _FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == _FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        msg = "Frontmatter block is not closed (missing '---' line)"
        raise FrontmatterError(msg)

    data = parse_frontmatter_lines(lines[1:end_idx])
    body = "\n".join(lines[end_idx + 1 :])
    if body.startswith("\n"):
        body = body[1:]
    return data, body
