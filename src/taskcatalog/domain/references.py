"""References section parsing and canonical regeneration.

Pure functions, no I/O. The section looks like::

    **References:**
    - file:///config.json
    - git+file:///fix.diff
    - https://example.com/docs

The scanner finds the first ``**References:**`` label and then consumes
bullet lines only, stopping at the first blank line, heading, bold label,
or other non-bullet line. A second section further down is left alone.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from taskcatalog.domain.rules import ReferenceRules

REFERENCES_LABEL = "**References:**"

GIT_DIFF_PREFIX = "git+file:///"
LOCAL_FILE_PREFIX = "file:///"
URL_PREFIXES = ("http://", "https://")

DIFF_SUFFIX = ".diff"

# "- item"; a bare "-" or "---" rule is not a bullet.
_BULLET_PATTERN = re.compile(r"^\s*-\s+(\S.*?)\s*$")


# ---------------------------------------------------------------------------
# Reference entries
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocalFile:
    """A file in the task folder, referenced as ``file:///<path>``."""

    path: str

    def render(self) -> str:
        return f"{LOCAL_FILE_PREFIX}{self.path}"


@dataclass(frozen=True)
class GitDiff:
    """A ``.diff`` file in the task folder, referenced as ``git+file:///<path>``."""

    path: str

    def render(self) -> str:
        return f"{GIT_DIFF_PREFIX}{self.path}"


@dataclass(frozen=True)
class Url:
    """An external link. Stored verbatim, never fetched."""

    address: str

    def render(self) -> str:
        return self.address


ReferenceEntry = LocalFile | GitDiff | Url
FileReference = LocalFile | GitDiff


def classify_reference(item: str) -> ReferenceEntry | None:
    """Classify one bullet item by its prefix; unknown prefixes yield None.

    ``git+file:///`` is checked before the shorter ``file:///``.
    """
    if item.startswith(GIT_DIFF_PREFIX):
        return GitDiff(item[len(GIT_DIFF_PREFIX) :])
    if item.startswith(LOCAL_FILE_PREFIX):
        return LocalFile(item[len(LOCAL_FILE_PREFIX) :])
    if item.startswith(URL_PREFIXES):
        return Url(item)
    return None


def file_reference_for(name: str) -> FileReference:
    """Canonical entry for a folder file: ``.diff`` files use the git tag."""
    if name.endswith(DIFF_SUFFIX):
        return GitDiff(name)
    return LocalFile(name)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedReferences:
    """File and URL references found in the first References section."""

    file_refs: list[FileReference] = field(default_factory=list)
    url_refs: list[str] = field(default_factory=list)
    section_present: bool = False

    @property
    def file_names(self) -> set[str]:
        return {ref.path for ref in self.file_refs}


@dataclass(frozen=True)
class _SectionSpan:
    """Character span of a located section plus its bullet items."""

    start: int
    end: int
    items: list[str]


def _bullet_item(line: str) -> str | None:
    match = _BULLET_PATTERN.match(line)
    return match.group(1) if match else None


def _locate_section(text: str) -> _SectionSpan | None:
    """Find the first References section.

    ``start`` is the offset of the label; ``end`` is the end of the last
    bullet line (or of the label line), excluding its line terminator.
    """
    lines = text.splitlines(keepends=True)
    offset = 0
    start = 0
    label_idx: int | None = None
    for idx, line in enumerate(lines):
        col = line.find(REFERENCES_LABEL)
        if col != -1:
            label_idx = idx
            start = offset + col
            break
        offset += len(line)
    if label_idx is None:
        return None

    end = offset + len(lines[label_idx].rstrip("\r\n"))
    offset += len(lines[label_idx])
    items: list[str] = []
    for line in lines[label_idx + 1 :]:
        stripped = line.strip()
        if not stripped or stripped.startswith(("#", "**")):
            break
        item = _bullet_item(line)
        if item is None:
            break
        items.append(item)
        end = offset + len(line.rstrip("\r\n"))
        offset += len(line)

    return _SectionSpan(start=start, end=end, items=items)


def parse_references(text: str) -> ParsedReferences:
    """Parse file and URL references from the first References section.

    Bullets with an unrecognized prefix are dropped silently.
    """
    span = _locate_section(text)
    if span is None:
        return ParsedReferences()

    file_refs: list[FileReference] = []
    url_refs: list[str] = []
    for item in span.items:
        entry = classify_reference(item)
        if isinstance(entry, Url):
            url_refs.append(entry.address)
        elif entry is not None:
            file_refs.append(entry)
    return ParsedReferences(file_refs=file_refs, url_refs=url_refs, section_present=True)


# ---------------------------------------------------------------------------
# Eligibility and generation
# ---------------------------------------------------------------------------


def list_eligible_files(folder_files: Iterable[str], rules: ReferenceRules) -> list[str]:
    """Return the folder files that belong in the References section, sorted."""
    return sorted(name for name in set(folder_files) if rules.is_eligible(name))


def generate_section(files: Iterable[str], url_refs: Iterable[str]) -> str:
    """Render the canonical References section (no trailing newline)."""
    lines = [REFERENCES_LABEL]
    lines.extend(f"- {file_reference_for(name).render()}" for name in sorted(files))
    lines.extend(f"- {url}" for url in url_refs)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Synchronization
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SyncResult:
    """Outcome of synchronizing one document's References section."""

    text: str
    changed: bool
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)


def synchronize(text: str, eligible_files: Iterable[str]) -> SyncResult:
    """Make the References section list exactly *eligible_files*.

    No-op when the section exists and its file set already matches.
    Otherwise the first section is regenerated in place, or a new one is
    appended after a blank line. URL references keep their order.
    """
    eligible = set(eligible_files)
    parsed = parse_references(text)
    current = parsed.file_names

    if parsed.section_present and current == eligible:
        return SyncResult(text=text, changed=False)

    newline = "\r\n" if "\r\n" in text else "\n"
    section = generate_section(eligible, parsed.url_refs).replace("\n", newline)
    span = _locate_section(text)
    if span is not None:
        updated = text[: span.start] + section + text[span.end :]
    else:
        updated = f"{text.rstrip()}{newline}{newline}{section}{newline}"

    return SyncResult(
        text=updated,
        changed=updated != text,
        added=sorted(eligible - current),
        removed=sorted(current - eligible),
    )
