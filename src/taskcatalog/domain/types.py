"""Finding severities and issue codes.

Codes are stable strings: they appear in JSON output and in the
validation report, so renaming one is a breaking change.
"""

from __future__ import annotations

from enum import StrEnum


class Severity(StrEnum):
    """Whether a finding blocks the document or is informational."""

    ERROR = "error"
    WARNING = "warning"


class IssueCode(StrEnum):
    """Per-document validation findings."""

    # Blocking
    MISSING_DOCUMENT = "missing_document"
    FRONTMATTER_ERROR = "frontmatter_error"
    MISSING_FIELD = "missing_field"
    INVALID_TYPE = "invalid_type"
    MISSING_PROMPT = "missing_prompt"
    FORBIDDEN_PATTERN = "forbidden_pattern"

    # Informational
    ID_MISMATCH = "id_mismatch"
    MISSING_REFERENCES = "missing_references"
    NAMING_CONVENTION = "naming_convention"
    SECURITY_WARNING = "security_warning"
