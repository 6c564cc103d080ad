"""ContentValidator — schema and content checks for one task document.

Findings are collected, never raised. Errors make the document invalid;
warnings are informational only. The id/folder check here is the soft
variant: index generation applies its own hard check.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from taskcatalog.domain.frontmatter import FrontmatterError, extract_frontmatter
from taskcatalog.domain.references import REFERENCES_LABEL
from taskcatalog.domain.rules import ValidationRules
from taskcatalog.domain.types import IssueCode, Severity

PROMPT_LABEL = "**Prompt:**"


@dataclass(frozen=True)
class Finding:
    """A single validation error or warning."""

    code: IssueCode
    severity: Severity
    message: str
    detail: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": str(self.code),
            "severity": str(self.severity),
            "message": self.message,
        }
        if self.detail:
            data["detail"] = dict(self.detail)
        return data


@dataclass
class ValidationOutcome:
    """Errors and warnings for one task folder."""

    folder: str
    errors: list[Finding] = field(default_factory=list)
    warnings: list[Finding] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, code: IssueCode, message: str, **detail: Any) -> None:
        self.errors.append(Finding(code, Severity.ERROR, message, detail))

    def warn(self, code: IssueCode, message: str, **detail: Any) -> None:
        self.warnings.append(Finding(code, Severity.WARNING, message, detail))


class ContentValidator:
    """Runs the fixed rule set against a document and its folder name."""

    def __init__(self, rules: ValidationRules | None = None) -> None:
        self._rules = rules or ValidationRules()

    @property
    def rules(self) -> ValidationRules:
        return self._rules

    def validate(self, folder: str, content: str) -> ValidationOutcome:
        """Validate *content* as the document of *folder*."""
        outcome = ValidationOutcome(folder=folder)
        self.check_folder_name(folder, outcome)

        try:
            data, _body = extract_frontmatter(content)
        except FrontmatterError as exc:
            outcome.error(IssueCode.FRONTMATTER_ERROR, f"Invalid frontmatter: {exc}")
            return outcome

        self._check_fields(folder, data, outcome)
        self._check_sections(content, outcome)
        self._check_patterns(content, outcome)
        return outcome

    def check_folder_name(self, folder: str, outcome: ValidationOutcome) -> None:
        if self._rules.folder_name_pattern.match(folder) is None:
            outcome.warn(
                IssueCode.NAMING_CONVENTION,
                'Folder name should be lowercase with hyphens (e.g., "my-task-name")',
            )

    def _check_fields(self, folder: str, data: dict[str, str], outcome: ValidationOutcome) -> None:
        for key in self._rules.required_fields:
            if not data.get(key):
                outcome.error(
                    IssueCode.MISSING_FIELD,
                    f"Missing required frontmatter field: {key}",
                    field=key,
                )

        task_id = data.get("id")
        if task_id and task_id != folder:
            outcome.warn(
                IssueCode.ID_MISMATCH,
                f'Task id "{task_id}" does not match folder name "{folder}"',
                id=task_id,
            )

        task_type = data.get("type")
        if task_type and task_type not in self._rules.allowed_types:
            allowed = ", ".join(self._rules.allowed_types)
            outcome.error(
                IssueCode.INVALID_TYPE,
                f"Invalid task type: {task_type}. Valid types: {allowed}",
                type=task_type,
            )

    def _check_sections(self, content: str, outcome: ValidationOutcome) -> None:
        if PROMPT_LABEL not in content:
            outcome.error(IssueCode.MISSING_PROMPT, f"Missing required {PROMPT_LABEL} section")
        if REFERENCES_LABEL not in content:
            outcome.warn(
                IssueCode.MISSING_REFERENCES,
                f"Missing {REFERENCES_LABEL} section (recommended)",
            )

    def _check_patterns(self, content: str, outcome: ValidationOutcome) -> None:
        seen: set[str] = set()
        for rule in self._rules.forbidden_patterns:
            if rule.id in seen or not rule.matches(content):
                continue
            seen.add(rule.id)
            outcome.error(
                IssueCode.FORBIDDEN_PATTERN,
                f"Content contains forbidden pattern: {rule.id} ({rule.regex.pattern})",
                pattern_id=rule.id,
            )

        for rule in self._rules.security_patterns:
            if rule.matches(content):
                outcome.warn(
                    IssueCode.SECURITY_WARNING,
                    f"{rule.description or 'Suspicious content'}: {rule.id}",
                    pattern_id=rule.id,
                    description=rule.description,
                )
