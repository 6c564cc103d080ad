"""Immutable rule sets injected into the synchronizer and validator.

Defaults live here as module constants; :mod:`taskcatalog.config.models`
builds the rule objects from the (possibly overridden) TOML sections, so
nothing in the domain layer reads global mutable state.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

DOCUMENT_NAME = "task.md"

DEFAULT_REFERENCE_EXTENSIONS: tuple[str, ...] = (
    ".java",
    ".xml",
    ".properties",
    ".json",
    ".yaml",
    ".yml",
    ".template",
    ".diff",
    ".txt",
    ".py",
    ".js",
    ".ts",
    ".md",
    ".groovy",
    ".kt",
    ".scala",
    ".gradle",
    ".sh",
    ".bat",
    ".ps1",
)

DEFAULT_EXCLUDED_FILES: tuple[str, ...] = ("README.md",)

DEFAULT_REQUIRED_FIELDS: tuple[str, ...] = ("id", "name", "type")

DEFAULT_ALLOWED_TYPES: tuple[str, ...] = ("task",)

# Lowercase alphanumeric segments joined by single hyphens.
FOLDER_NAME_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")


@dataclass(frozen=True)
class PatternRule:
    """A named, case-insensitive content pattern."""

    id: str
    regex: re.Pattern[str]
    description: str = ""

    @classmethod
    def compile(cls, rule_id: str, pattern: str, description: str = "") -> PatternRule:
        return cls(id=rule_id, regex=re.compile(pattern, re.IGNORECASE), description=description)

    def matches(self, text: str) -> bool:
        return self.regex.search(text) is not None


DEFAULT_FORBIDDEN_PATTERNS: tuple[PatternRule, ...] = (
    PatternRule.compile("eval-call", r"\beval\s*\("),
    PatternRule.compile("exec-call", r"\bexec\s*\("),
    PatternRule.compile("process-env", r"\bprocess\.env"),
    PatternRule.compile("child-process-require", r"""\brequire\s*\(['"]\s*child_process"""),
    PatternRule.compile("spawn-call", r"\bspawn\s*\("),
    PatternRule.compile("shell-key", r"\bshell\s*:"),
    PatternRule.compile("rm-rf-root", r"rm\s+-rf\s+/"),
    PatternRule.compile("sudo", r"\bsudo\b"),
    PatternRule.compile("curl-pipe-sh", r"\bcurl\s+.*\|\s*sh"),
    PatternRule.compile("wget-pipe-sh", r"\bwget\s+.*\|\s*sh"),
)

DEFAULT_SECURITY_PATTERNS: tuple[PatternRule, ...] = (
    PatternRule.compile(
        "ignore-previous",
        r"ignore\s+(all\s+)?(previous|above)\s+(instructions?|prompts?)",
        "Prompt injection attempt",
    ),
    PatternRule.compile(
        "disregard-previous", r"disregard\s+(all\s+)?(previous|above)", "Prompt injection attempt"
    ),
    PatternRule.compile(
        "forget-previous", r"forget\s+(all\s+)?(previous|above)", "Prompt injection attempt"
    ),
    PatternRule.compile("role-hijack", r"you\s+are\s+now\s+(a|an)", "Role hijacking attempt"),
    PatternRule.compile("act-as", r"act\s+as\s+(if|a|an)", "Potential role manipulation"),
    PatternRule.compile("pretend", r"pretend\s+(you|to\s+be)", "Potential role manipulation"),
    PatternRule.compile("format-drive", r"\bformat\s+[a-z]:", "Potentially dangerous disk command"),
    PatternRule.compile("del-force", r"\bdel\s+/[fqs]", "Potentially dangerous delete command"),
    PatternRule.compile(
        "rmdir-recursive", r"\brmdir\s+/s", "Potentially dangerous directory removal"
    ),
)


@dataclass(frozen=True)
class ReferenceRules:
    """Which folder files count as references."""

    document_name: str = DOCUMENT_NAME
    extensions: tuple[str, ...] = DEFAULT_REFERENCE_EXTENSIONS
    excluded_files: frozenset[str] = frozenset(DEFAULT_EXCLUDED_FILES)

    def is_excluded(self, name: str) -> bool:
        """Own document, configured exclusions, and any readme-like file."""
        if name == self.document_name or name in self.excluded_files:
            return True
        stem = name.split(".", 1)[0]
        return stem.lower() == "readme"

    def is_eligible(self, name: str) -> bool:
        if self.is_excluded(name):
            return False
        return name.endswith(self.extensions) or ".template" in name


@dataclass(frozen=True)
class ValidationRules:
    """Schema and content rules applied by :class:`ContentValidator`."""

    required_fields: tuple[str, ...] = DEFAULT_REQUIRED_FIELDS
    allowed_types: tuple[str, ...] = DEFAULT_ALLOWED_TYPES
    forbidden_patterns: tuple[PatternRule, ...] = DEFAULT_FORBIDDEN_PATTERNS
    security_patterns: tuple[PatternRule, ...] = DEFAULT_SECURITY_PATTERNS
    folder_name_pattern: re.Pattern[str] = field(default=FOLDER_NAME_PATTERN)
