"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, taskcatalog.toml only contains
overrides. An empty (or absent) file reproduces the stock rule set.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from taskcatalog.domain.rules import (
    DEFAULT_ALLOWED_TYPES,
    DEFAULT_EXCLUDED_FILES,
    DEFAULT_FORBIDDEN_PATTERNS,
    DEFAULT_REFERENCE_EXTENSIONS,
    DEFAULT_REQUIRED_FIELDS,
    DEFAULT_SECURITY_PATTERNS,
    DOCUMENT_NAME,
    PatternRule,
    ReferenceRules,
    ValidationRules,
)


class CatalogConfig(BaseModel):
    """[catalog] section."""

    model_config = {"frozen": True}

    tasks_dir: str = "tasks"
    document_name: str = DOCUMENT_NAME
    index_file: str = "metadata.json"


class ReferencesConfig(BaseModel):
    """[references] section."""

    model_config = {"frozen": True}

    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_REFERENCE_EXTENSIONS))
    excluded_files: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUDED_FILES))

    def to_rules(self, document_name: str) -> ReferenceRules:
        return ReferenceRules(
            document_name=document_name,
            extensions=tuple(self.extensions),
            excluded_files=frozenset(self.excluded_files),
        )


class PatternConfig(BaseModel):
    """One extra pattern entry, e.g. ``{id = "docker-priv", pattern = "--privileged"}``."""

    model_config = {"frozen": True}

    id: str
    pattern: str
    description: str = ""

    def to_rule(self) -> PatternRule:
        return PatternRule.compile(self.id, self.pattern, self.description)


class ValidationConfig(BaseModel):
    """[validation] section."""

    model_config = {"frozen": True}

    required_fields: list[str] = Field(default_factory=lambda: list(DEFAULT_REQUIRED_FIELDS))
    allowed_types: list[str] = Field(default_factory=lambda: list(DEFAULT_ALLOWED_TYPES))
    extra_forbidden: list[PatternConfig] = Field(default_factory=list)
    extra_security: list[PatternConfig] = Field(default_factory=list)

    def to_rules(self) -> ValidationRules:
        return ValidationRules(
            required_fields=tuple(self.required_fields),
            allowed_types=tuple(self.allowed_types),
            forbidden_patterns=DEFAULT_FORBIDDEN_PATTERNS
            + tuple(p.to_rule() for p in self.extra_forbidden),
            security_patterns=DEFAULT_SECURITY_PATTERNS
            + tuple(p.to_rule() for p in self.extra_security),
        )


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
