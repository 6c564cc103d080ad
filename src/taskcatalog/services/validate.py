"""ValidateService — per-folder content validation.

Validation never stops at the first bad folder: every requested folder is
checked and its findings collected. The pass fails (``ok=False``) when any
folder has at least one error; warnings never fail it.
"""

from __future__ import annotations

import logging
from typing import Any

from taskcatalog.domain.types import IssueCode
from taskcatalog.domain.validation import ContentValidator, ValidationOutcome
from taskcatalog.infrastructure.filesystem import CatalogIOError, read_document
from taskcatalog.services.base import BaseService
from taskcatalog.services.result import ServiceResult

logger = logging.getLogger(__name__)


class ValidateService(BaseService):
    """Validates task documents against the configured rules."""

    def validate(self, folders: list[str] | None = None) -> ServiceResult:
        """Validate *folders*, or every task folder when none are given.

        Explicitly named folders are checked even if they lack a document
        (reported as ``missing_document``); a full pass only visits folders
        that contain one.
        """
        warnings: list[str] = []
        validator = ContentValidator(self._catalog.validation_rules)

        if not folders and not self._catalog.tasks_path.is_dir():
            warnings.append(f"No tasks directory found at {self._catalog.tasks_path}")

        outcomes: list[ValidationOutcome] = []
        try:
            targets = list(dict.fromkeys(folders)) if folders else self._catalog.find_folders()
            for folder in targets:
                outcomes.append(self._validate_folder(validator, folder))
        except CatalogIOError as exc:
            logger.error("Validation aborted: %s", exc)
            return ServiceResult.failure(
                "validate",
                "IO_ERROR",
                str(exc),
                warnings=warnings,
                path=str(exc.path),
                offenders=[str(exc)],
            )

        report = _build_report(outcomes)
        self._dispatch_event(
            "post_validate",
            {
                "valid": report["valid"],
                "invalid": report["invalid"],
                "error_count": report["error_count"],
                "warning_count": report["warning_count"],
            },
            warnings,
        )

        if report["error_count"]:
            return ServiceResult.failure(
                "validate",
                "VALIDATION_FAILED",
                f"{report['invalid']} task(s) failed validation",
                data=report,
                warnings=warnings,
                offenders=sorted({e["task"] for e in report["errors"]}),
            )
        return ServiceResult(ok=True, op="validate", data=report, warnings=warnings)

    def _validate_folder(self, validator: ContentValidator, folder: str) -> ValidationOutcome:
        doc_path = self._catalog.document_path(folder)
        if not self._catalog.has_document(folder):
            outcome = ValidationOutcome(folder=folder)
            validator.check_folder_name(folder, outcome)
            outcome.error(
                IssueCode.MISSING_DOCUMENT,
                f"Missing required file: {self._catalog.settings.catalog.document_name}",
            )
            return outcome

        content = read_document(doc_path)
        outcome = validator.validate(folder, content)
        logger.debug(
            "Validated %s: %d error(s), %d warning(s)",
            folder,
            len(outcome.errors),
            len(outcome.warnings),
        )
        return outcome


def _build_report(outcomes: list[ValidationOutcome]) -> dict[str, Any]:
    errors = [
        {"task": o.folder, **finding.to_dict()} for o in outcomes for finding in o.errors
    ]
    warnings = [
        {"task": o.folder, **finding.to_dict()} for o in outcomes for finding in o.warnings
    ]
    valid = sum(1 for o in outcomes if o.valid)
    return {
        "checked": len(outcomes),
        "valid": valid,
        "invalid": len(outcomes) - valid,
        "error_count": len(errors),
        "warning_count": len(warnings),
        "errors": errors,
        "warnings": warnings,
    }
