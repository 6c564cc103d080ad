"""ServiceResult and ServiceError — the contract between services and the CLI.

INVARIANT: Every public service method returns a ServiceResult. Run-level
failures (duplicate ids, folder/id mismatches, I/O errors) are reported as
``ok=False`` results, never raised to the caller.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Why an operation failed; ``detail`` lists every offender."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Outcome of one catalog operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Operation name (``"index"``, ``"sync"``, ``"validate"``).
        data: Operation payload; also populated on failure when a partial
            report is useful (e.g. the validation report).
        warnings: Non-fatal issues (skipped folders, plugin failures).
        error: Populated when ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: str,
        message: str,
        *,
        data: dict[str, Any] | None = None,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            data=data or {},
            warnings=warnings or [],
            error=ServiceError(code=code, message=message, detail=detail),
        )
