"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The CLI and any future interface consume this type.

Failures come in two kinds. Recoverable errors (``fatal=False``) are
ordinary outcomes the caller branches on, such as an unknown public key.
Faults (``fatal=True``) mean the call misused the protocol or found the
store inconsistent; the operation wrote nothing and must not be retried.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    fatal: bool = False
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"register_device"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, counts, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def fatal(self) -> bool:
        """True when the call was rejected with an unrecoverable fault."""
        return self.error is not None and self.error.fatal


def failure(
    op: str,
    code: str,
    message: str,
    *,
    fatal: bool = False,
    detail: dict[str, Any] | None = None,
) -> ServiceResult:
    """Build a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, fatal=fatal, detail=detail or {}),
    )
