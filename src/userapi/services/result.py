"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The HTTP API and the CLI both consume this type and branch on
``error.code`` (an :class:`ErrorKind`), never on message text.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from userapi.domain.errors import ErrorKind


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: ErrorKind
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"create_user"``).
        data: Operation-specific payload on success.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    error: ServiceError | None = None

    @classmethod
    def success(cls, op: str, data: dict[str, Any] | None = None) -> ServiceResult:
        return cls(ok=True, op=op, data=data or {})

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorKind,
        message: str,
        detail: dict[str, Any] | None = None,
    ) -> ServiceResult:
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail or {}),
        )
