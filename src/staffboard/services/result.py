"""ServiceResult and ServiceError — the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
Operator mistakes (unknown names, occupied seats, unparseable text) come
back as ``ok=False`` results; nothing is raised past the service boundary.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation; for executed commands, the command action
            (e.g. ``"move_to_coordinate"``).
        data: Operation-specific payload on success. ``data["message"]``
            carries the operator-facing message where there is one.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (counts, the parsed command, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @property
    def message(self) -> str:
        """The operator-facing message, success or failure."""
        if self.error is not None:
            return self.error.message
        return str(self.data.get("message", ""))
