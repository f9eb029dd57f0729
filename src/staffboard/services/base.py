"""BaseService — abstract foundation for all staffboard services.

Every service receives a :class:`Workspace` at construction time. Services
own their transaction boundaries via ``self._workspace.transaction()``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from staffboard.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from staffboard.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class ScenarioService(BaseService):
            def save(self, name: str) -> ServiceResult:
                board = self._workspace.board
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event. No-op if event bus not initialized.

        INVARIANT: Plugin failures are warnings, never errors.
        """
        bus = self._workspace.event_bus
        if bus is None:
            return
        try:
            record = bus.dispatch(hook_name, payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
            return
        if record.status == "failed":
            warnings.append(f"Plugin hook {hook_name} failed: {record.error}")

    @staticmethod
    def _failure(
        op: str,
        code: str,
        message: str,
        *,
        warnings: list[str] | None = None,
        **detail: Any,
    ) -> ServiceResult:
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
            warnings=warnings or [],
        )
