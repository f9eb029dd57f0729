"""Synchronous event dispatch via pluggy.

The CLI handles one command at a time, so hooks run inline right after the
change is persisted. Every dispatch is recorded in an in-memory history that
the ``-v`` output and tests can inspect.

INVARIANT: Plugin failures are warnings, never errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from staffboard.plugins.manager import PluginManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchRecord:
    """Outcome of one hook dispatch."""

    hook_name: str
    status: str  # "completed" | "failed" | "skipped"
    error: str | None = None


class EventBus:
    """Dispatch lifecycle events to registered plugins.

    Parameters:
        plugin_manager: Loaded PluginManager for hook dispatch.
    """

    def __init__(self, plugin_manager: PluginManager) -> None:
        self._pm = plugin_manager
        self._history: list[DispatchRecord] = []

    @property
    def plugin_manager(self) -> PluginManager:
        return self._pm

    @property
    def history(self) -> list[DispatchRecord]:
        return list(self._history)

    def dispatch(self, hook_name: str, payload: dict[str, Any]) -> DispatchRecord:
        """Call *hook_name* with *payload* on every plugin.

        A raising plugin is logged and recorded as ``failed``; the exception
        does not propagate.
        """
        hook_fn = getattr(self._pm.hook, hook_name, None)
        if hook_fn is None:
            record = DispatchRecord(hook_name=hook_name, status="skipped")
        else:
            try:
                hook_fn(**payload)
            except Exception as exc:
                logger.warning("Plugin hook %s failed: %s", hook_name, exc)
                record = DispatchRecord(hook_name=hook_name, status="failed", error=str(exc))
            else:
                record = DispatchRecord(hook_name=hook_name, status="completed")
        self._history.append(record)
        return record
