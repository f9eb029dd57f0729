"""Extension layer — plugin system via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints,
plus single-file plugins in ``.staffboard/plugins/``.
INVARIANT: Plugin failures are warnings, never errors.
"""

from staffboard.plugins.event_bus import EventBus
from staffboard.plugins.hookspecs import hookimpl
from staffboard.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager", "hookimpl"]
