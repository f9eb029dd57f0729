"""Plugin discovery and loading.

Two sources are scanned: the ``staffboard.plugins`` entry-point group
(installed packages) and single-file plugins under the workspace's
``.staffboard/plugins/`` directory. A plugin is any object whose public
methods carry ``@hookimpl``; classes are instantiated before registration.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
import sys
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pluggy

from staffboard.plugins.hookspecs import StaffboardHookSpec

PROJECT_NAME = "staffboard"
ENTRY_POINT_GROUP = "staffboard.plugins"
LOCAL_MODULE_PREFIX = "staffboard_local_plugin_"

logger = logging.getLogger(__name__)


class PluginManager:
    """Thin wrapper over :class:`pluggy.PluginManager` for board hooks."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(StaffboardHookSpec)
        self._loaded = False

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    @property
    def is_loaded(self) -> bool:
        """True once :meth:`discover_and_load` has run."""
        return self._loaded

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load entry-point plugins, then local ones; return registered names."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_registered_classes()
        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if not path.name.startswith("_"):
                    self._load_local_file(path)
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        plugin_name = name or type(plugin).__name__
        self._pm.register(plugin, name=plugin_name)
        logger.debug("Registered plugin: %s", plugin_name)

    def unregister(self, plugin: object) -> None:
        self._pm.unregister(plugin)

    def get_plugins(self) -> list[object]:
        return list(self._pm.get_plugins())

    def list_plugin_names(self) -> list[str]:
        return [self._pm.get_name(p) or type(p).__name__ for p in self._pm.get_plugins()]

    # ------------------------------------------------------------------
    # Discovery helpers
    # ------------------------------------------------------------------

    def _instantiate_registered_classes(self) -> None:
        """Entry points may register a bare class; swap it for an instance."""
        for plugin in self.get_plugins():
            if not (inspect.isclass(plugin) and self._has_hook_impls(plugin)):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            instance = _instantiate(plugin, plugin_name)
            if instance is not None:
                self._pm.register(instance, name=plugin_name)

    def _load_local_file(self, path: Path) -> None:
        """Import *path* and register every hook-bearing class defined in it.

        A file that fails to import is logged and skipped.
        """
        module_name = f"{LOCAL_MODULE_PREFIX}{path.stem}"
        module = _import_file(module_name, path)
        if module is None:
            return
        for cls in _classes_defined_in(module):
            if not self._has_hook_impls(cls):
                continue
            instance = _instantiate(cls, f"{path.name}:{cls.__name__}")
            if instance is not None:
                self.register_plugin(instance, name=module_name)

    @staticmethod
    def _has_hook_impls(cls: type) -> bool:
        """Whether any public attribute of *cls* is marked ``staffboard_impl``."""
        marker = f"{PROJECT_NAME}_impl"
        return any(
            callable(attr) and getattr(attr, marker, None)
            for attr in (getattr(cls, n, None) for n in dir(cls) if not n.startswith("_"))
        )


def _import_file(module_name: str, path: Path) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import local plugin %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception:
        sys.modules.pop(module_name, None)
        logger.warning("Failed to load local plugin %s", path, exc_info=True)
        return None
    return module


def _classes_defined_in(module: ModuleType) -> Iterator[type]:
    for _name, obj in inspect.getmembers(module, inspect.isclass):
        if obj.__module__ == module.__name__:
            yield obj


def _instantiate(cls: type, label: str) -> object | None:
    try:
        return cls()
    except Exception:
        logger.warning("Failed to instantiate plugin %s", label, exc_info=True)
        return None
