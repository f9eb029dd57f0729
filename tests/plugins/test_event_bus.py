"""Tests for EventBus — synchronous hook dispatch."""

from __future__ import annotations

from typing import Any

import pytest

from staffboard.plugins.event_bus import EventBus
from staffboard.plugins.hookspecs import hookimpl
from staffboard.plugins.manager import PluginManager


class RecordingPlugin:
    def __init__(self) -> None:
        self.calls: list[dict[str, Any]] = []

    @hookimpl
    def post_board_reset(self, counts: dict[str, int]) -> None:
        self.calls.append(counts)


class FailingPlugin:
    @hookimpl
    def post_board_reset(self, counts: dict[str, int]) -> None:
        raise RuntimeError("boom")


@pytest.fixture
def manager() -> PluginManager:
    return PluginManager()


class TestDispatch:
    def test_completed(self, manager: PluginManager) -> None:
        plugin = RecordingPlugin()
        manager.register_plugin(plugin)
        bus = EventBus(manager)
        record = bus.dispatch("post_board_reset", {"counts": {"employees": 3}})
        assert record.status == "completed"
        assert record.error is None
        assert plugin.calls == [{"employees": 3}]

    def test_failure_is_recorded_not_raised(self, manager: PluginManager) -> None:
        manager.register_plugin(FailingPlugin())
        bus = EventBus(manager)
        record = bus.dispatch("post_board_reset", {"counts": {}})
        assert record.status == "failed"
        assert record.error == "boom"

    def test_unknown_hook_skipped(self, manager: PluginManager) -> None:
        bus = EventBus(manager)
        assert bus.dispatch("post_teleport", {}).status == "skipped"

    def test_no_plugins(self, manager: PluginManager) -> None:
        bus = EventBus(manager)
        assert bus.dispatch("post_board_reset", {"counts": {}}).status == "completed"

    def test_history(self, manager: PluginManager) -> None:
        bus = EventBus(manager)
        bus.dispatch("post_board_reset", {"counts": {}})
        bus.dispatch("post_teleport", {})
        assert [r.hook_name for r in bus.history] == ["post_board_reset", "post_teleport"]
        bus.history.clear()
        assert len(bus.history) == 2
