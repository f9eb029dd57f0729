"""Pluggy hook specifications for staffboard lifecycle events.

Events are dispatched synchronously after the change they describe has been
persisted. A plugin sees committed state only.
"""

from __future__ import annotations

from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("staffboard")
hookimpl = pluggy.HookimplMarker("staffboard")


class StaffboardHookSpec:
    """Hook specifications for the staffboard plugin system."""

    @hookspec
    def post_command(
        self,
        action: str,
        text: str,
        ok: bool,
        message: str,
    ) -> None:
        """Called after every executed command, successful or not."""

    @hookspec
    def post_board_change(
        self,
        action: str,
        changed_ids: list[str],
        last_updated: str | None,
    ) -> None:
        """Called after a board mutation has been persisted."""

    @hookspec
    def post_board_reset(self, counts: dict[str, int]) -> None:
        """Called after the board was reset to the seed state."""

    @hookspec
    def post_scenario_save(
        self,
        scenario_id: str,
        name: str,
        stats: dict[str, Any],
    ) -> None:
        """Called after a scenario snapshot was stored."""
