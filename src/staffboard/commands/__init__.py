"""Subcommand modules for staffboard.

Provides register_commands() which uses deferred imports to keep
``staffboard --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from staffboard.commands.board import board
    from staffboard.commands.scenario import scenario

    cli.add_command(board)
    cli.add_command(scenario)

    # --- Standalone commands ---
    from staffboard.commands.init_cmd import init_cmd
    from staffboard.commands.parse import parse
    from staffboard.commands.run import run
    from staffboard.commands.shell import shell

    cli.add_command(run)
    cli.add_command(shell)
    cli.add_command(parse)
    cli.add_command(init_cmd)
