"""Command: show how a line of text would be interpreted."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardCommand

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext


@click.command(
    cls=BoardCommand,
    examples="""\
  staffboard parse 민수 C3
  staffboard parse "민수 철수 바꿔"
  staffboard --json parse "시나리오 저장\"""",
)
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def parse(app: AppContext, text: tuple[str, ...]) -> None:
    """Parse TEXT without executing it."""
    from staffboard.services.executor import CommandExecutor

    app.emit(CommandExecutor(app.workspace).interpret(" ".join(text)))
