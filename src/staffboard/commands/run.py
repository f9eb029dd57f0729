"""Command: execute one line of operator text."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardCommand

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext


@click.command(
    cls=BoardCommand,
    examples="""\
  staffboard run 홍길동 C3
  staffboard run 홍길동 학생처
  staffboard run "홍길동 김철수 바꿔"
  staffboard run "A1에 대학본부 만들어"
  staffboard run 시나리오 저장 백업1
  staffboard --json run 도움말""",
)
@click.argument("text", nargs=-1, required=True)
@click.pass_obj
def run(app: AppContext, text: tuple[str, ...]) -> None:
    """Parse TEXT as a board command and execute it."""
    from staffboard.services.executor import CommandExecutor

    app.emit(CommandExecutor(app.workspace).run(" ".join(text)))
