"""Command: interactive line-by-line board session."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardCommand

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext

EXIT_WORDS = frozenset({"exit", "quit", "종료", "나가기"})


@click.command(
    cls=BoardCommand,
    examples="""\
  staffboard shell
  printf '홍길동 C3\\n시나리오 목록\\n' | staffboard shell""",
)
@click.option("--prompt", "prompt_text", default="staffboard", help="Prompt label.")
@click.pass_obj
def shell(app: AppContext, prompt_text: str) -> None:
    """Read commands one per line until EOF or 'exit'.

    Each line is parsed and fully applied before the next is read. Failed
    commands are reported and the session continues.
    """
    from staffboard.services.executor import CommandExecutor

    executor = CommandExecutor(app.workspace)
    while True:
        try:
            line = click.prompt(prompt_text, default="", show_default=False, prompt_suffix="> ")
        except (click.Abort, EOFError):
            click.echo()
            break
        text = line.strip()
        if not text:
            continue
        if text.lower() in EXIT_WORDS:
            break
        app.echo(executor.run(text))
