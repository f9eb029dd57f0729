"""Command: prepare a staffboard workspace."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardCommand

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext


@click.command(
    "init",
    cls=BoardCommand,
    examples="""\
  staffboard init
  staffboard init --seed ./org-chart.json""",
)
@click.option(
    "--seed",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Import this board JSON as the workspace seed (discards the saved board).",
)
@click.pass_obj
def init_cmd(app: AppContext, seed: Path | None) -> None:
    """Create the workspace database and load the board."""
    from staffboard.services.board import BoardService

    app.emit(BoardService(app.workspace).init(seed))
