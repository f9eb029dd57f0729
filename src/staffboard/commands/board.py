"""Command group: inspect the seating board."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardGroup
from staffboard.services.board import BoardService

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext

_BOARD_EXAMPLES = """\
  staffboard board show
  staffboard board show --block right
  staffboard board where 홍길동
  staffboard board at AA5"""


@click.group(cls=BoardGroup, examples=_BOARD_EXAMPLES)
@click.pass_obj
def board(app: AppContext) -> None:
    """Show the grid and look up who sits where."""


@board.command(
    examples="""\
  staffboard board show
  staffboard board show --block left
  staffboard --json board show"""
)
@click.option(
    "--block",
    type=click.Choice(["left", "right"]),
    default=None,
    help="Only one half of the board.",
)
@click.pass_obj
def show(app: AppContext, block: str | None) -> None:
    """Render the seating grid."""
    app.emit(BoardService(app.workspace).show(block))


@board.command(
    examples="""\
  staffboard board where 홍길동
  staffboard board where 학생처"""
)
@click.argument("name")
@click.pass_obj
def where(app: AppContext, name: str) -> None:
    """Find employees and departments by name."""
    app.emit(BoardService(app.workspace).where(name))


@board.command(
    examples="""\
  staffboard board at C3
  staffboard board at aa5"""
)
@click.argument("coordinate")
@click.pass_obj
def at(app: AppContext, coordinate: str) -> None:
    """Show what occupies COORDINATE."""
    app.emit(BoardService(app.workspace).at(coordinate))
