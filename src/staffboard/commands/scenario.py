"""Command group: named board snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from staffboard.commands._base import BoardGroup
from staffboard.services.scenario import ScenarioService

if TYPE_CHECKING:
    from staffboard.commands._context import AppContext

_SCENARIO_EXAMPLES = """\
  staffboard scenario list
  staffboard scenario save 백업1 --description "개편 전"
  staffboard scenario load 백업1
  staffboard scenario rename 백업1 개편전
  staffboard scenario describe 개편전 "3월 조직도"
  staffboard scenario delete 개편전"""


@click.group(cls=BoardGroup, examples=_SCENARIO_EXAMPLES)
@click.pass_obj
def scenario(app: AppContext) -> None:
    """Save, restore, and manage board snapshots."""


@scenario.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List scenarios, newest first."""
    app.emit(ScenarioService(app.workspace).list())


@scenario.command(
    examples="""\
  staffboard scenario save
  staffboard scenario save 백업1
  staffboard scenario save 백업1 --description "개편 전\""""
)
@click.argument("name", required=False)
@click.option("-d", "--description", default="", help="Free-text description.")
@click.pass_obj
def save(app: AppContext, name: str | None, description: str) -> None:
    """Snapshot the live board. Without NAME, a date-time name is used."""
    app.emit(ScenarioService(app.workspace).save(name, description))


@scenario.command()
@click.argument("name")
@click.pass_obj
def load(app: AppContext, name: str) -> None:
    """Replace the live board with scenario NAME."""
    app.emit(ScenarioService(app.workspace).load(name))


@scenario.command()
@click.argument("name")
@click.pass_obj
def delete(app: AppContext, name: str) -> None:
    """Delete scenario NAME."""
    app.emit(ScenarioService(app.workspace).delete(name))


@scenario.command()
@click.argument("name")
@click.argument("new_name")
@click.pass_obj
def rename(app: AppContext, name: str, new_name: str) -> None:
    """Rename scenario NAME to NEW_NAME."""
    app.emit(ScenarioService(app.workspace).rename(name, new_name))


@scenario.command()
@click.argument("name")
@click.argument("description")
@click.pass_obj
def describe(app: AppContext, name: str, description: str) -> None:
    """Set the description of scenario NAME."""
    app.emit(ScenarioService(app.workspace).describe(name, description))
