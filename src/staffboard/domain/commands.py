"""Command — the closed set of operator intents produced by the parser.

Each variant is a frozen pydantic model tagged by ``action`` and carries
exactly the fields its semantics need, plus ``original`` (the raw input).
``Command`` is a discriminated union, so ``TypeAdapter(Command)`` can
round-trip any variant from JSON.

Commands are ephemeral: built per input line, consumed once by the
executor, never persisted.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, Field, TypeAdapter


class _CommandBase(BaseModel):
    model_config = {"frozen": True}

    original: str = ""


# --- Moves and swaps ---


class MoveToDepartment(_CommandBase):
    action: Literal["move_to_department"] = "move_to_department"
    name: str
    department: str


class MoveToCoordinate(_CommandBase):
    action: Literal["move_to_coordinate"] = "move_to_coordinate"
    name: str
    coordinate: str


class MoveCoordinate(_CommandBase):
    """Move whatever sits on ``source`` to ``target``."""

    action: Literal["move_coordinate"] = "move_coordinate"
    source: str
    target: str


class SwapNames(_CommandBase):
    """Swap two employees' seats.

    ``guessed`` marks the low-confidence fallback: two names were found but
    no swap keyword was present.
    """

    action: Literal["swap_names"] = "swap_names"
    first: str
    second: str
    guessed: bool = False


class SwapCoordinates(_CommandBase):
    action: Literal["swap_coordinates"] = "swap_coordinates"
    first: str
    second: str


# --- Singletons ---


class Reset(_CommandBase):
    action: Literal["reset"] = "reset"


class Persist(_CommandBase):
    action: Literal["persist"] = "persist"


class Help(_CommandBase):
    action: Literal["help"] = "help"


# --- Structural ---


class CreateDepartment(_CommandBase):
    action: Literal["create_department"] = "create_department"
    name: str
    coordinate: str


class DeleteDepartment(_CommandBase):
    action: Literal["delete_department"] = "delete_department"
    name: str


class CreateEmployee(_CommandBase):
    action: Literal["create_employee"] = "create_employee"
    name: str
    coordinate: str
    position: str = ""


class DeleteEmployee(_CommandBase):
    action: Literal["delete_employee"] = "delete_employee"
    name: str


# --- Scenarios ---


class ScenarioSave(_CommandBase):
    """``name`` is None when the operator gave none; the executor synthesizes one."""

    action: Literal["scenario_save"] = "scenario_save"
    name: str | None = None


class ScenarioLoad(_CommandBase):
    action: Literal["scenario_load"] = "scenario_load"
    name: str | None = None


class ScenarioDelete(_CommandBase):
    action: Literal["scenario_delete"] = "scenario_delete"
    name: str | None = None


class ScenarioList(_CommandBase):
    action: Literal["scenario_list"] = "scenario_list"


# --- Terminal ---


class Unrecognized(_CommandBase):
    """No interpretation matched. Carries the evidence that was extracted."""

    action: Literal["unrecognized"] = "unrecognized"
    reason: str = "명령어를 이해하지 못했습니다"
    names: tuple[str, ...] = ()
    coordinates: tuple[str, ...] = ()
    departments: tuple[str, ...] = ()


Command = Annotated[
    MoveToDepartment
    | MoveToCoordinate
    | MoveCoordinate
    | SwapNames
    | SwapCoordinates
    | Reset
    | Persist
    | Help
    | CreateDepartment
    | DeleteDepartment
    | CreateEmployee
    | DeleteEmployee
    | ScenarioSave
    | ScenarioLoad
    | ScenarioDelete
    | ScenarioList
    | Unrecognized,
    Field(discriminator="action"),
]

COMMAND_ADAPTER: TypeAdapter[Command] = TypeAdapter(Command)

ACTIONS: tuple[str, ...] = (
    "move_to_department",
    "move_to_coordinate",
    "move_coordinate",
    "swap_names",
    "swap_coordinates",
    "reset",
    "persist",
    "help",
    "create_department",
    "delete_department",
    "create_employee",
    "delete_employee",
    "scenario_save",
    "scenario_load",
    "scenario_delete",
    "scenario_list",
    "unrecognized",
)
