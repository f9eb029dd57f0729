"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from staffboard.domain.board import Employee

if TYPE_CHECKING:
    from staffboard.domain.board import Board, Department, Entity

DEFAULT_SCENARIO_NAME_FORMAT = "{month}월{day}일_{hour}시{minute}분"


def default_scenario_name(
    fmt: str = DEFAULT_SCENARIO_NAME_FORMAT,
    when: datetime | None = None,
) -> str:
    """Name for a scenario saved without one, from local time.

    Fields are unpadded, matching how operators write dates.

    Examples:
        >>> default_scenario_name(when=datetime(2024, 3, 7, 9, 5))
        '3월7일_9시5분'
    """
    moment = when or datetime.now()
    return fmt.format(
        year=moment.year,
        month=moment.month,
        day=moment.day,
        hour=moment.hour,
        minute=moment.minute,
    )


def board_counts(employees: int, departments: int) -> dict[str, int]:
    return {"employees": employees, "departments": departments}


def resolve_employee(board: Board, name: str) -> Employee | None:
    """Exact name first, else the first employee whose name contains *name*."""
    matches = board.find_employees_by_name(name)
    return next((e for e in matches if e.name == name.strip()), None) or next(iter(matches), None)


def resolve_department(board: Board, name: str) -> Department | None:
    """Exact ``dept``/``displayName`` first, else the first fuzzy match."""
    needle = name.strip()
    exact = next(
        (d for d in board.departments if needle in (d.dept, d.display_name)),
        None,
    )
    if exact is not None:
        return exact
    return next(iter(board.find_departments_by_name(needle)), None)


def describe_entity(entity: Entity) -> dict[str, Any]:
    """Flat, JSON-friendly summary of a positioned entity."""
    info: dict[str, Any] = {
        "id": entity.id,
        "kind": entity.kind,
        "label": entity.label,
        "coordinate": entity.coordinate,
        "block": str(entity.block),
    }
    if isinstance(entity, Employee):
        info.update(position=entity.position, dept=entity.dept, sub_dept=entity.sub_dept)
    else:
        info.update(dept=entity.dept, sub_dept=entity.sub_dept, members=len(entity.members))
    return info
