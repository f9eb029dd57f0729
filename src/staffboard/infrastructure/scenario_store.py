"""Scenario store — named, timestamped snapshots of the full board.

Scenarios are listed newest first. Name lookup is tolerant: an exact match
wins, otherwise the first (newest) scenario whose name contains the query.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from staffboard.domain.board import DISPLAY_TIME_FORMAT
from staffboard.domain.ids import generate_id
from staffboard.infrastructure.board_store import StoreError, board_from_json, board_to_json
from staffboard.infrastructure.database.schema import scenarios

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.engine import Engine

    from staffboard.domain.board import Board

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """A stored snapshot. ``payload`` is the board JSON."""

    id: str
    name: str
    description: str
    created_at: str
    updated_at: str
    payload: str

    def board(self) -> Board:
        return board_from_json(self.payload, source=f"scenario {self.name!r}")

    def summary(self) -> dict[str, Any]:
        """Listing fields without the snapshot payload."""
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }


def _row_to_scenario(row: Row[Any]) -> Scenario:
    return Scenario(
        id=row.id,
        name=row.name,
        description=row.description or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
        payload=row.payload,
    )


def _now() -> str:
    return datetime.now().strftime(DISPLAY_TIME_FORMAT)


class ScenarioStore:
    """CRUD over the ``scenarios`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def list(self) -> list[Scenario]:
        """All scenarios, newest first."""
        try:
            with self._engine.connect() as conn:
                rows = conn.execute(select(scenarios).order_by(scenarios.c.seq.desc())).fetchall()
        except SQLAlchemyError as exc:
            msg = f"Cannot list scenarios: {exc}"
            raise StoreError(msg) from exc
        return [_row_to_scenario(r) for r in rows]

    def count(self) -> int:
        try:
            with self._engine.connect() as conn:
                return int(conn.execute(select(func.count()).select_from(scenarios)).scalar_one())
        except SQLAlchemyError as exc:
            msg = f"Cannot count scenarios: {exc}"
            raise StoreError(msg) from exc

    def save(self, name: str, board: Board, description: str = "") -> Scenario:
        """Snapshot *board* under *name*.

        Raises:
            StoreError: If *name* is blank or the write fails.
        """
        if not name or not name.strip():
            msg = "Scenario name is required"
            raise StoreError(msg)
        now = _now()
        scenario = Scenario(
            id=generate_id("scenario"),
            name=name.strip(),
            description=description.strip(),
            created_at=now,
            updated_at=now,
            payload=board_to_json(board),
        )
        try:
            with self._engine.begin() as conn:
                conn.execute(
                    insert(scenarios).values(
                        id=scenario.id,
                        name=scenario.name,
                        description=scenario.description,
                        created_at=scenario.created_at,
                        updated_at=scenario.updated_at,
                        payload=scenario.payload,
                    )
                )
        except SQLAlchemyError as exc:
            msg = f"Cannot save scenario {name!r}: {exc}"
            raise StoreError(msg) from exc
        logger.debug("Saved scenario %s (%s)", scenario.name, scenario.id)
        return scenario

    def get_by_name(self, name: str) -> Scenario | None:
        """Exact name first, else the first scenario whose name contains *name*."""
        if not name:
            return None
        items = self.list()
        exact = next((s for s in items if s.name == name), None)
        if exact is not None:
            return exact
        return next((s for s in items if name in s.name), None)

    def load_by_name(self, name: str) -> Board | None:
        scenario = self.get_by_name(name)
        return scenario.board() if scenario else None

    def delete_by_name(self, name: str) -> Scenario | None:
        """Delete the matching scenario; returns it, or None if nothing matched."""
        scenario = self.get_by_name(name)
        if scenario is None:
            return None
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(scenarios).where(scenarios.c.id == scenario.id))
        except SQLAlchemyError as exc:
            msg = f"Cannot delete scenario {scenario.name!r}: {exc}"
            raise StoreError(msg) from exc
        return scenario

    def rename(self, scenario_id: str, new_name: str) -> bool:
        if not new_name or not new_name.strip():
            return False
        return self._update(scenario_id, name=new_name.strip())

    def update_description(self, scenario_id: str, description: str) -> bool:
        return self._update(scenario_id, description=(description or "").strip())

    def _update(self, scenario_id: str, **values: str) -> bool:
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(scenarios)
                    .where(scenarios.c.id == scenario_id)
                    .values(updated_at=_now(), **values)
                )
        except SQLAlchemyError as exc:
            msg = f"Cannot update scenario {scenario_id!r}: {exc}"
            raise StoreError(msg) from exc
        return result.rowcount > 0
