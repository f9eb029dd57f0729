"""Board persistence — load, persist, reset.

The persisted board lives in the ``board_state`` table. When no board has
been persisted yet, :meth:`BoardStore.load` falls back to the seed JSON file
(the original organisation chart), which is also what ``reset`` restores.

All failures surface as :class:`StoreError`; callers keep their in-memory
state and report the error.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError

from staffboard.domain.board import Board
from staffboard.infrastructure.database.schema import BOARD_SLOT, board_state

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class StoreError(Exception):
    """Raised when board or scenario storage cannot be read or written."""


def read_board_file(path: Path) -> Board:
    """Parse a seed/export JSON file into a validated Board."""
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read board file {path}: {exc}"
        raise StoreError(msg) from exc
    return board_from_json(raw, source=str(path))


def board_from_json(raw: str, *, source: str = "payload") -> Board:
    try:
        data: dict[str, Any] = json.loads(raw)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {source}: {exc}"
        raise StoreError(msg) from exc
    try:
        return Board.from_record(data)
    except ValidationError as exc:
        msg = f"Invalid board data in {source}: {exc.error_count()} error(s)"
        raise StoreError(msg) from exc


def board_to_json(board: Board) -> str:
    return json.dumps(board.to_record(), ensure_ascii=False)


def write_board_file(board: Board, path: Path) -> None:
    """Write *board* as pretty-printed JSON (seed file format)."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(board.to_record(), ensure_ascii=False, indent=2) + "\n",
            encoding="utf-8",
        )
    except OSError as exc:
        msg = f"Cannot write board file {path}: {exc}"
        raise StoreError(msg) from exc


class BoardStore:
    """Reads and writes the live board.

    Parameters:
        engine: SQLAlchemy engine with the ``board_state`` table.
        seed_path: Original organisation chart used on first load and reset.
    """

    def __init__(self, engine: Engine, seed_path: Path | None = None) -> None:
        self._engine = engine
        self._seed_path = seed_path

    @property
    def seed_path(self) -> Path | None:
        return self._seed_path

    def has_saved_state(self) -> bool:
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(board_state.c.slot).where(board_state.c.slot == BOARD_SLOT)
                ).first()
        except SQLAlchemyError as exc:
            msg = f"Cannot read board state: {exc}"
            raise StoreError(msg) from exc
        return row is not None

    def load(self) -> Board:
        """Return the persisted board, or the seed board if none is persisted."""
        try:
            with self._engine.connect() as conn:
                row = conn.execute(
                    select(board_state.c.payload).where(board_state.c.slot == BOARD_SLOT)
                ).first()
        except SQLAlchemyError as exc:
            msg = f"Cannot read board state: {exc}"
            raise StoreError(msg) from exc

        if row is not None:
            board = board_from_json(row.payload, source="board_state")
            logger.debug(
                "Loaded persisted board: %d departments, %d employees",
                len(board.departments),
                len(board.employees),
            )
            return board
        return self.load_seed()

    def load_seed(self) -> Board:
        if self._seed_path is None or not self._seed_path.is_file():
            msg = f"No persisted board and seed file not found: {self._seed_path}"
            raise StoreError(msg)
        board = read_board_file(self._seed_path)
        logger.debug("Loaded seed board from %s", self._seed_path)
        return board

    def persist(self, board: Board) -> None:
        """Upsert the board snapshot. Safe to call after every mutation."""
        payload = board_to_json(board)
        now = datetime.now(UTC).isoformat()
        values = {"payload": payload, "last_updated": board.last_updated, "saved_at": now}
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(board_state).where(board_state.c.slot == BOARD_SLOT).values(**values)
                )
                if result.rowcount == 0:
                    conn.execute(insert(board_state).values(slot=BOARD_SLOT, **values))
        except SQLAlchemyError as exc:
            msg = f"Cannot persist board: {exc}"
            raise StoreError(msg) from exc
        logger.debug("Persisted board (lastUpdated=%s)", board.last_updated)

    def reset(self) -> Board:
        """Discard the persisted board and return a fresh seed board."""
        board = self.load_seed()
        self._clear()
        return board

    def import_seed(self, source: Path) -> Board:
        """Validate *source* and install it as the workspace seed file.

        Any persisted board is discarded so the next load starts from the
        imported chart.
        """
        if self._seed_path is None:
            msg = "No seed path configured"
            raise StoreError(msg)
        board = read_board_file(source)
        if source.resolve() != self._seed_path.resolve():
            write_board_file(board, self._seed_path)
        self._clear()
        logger.debug("Imported seed board from %s", source)
        return board

    def _clear(self) -> None:
        try:
            with self._engine.begin() as conn:
                conn.execute(delete(board_state))
        except SQLAlchemyError as exc:
            msg = f"Cannot clear board state: {exc}"
            raise StoreError(msg) from exc
