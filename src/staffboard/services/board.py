"""BoardService — inspection, reset, persistence and workspace setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from staffboard.domain.grid import TOTAL_COLUMNS, TOTAL_ROWS, column_to_letters, parse_coordinate
from staffboard.domain.types import Block
from staffboard.infrastructure.board_store import StoreError
from staffboard.services._helpers import board_counts, describe_entity
from staffboard.services.base import BaseService
from staffboard.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from staffboard.domain.board import Board

logger = logging.getLogger(__name__)


def _columns_for(block: Block | None) -> list[int]:
    if block is Block.LEFT:
        return list(range(1, 21))
    if block is Block.RIGHT:
        return list(range(21, TOTAL_COLUMNS + 1))
    return list(range(1, TOTAL_COLUMNS + 1))


class BoardService(BaseService):
    """Read-side board queries plus the whole-board operations."""

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def show(self, block: str | None = None) -> ServiceResult:
        """Grid view of the board, optionally one block only."""
        op = "board_show"
        try:
            selected = Block(block) if block else None
        except ValueError:
            return self._failure(op, "INVALID_BLOCK", f"Unknown block: {block!r}")
        try:
            board = self._workspace.board
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc))

        columns = _columns_for(selected)
        cells: dict[str, dict[str, Any]] = {}
        for entity in board.entities():
            if entity.location.column in columns:
                cells[entity.coordinate] = describe_entity(entity)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "block": str(selected) if selected else None,
                "columns": [column_to_letters(c) for c in columns],
                "rows": list(range(1, TOTAL_ROWS + 1)),
                "cells": cells,
                "last_updated": board.last_updated,
                "counts": board_counts(len(board.employees), len(board.departments)),
            },
        )

    def where(self, name: str) -> ServiceResult:
        """Find employees and departments whose names contain *name*."""
        op = "board_where"
        try:
            board = self._workspace.board
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc))

        matches: list[dict[str, Any]] = []
        for employee in board.find_employees_by_name(name):
            info = describe_entity(employee)
            photo = self._workspace.photos.resolve(employee.id)
            info["photo"] = str(photo) if photo else employee.photo
            matches.append(info)
        matches.extend(describe_entity(d) for d in board.find_departments_by_name(name))

        if not matches:
            return self._failure(op, "NOT_FOUND", f"'{name}'을(를) 찾을 수 없습니다", name=name)
        return ServiceResult(ok=True, op=op, data={"query": name, "matches": matches})

    def at(self, coordinate: str) -> ServiceResult:
        """What occupies *coordinate*. An empty cell is not a failure."""
        op = "board_at"
        parsed = parse_coordinate(coordinate)
        if parsed is None:
            return self._failure(
                op,
                "INVALID_COORDINATE",
                f"잘못된 좌표입니다: {coordinate}",
                coordinate=coordinate,
            )
        try:
            board = self._workspace.board
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc))

        occupant = board.at(parsed)
        shown = occupant.label if occupant else "비어 있음"
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "coordinate": parsed.label,
                "block": str(parsed.block),
                "index": parsed.index,
                "occupant": describe_entity(occupant) if occupant else None,
                "message": f"{parsed.label}: {shown}",
            },
        )

    # ------------------------------------------------------------------
    # Whole-board operations
    # ------------------------------------------------------------------

    def reset(self) -> ServiceResult:
        """Restore the seed chart, dropping the persisted board."""
        op = "reset"
        warnings: list[str] = []
        try:
            board = self._workspace.reset_board()
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", f"초기화 실패: {exc}")

        counts = board_counts(len(board.employees), len(board.departments))
        self._dispatch_event("post_board_reset", {"counts": counts}, warnings)
        return ServiceResult(
            ok=True,
            op=op,
            data={"message": "원본 데이터로 초기화했습니다", "counts": counts},
            warnings=warnings,
        )

    def persist(self) -> ServiceResult:
        op = "persist"
        try:
            board = self._workspace.board
            self._workspace.board_store.persist(board)
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", f"저장 실패: {exc}")
        return ServiceResult(
            ok=True,
            op=op,
            data={"message": "저장되었습니다", "last_updated": board.last_updated},
        )

    def init(self, seed: Path | None = None) -> ServiceResult:
        """Prepare the workspace: optionally import *seed*, then load the board."""
        op = "init"
        store = self._workspace.board_store
        try:
            if seed is not None:
                store.import_seed(seed)
            restored = store.has_saved_state()
            board: Board = self._workspace.reload()
            scenario_count = self._workspace.scenario_store.count()
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc))

        logger.debug("Initialised workspace at %s", self._workspace.root)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "message": f"Workspace ready at {self._workspace.root}",
                "root": str(self._workspace.root),
                "seed": str(store.seed_path) if store.seed_path else None,
                "counts": board_counts(len(board.employees), len(board.departments)),
                "scenarios": scenario_count,
                "restored": restored,
            },
        )
