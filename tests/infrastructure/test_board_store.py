"""Tests for board persistence."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.engine import Engine

from staffboard.domain.board import Board
from staffboard.infrastructure.board_store import (
    BoardStore,
    StoreError,
    board_from_json,
    read_board_file,
    write_board_file,
)
from staffboard.infrastructure.database.engine import init_database


@pytest.fixture
def db_engine(tmp_path: Path) -> Engine:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(db_engine: Engine, seed_file: Path) -> BoardStore:
    return BoardStore(db_engine, seed_file)


class TestDatabase:
    def test_state_dir_created(self, tmp_path: Path, db_engine: Engine) -> None:
        assert (tmp_path / ".staffboard" / "staffboard.db").is_file()
        assert (tmp_path / ".staffboard" / "plugins").is_dir()

    def test_idempotent(self, tmp_path: Path, db_engine: Engine) -> None:
        init_database(tmp_path).dispose()


class TestLoad:
    def test_falls_back_to_seed(self, store: BoardStore) -> None:
        assert not store.has_saved_state()
        board = store.load()
        assert len(board.employees) == 3

    def test_persisted_board_wins(self, store: BoardStore) -> None:
        board = store.load()
        board.relocate("emp_hong", "G7")
        board.touch("2024-03-07 09:05:00")
        store.persist(board)
        loaded = store.load()
        assert loaded.find_employee("emp_hong").coordinate == "G7"  # type: ignore[union-attr]
        assert loaded.last_updated == "2024-03-07 09:05:00"
        assert store.has_saved_state()

    def test_persist_is_idempotent(self, store: BoardStore) -> None:
        board = store.load()
        store.persist(board)
        store.persist(board)
        assert store.load() == board

    def test_missing_seed(self, db_engine: Engine, tmp_path: Path) -> None:
        store = BoardStore(db_engine, tmp_path / "missing.json")
        with pytest.raises(StoreError, match="seed file not found"):
            store.load()

    def test_corrupt_seed(self, db_engine: Engine, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("{not json", encoding="utf-8")
        with pytest.raises(StoreError, match="Invalid JSON"):
            BoardStore(db_engine, bad).load()

    def test_invalid_board_data(self, seed_data: dict[str, Any]) -> None:
        seed_data["employees"][0]["location"] = {"coordinate": "ZZ99"}
        with pytest.raises(StoreError, match="Invalid board data"):
            board_from_json(json.dumps(seed_data))


class TestReset:
    def test_reset_discards_persisted(self, store: BoardStore) -> None:
        board = store.load()
        board.relocate("emp_hong", "G7")
        store.persist(board)
        fresh = store.reset()
        assert fresh.find_employee("emp_hong").coordinate == "C3"  # type: ignore[union-attr]
        assert not store.has_saved_state()

    def test_reset_without_seed_keeps_state(self, db_engine: Engine, board: Board) -> None:
        store = BoardStore(db_engine, None)
        store.persist(board)
        with pytest.raises(StoreError):
            store.reset()
        assert store.has_saved_state()


class TestImportSeed:
    def test_installs_seed_and_clears_state(
        self, store: BoardStore, tmp_path: Path, board: Board
    ) -> None:
        store.persist(store.load())
        board.remove("emp_lee")
        other = tmp_path / "incoming" / "chart.json"
        write_board_file(board, other)

        imported = store.import_seed(other)
        assert len(imported.employees) == 2
        assert not store.has_saved_state()
        assert len(read_board_file(store.seed_path).employees) == 2  # type: ignore[arg-type]

    def test_rejects_invalid_file(self, store: BoardStore, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("[]", encoding="utf-8")
        with pytest.raises(StoreError):
            store.import_seed(bad)


class TestBoardFiles:
    def test_write_then_read(self, tmp_path: Path, board: Board) -> None:
        path = tmp_path / "out.json"
        write_board_file(board, path)
        text = path.read_text(encoding="utf-8")
        assert "홍길동" in text
        assert "\"empType\"" in text
        assert read_board_file(path) == board

    def test_read_missing(self, tmp_path: Path) -> None:
        with pytest.raises(StoreError, match="Cannot read"):
            read_board_file(tmp_path / "nope.json")
