"""Shared pytest fixtures for staffboard tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from staffboard.config.settings import StaffboardSettings
from staffboard.domain.board import Board
from staffboard.infrastructure.workspace import Workspace


def _loc(coordinate: str, block: str, index: int) -> dict[str, Any]:
    return {"coordinate": coordinate, "block": block, "index": index}


SEED: dict[str, Any] = {
    "departments": [
        {
            "id": "dept_student",
            "dept": "학생처",
            "displayName": "학생처",
            "subDept": "",
            "isParentOrg": False,
            "members": ["emp_hong", "emp_lee"],
            "location": _loc("E2", "left", 44),
        },
        {
            "id": "dept_academic",
            "dept": "교무처",
            "displayName": "교무처",
            "subDept": "학사지원팀",
            "isParentOrg": False,
            "members": ["emp_kim"],
            "location": _loc("Y2", "right", 64),
        },
    ],
    "employees": [
        {
            "id": "emp_hong",
            "name": "홍길동",
            "position": "팀장",
            "empType": "regular",
            "dept": "학생처",
            "subDept": "",
            "photo": None,
            "photoPosY": 30,
            "location": _loc("C3", "left", 82),
        },
        {
            "id": "emp_kim",
            "name": "김철수",
            "position": "주무관",
            "empType": "contract",
            "dept": "교무처",
            "subDept": "학사지원팀",
            "photo": None,
            "photoPosY": 30,
            "location": _loc("D5", "left", 163),
        },
        {
            "id": "emp_lee",
            "name": "이영희",
            "position": "",
            "empType": "functional",
            "dept": "학생처",
            "subDept": "",
            "photo": None,
            "photoPosY": 40,
            "location": _loc("F2", "left", 45),
        },
    ],
    "lastUpdated": None,
}


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def seed_data() -> dict[str, Any]:
    """A fresh deep copy of the seed organisation chart."""
    return json.loads(json.dumps(SEED))


@pytest.fixture
def board(seed_data: dict[str, Any]) -> Board:
    """Seed board without parent-organisation cards."""
    return Board.from_record(seed_data)


@pytest.fixture
def seed_file(tmp_path: Path, seed_data: dict[str, Any]) -> Path:
    """Seed chart written to ``{tmp_path}/data.json`` (the default location)."""
    path = tmp_path / "data.json"
    path.write_text(json.dumps(seed_data, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, seed_file: Path) -> StaffboardSettings:
    return StaffboardSettings(root=tmp_path)


@pytest.fixture
def workspace(settings: StaffboardSettings) -> Workspace:
    """Workspace over the seed chart with an (empty) plugin event bus.

    The board is loaded eagerly so parent-organisation cards already exist.
    """
    ws = Workspace(settings)
    ws.init_event_bus()
    _ = ws.board
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_workspace(
    tmp_path: Path, seed_file: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Change CWD to a temp workspace holding the seed chart.

    Use via ``@pytest.mark.usefixtures("_isolated_workspace")`` on command
    test classes.
    """
    monkeypatch.delenv("STAFFBOARD_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
