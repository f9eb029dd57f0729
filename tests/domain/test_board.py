"""Tests for the board model and its mutation primitives."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from staffboard.domain.board import Board, Department, Employee, label_of
from staffboard.domain.grid import parse_coordinate
from staffboard.domain.types import Block, EmploymentType


def _labels(board: Board) -> list[str]:
    return [e.coordinate for e in board.entities()]


def _assert_unique(board: Board) -> None:
    labels = _labels(board)
    assert len(labels) == len(set(labels))


class TestWireFormat:
    def test_camel_case_fields(self, board: Board) -> None:
        hong = board.find_employee("emp_hong")
        assert hong is not None
        assert hong.emp_type is EmploymentType.REGULAR
        assert hong.photo_pos_y == 30
        academic = board.find_department("dept_academic")
        assert academic is not None
        assert academic.sub_dept == "학사지원팀"
        assert academic.display_name == "교무처"

    def test_location_shape_on_dump(self, board: Board) -> None:
        record = board.to_record()
        emp = record["employees"][0]
        assert emp["location"] == {"coordinate": "C3", "block": "left", "index": 82}
        assert "empType" in emp
        assert "lastUpdated" in record
        assert "kind" not in emp

    def test_block_and_index_recomputed(self, seed_data: dict[str, Any]) -> None:
        seed_data["employees"][0]["location"] = {"coordinate": "u1", "block": "left", "index": 0}
        board = Board.from_record(seed_data)
        hong = board.find_employee("emp_hong")
        assert hong is not None
        assert hong.coordinate == "U1"
        assert hong.block is Block.RIGHT

    def test_plain_string_location(self) -> None:
        emp = Employee(id="emp_x", name="박민수", location="B2")
        assert emp.location == parse_coordinate("B2")

    def test_invalid_location_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Employee(id="emp_x", name="박민수", location="ZZ99")

    def test_shared_coordinate_rejected(self, seed_data: dict[str, Any]) -> None:
        seed_data["employees"][1]["location"] = {"coordinate": "C3"}
        with pytest.raises(ValidationError, match="both occupy C3"):
            Board.from_record(seed_data)

    def test_duplicate_id_rejected(self, seed_data: dict[str, Any]) -> None:
        seed_data["employees"][1]["id"] = "emp_hong"
        with pytest.raises(ValidationError, match="Duplicate entity id"):
            Board.from_record(seed_data)

    def test_null_text_fields(self) -> None:
        emp = Employee(id="emp_x", name="박민수", position=None, location="B2")
        assert emp.position == ""


class TestQueries:
    def test_at(self, board: Board) -> None:
        occupant = board.at("c3")
        assert occupant is not None
        assert occupant.id == "emp_hong"
        assert board.at("A1") is None
        assert board.at("nope") is None

    def test_find_employees_by_name(self, board: Board) -> None:
        assert [e.id for e in board.find_employees_by_name("길동")] == ["emp_hong"]
        assert board.find_employees_by_name("  ") == []

    def test_find_departments_matches_sub_label(self, board: Board) -> None:
        assert [d.id for d in board.find_departments_by_name("학사")] == ["dept_academic"]

    def test_occupied_by_block(self, board: Board) -> None:
        right = board.occupied(Block.RIGHT)
        assert {c.label for c in right} == {"Y2"}
        assert len(board.occupied()) == 5

    def test_labels(self, board: Board) -> None:
        dept = Department(id="dept_x", dept="기획처", display_name="기획팀", location="A1")
        assert label_of(dept) == "기획팀"
        assert dept.name == "기획처"
        hong = board.find_employee("emp_hong")
        assert hong is not None
        assert label_of(hong) == "홍길동"


class TestRelocate:
    def test_moves_to_empty(self, board: Board) -> None:
        change = board.relocate("emp_hong", "G7")
        assert change.ok
        assert change.changed == ("emp_hong",)
        assert board.at("G7") is not None
        assert board.at("C3") is None

    def test_occupied_rejected(self, board: Board) -> None:
        change = board.relocate("emp_hong", "D5")
        assert not change.ok
        assert change.code == "OCCUPIED"
        assert change.occupant is not None
        assert change.occupant.id == "emp_kim"
        assert board.find_employee("emp_hong").coordinate == "C3"  # type: ignore[union-attr]
        _assert_unique(board)

    def test_same_target(self, board: Board) -> None:
        assert board.relocate("emp_hong", "C3").code == "SAME_TARGET"

    def test_unknown_entity(self, board: Board) -> None:
        assert board.relocate("emp_none", "G7").code == "NOT_FOUND"

    def test_invalid_coordinate(self, board: Board) -> None:
        assert board.relocate("emp_hong", "A99").code == "INVALID_COORDINATE"


class TestSwap:
    def test_swaps_both(self, board: Board) -> None:
        change = board.swap("emp_hong", "emp_kim")
        assert change.ok
        assert set(change.changed) == {"emp_hong", "emp_kim"}
        assert board.find_employee("emp_hong").coordinate == "D5"  # type: ignore[union-attr]
        assert board.find_employee("emp_kim").coordinate == "C3"  # type: ignore[union-attr]

    def test_invalid_side_changes_nothing(self, board: Board) -> None:
        before = _labels(board)
        change = board.swap("emp_hong", "emp_missing")
        assert not change.ok
        assert change.code == "NOT_FOUND"
        assert _labels(board) == before

    def test_swap_with_self(self, board: Board) -> None:
        assert board.swap("emp_hong", "emp_hong").code == "SAME_TARGET"

    def test_swap_at(self, board: Board) -> None:
        change = board.swap_at("C3", "E2")
        assert change.ok
        assert board.at("C3").id == "dept_student"  # type: ignore[union-attr]

    def test_swap_at_empty_side(self, board: Board) -> None:
        before = _labels(board)
        change = board.swap_at("C3", "A1")
        assert change.code == "EMPTY_COORDINATE"
        assert change.coordinate == parse_coordinate("A1")
        assert _labels(board) == before


class TestMoveToDepartment:
    def test_nearest_free_seat_and_membership(self, board: Board) -> None:
        change = board.move_to_department("emp_hong", "dept_academic")
        assert change.ok
        hong = board.find_employee("emp_hong")
        assert hong is not None
        # Y2 holds the department; ring 1 starts at column X.
        assert hong.coordinate == "X1"
        assert hong.dept == "교무처"
        assert hong.sub_dept == "학사지원팀"
        student = board.find_department("dept_student")
        academic = board.find_department("dept_academic")
        assert "emp_hong" not in student.members  # type: ignore[union-attr]
        assert "emp_hong" in academic.members  # type: ignore[union-attr]
        assert set(change.changed) == {"emp_hong", "dept_student", "dept_academic"}

    def test_own_seat_counts_as_free(self, board: Board) -> None:
        # D1 is the first ring-1 cell of E2 and is already 이영희's seat.
        board.relocate("emp_lee", "D1")
        change = board.move_to_department("emp_lee", "dept_student")
        assert change.ok
        assert board.find_employee("emp_lee").coordinate == "D1"  # type: ignore[union-attr]

    def test_no_free_seat(self) -> None:
        board = Board(
            departments=[Department(id="dept_a", dept="기획처", location="A1")],
            employees=[
                Employee(id="emp_1", name="가나", location="B1"),
                Employee(id="emp_2", name="다라", location="A2"),
                Employee(id="emp_3", name="마바", location="B2"),
                Employee(id="emp_4", name="사아", location="J9"),
            ],
        )
        change = board.move_to_department("emp_4", "dept_a", max_radius=1)
        assert change.code == "NO_FREE_SEAT"
        assert board.find_employee("emp_4").coordinate == "J9"  # type: ignore[union-attr]

    def test_unknown_department(self, board: Board) -> None:
        assert board.move_to_department("emp_hong", "dept_none").code == "NOT_FOUND"


class TestStructural:
    def test_add_employee(self, board: Board) -> None:
        change = board.add_employee("박민수", "G4", position="주무관")
        assert change.ok
        new = board.find_employee(change.changed[0])
        assert new is not None
        assert new.id.startswith("emp_")
        assert new.position == "주무관"

    def test_add_employee_occupied(self, board: Board) -> None:
        before = len(board.employees)
        change = board.add_employee("박민수", "C3")
        assert change.code == "OCCUPIED"
        assert len(board.employees) == before

    def test_add_employee_blank_name(self, board: Board) -> None:
        assert board.add_employee("  ", "G4").code == "INVALID_NAME"

    def test_add_department_duplicate_id(self, board: Board) -> None:
        change = board.add_department("기획처", "A3", department_id="dept_student")
        assert change.code == "DUPLICATE_ID"

    def test_add_department_defaults_display_name(self, board: Board) -> None:
        change = board.add_department("기획처", "A3")
        dept = board.find_department(change.changed[0])
        assert dept is not None
        assert dept.display_name == "기획처"

    def test_remove_employee_drops_membership(self, board: Board) -> None:
        change = board.remove("emp_hong")
        assert change.ok
        assert board.find_employee("emp_hong") is None
        assert "emp_hong" not in board.find_department("dept_student").members  # type: ignore[union-attr]

    def test_remove_department(self, board: Board) -> None:
        assert board.remove("dept_student").ok
        assert board.find_department("dept_student") is None
        assert board.remove("dept_student").code == "NOT_FOUND"

    @pytest.mark.parametrize(("offset", "expected"), [(-5, 0), (55, 55), (250, 100)])
    def test_photo_offset_clamped(self, board: Board, offset: int, expected: int) -> None:
        assert board.set_photo_offset("emp_hong", offset).ok
        assert board.find_employee("emp_hong").photo_pos_y == expected  # type: ignore[union-attr]


class TestParentOrgs:
    def test_creates_missing(self, board: Board) -> None:
        created = board.ensure_parent_orgs([("대학본부", "A1"), ("총장직속기관", "U1")])
        assert len(created) == 2
        a1 = board.at("A1")
        assert isinstance(a1, Department)
        assert a1.is_parent_org

    def test_idempotent(self, board: Board) -> None:
        board.ensure_parent_orgs([("대학본부", "A1")])
        assert board.ensure_parent_orgs([("대학본부", "A1")]) == []

    def test_anchor_occupant_moved(self, board: Board) -> None:
        created = board.ensure_parent_orgs([("대학본부", "C3")])
        assert len(created) == 1
        hong = board.find_employee("emp_hong")
        assert hong is not None
        assert hong.coordinate != "C3"
        _assert_unique(board)


class TestUniquenessUnderSequences:
    def test_mixed_operations_keep_cells_unique(self, board: Board) -> None:
        board.relocate("emp_hong", "D5")
        board.swap("emp_hong", "emp_kim")
        board.add_employee("박민수", "C3")
        board.add_employee("최지우", "D5")
        board.swap_at("E2", "F2")
        board.add_department("기획처", "F2")
        board.move_to_department("emp_kim", "dept_student")
        board.relocate("emp_lee", "E2")
        _assert_unique(board)
        Board.from_record(board.to_record())

    def test_touch(self, board: Board) -> None:
        board.touch("2024-03-07 09:05:00")
        assert board.last_updated == "2024-03-07 09:05:00"
        board.touch()
        assert board.last_updated is not None
        assert len(board.last_updated) == 19

    def test_snapshot_is_independent(self, board: Board) -> None:
        copy = board.snapshot()
        board.relocate("emp_hong", "G7")
        assert copy.find_employee("emp_hong").coordinate == "C3"  # type: ignore[union-attr]
