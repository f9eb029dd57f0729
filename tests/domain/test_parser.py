"""Tests for the intent parser."""

from __future__ import annotations

import pytest

from staffboard.domain.board import Board
from staffboard.domain.commands import (
    CreateDepartment,
    CreateEmployee,
    DeleteDepartment,
    DeleteEmployee,
    Help,
    MoveCoordinate,
    MoveToCoordinate,
    MoveToDepartment,
    Persist,
    Reset,
    ScenarioDelete,
    ScenarioList,
    ScenarioLoad,
    ScenarioSave,
    SwapCoordinates,
    SwapNames,
    Unrecognized,
)
from staffboard.domain.keywords import DEFAULT_KEYWORDS
from staffboard.domain.parser import BoardIndex, IntentParser, parse_command


@pytest.fixture
def parser() -> IntentParser:
    return IntentParser()


@pytest.fixture
def index(board: Board) -> BoardIndex:
    return BoardIndex.from_board(board)


class TestCoreProperties:
    def test_name_and_coordinate(self, parser: IntentParser) -> None:
        cmd = parser.parse("민수 C3")
        assert cmd == MoveToCoordinate(original="민수 C3", name="민수", coordinate="C3")

    def test_two_names_with_swap_keyword(self, parser: IntentParser) -> None:
        cmd = parser.parse("민수 철수 바꿔")
        assert isinstance(cmd, SwapNames)
        assert (cmd.first, cmd.second) == ("민수", "철수")
        assert cmd.guessed is False

    def test_create_department(self, parser: IntentParser) -> None:
        cmd = parser.parse("A1에 대학본부 만들어")
        assert isinstance(cmd, CreateDepartment)
        assert cmd.name == "대학본부"
        assert cmd.coordinate == "A1"

    def test_scenario_save_without_name(self, parser: IntentParser) -> None:
        cmd = parser.parse("시나리오 저장")
        assert isinstance(cmd, ScenarioSave)
        assert cmd.name is None

    def test_gibberish(self, parser: IntentParser) -> None:
        cmd = parser.parse("asdkfj")
        assert isinstance(cmd, Unrecognized)
        assert cmd.names == ()
        assert cmd.coordinates == ()
        assert cmd.departments == ()

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input(self, parser: IntentParser, text: str | None) -> None:
        cmd = parser.parse(text)
        assert isinstance(cmd, Unrecognized)
        assert cmd.reason == "빈 명령어"

    @pytest.mark.parametrize(
        "text",
        ["'", "\"\"", "A", "ZZ99 ZZ98", "(((", "이동 이동", "🙂", "부서 만들어", "직원 추가"],
    )
    def test_never_raises(self, parser: IntentParser, text: str) -> None:
        assert parser.parse(text).original == text.strip()


class TestKnownBoard:
    def test_move_to_department(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동 학생처", index)
        assert cmd == MoveToDepartment(original="홍길동 학생처", name="홍길동", department="학생처")

    def test_sub_department_label(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동 학사지원팀", index)
        assert isinstance(cmd, MoveToDepartment)
        assert cmd.department == "학사지원팀"

    def test_known_names_swap(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동 김철수 바꿔", index)
        assert isinstance(cmd, SwapNames)
        assert (cmd.first, cmd.second) == ("홍길동", "김철수")

    def test_guessed_swap(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동 김철수", index)
        assert isinstance(cmd, SwapNames)
        assert cmd.guessed is True

    def test_coordinate_with_particle(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동 U1로 이동", index)
        assert isinstance(cmd, MoveToCoordinate)
        assert cmd.coordinate == "U1"

    def test_lowercase_coordinate_rendered_upper(self, parser: IntentParser) -> None:
        cmd = parser.parse("민수 aa5")
        assert isinstance(cmd, MoveToCoordinate)
        assert cmd.coordinate == "AA5"

    def test_single_name_is_unrecognized(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("홍길동", index)
        assert isinstance(cmd, Unrecognized)
        assert cmd.names == ("홍길동",)

    def test_department_fragment_not_a_name(self, parser: IntentParser) -> None:
        index = BoardIndex(departments=(("학생처", ""),))
        cmd = parser.parse("민수 학생처", index)
        assert cmd == MoveToDepartment(original="민수 학생처", name="민수", department="학생처")

    def test_parse_command_wrapper(self, board: Board) -> None:
        cmd = parse_command("홍길동 C9", board)
        assert isinstance(cmd, MoveToCoordinate)
        assert cmd.name == "홍길동"


class TestCoordinateCommands:
    def test_swap_coordinates(self, parser: IntentParser) -> None:
        cmd = parser.parse("C3 D5 바꿔")
        assert cmd == SwapCoordinates(original="C3 D5 바꿔", first="C3", second="D5")

    def test_move_coordinate_without_swap(self, parser: IntentParser) -> None:
        cmd = parser.parse("C3 D5 이동")
        assert cmd == MoveCoordinate(original="C3 D5 이동", source="C3", target="D5")


class TestSingletons:
    @pytest.mark.parametrize("text", ["초기화", "리셋", "RESET", "원래대로 해줘"])
    def test_reset(self, parser: IntentParser, text: str) -> None:
        assert isinstance(parser.parse(text), Reset)

    @pytest.mark.parametrize("text", ["저장", "save", "지금 세이브"])
    def test_persist(self, parser: IntentParser, text: str) -> None:
        assert isinstance(parser.parse(text), Persist)

    @pytest.mark.parametrize("text", ["도움말", "help", "사용법 알려줘"])
    def test_help(self, parser: IntentParser, text: str) -> None:
        assert isinstance(parser.parse(text), Help)


class TestScenarios:
    def test_list_checked_before_save(self, parser: IntentParser) -> None:
        assert isinstance(parser.parse("저장 목록"), ScenarioList)
        assert isinstance(parser.parse("시나리오 목록"), ScenarioList)

    def test_save_with_name(self, parser: IntentParser) -> None:
        cmd = parser.parse("시나리오 저장 백업1")
        assert isinstance(cmd, ScenarioSave)
        assert cmd.name == "백업1"

    def test_load_quoted(self, parser: IntentParser) -> None:
        cmd = parser.parse("시나리오 불러 '백업 1'")
        assert isinstance(cmd, ScenarioLoad)
        assert cmd.name == "백업 1"

    def test_leading_particle_stripped(self, parser: IntentParser) -> None:
        cmd = parser.parse("시나리오 불러오기 백업1")
        assert isinstance(cmd, ScenarioLoad)
        assert cmd.name == "백업1"

    def test_delete(self, parser: IntentParser) -> None:
        cmd = parser.parse("시나리오 삭제 백업1")
        assert cmd == ScenarioDelete(original="시나리오 삭제 백업1", name="백업1")

    def test_scenario_beats_persist(self, parser: IntentParser) -> None:
        assert isinstance(parser.parse("상태 저장"), ScenarioSave)


class TestStructural:
    def test_create_department_with_phrase(self, parser: IntentParser) -> None:
        cmd = parser.parse("AA3에 기획처 부서 추가")
        assert cmd == CreateDepartment(original="AA3에 기획처 부서 추가", name="기획처", coordinate="AA3")

    def test_create_department_quoted(self, parser: IntentParser) -> None:
        cmd = parser.parse("B2에 '국제 교류처' 만들어")
        assert isinstance(cmd, CreateDepartment)
        assert cmd.name == "국제 교류처"

    def test_create_employee_with_title(self, parser: IntentParser) -> None:
        cmd = parser.parse("G4에 박민수(주무관) 추가")
        assert cmd == CreateEmployee(
            original="G4에 박민수(주무관) 추가", name="박민수", coordinate="G4", position="주무관"
        )

    def test_create_employee_residual_name(self, parser: IntentParser) -> None:
        cmd = parser.parse("직원 추가 G4 박민수")
        assert isinstance(cmd, CreateEmployee)
        assert cmd.name == "박민수"
        assert cmd.position == ""

    def test_create_employee_quoted(self, parser: IntentParser) -> None:
        cmd = parser.parse("G4에 '남궁민수' 추가")
        assert isinstance(cmd, CreateEmployee)
        assert cmd.name == "남궁민수"

    def test_create_without_coordinate_falls_through(self, parser: IntentParser) -> None:
        cmd = parser.parse("박민수 추가")
        assert not isinstance(cmd, CreateEmployee)

    def test_delete_department_known(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("부서 삭제 교무처", index)
        assert cmd == DeleteDepartment(original="부서 삭제 교무처", name="교무처")

    def test_delete_department_quoted(self, parser: IntentParser) -> None:
        cmd = parser.parse("부서 삭제 '기획처'")
        assert isinstance(cmd, DeleteDepartment)
        assert cmd.name == "기획처"

    def test_delete_employee(self, parser: IntentParser, index: BoardIndex) -> None:
        cmd = parser.parse("직원 삭제 홍길동", index)
        assert cmd == DeleteEmployee(original="직원 삭제 홍길동", name="홍길동")


class TestConfiguredKeywords:
    def test_extra_reset_phrase(self) -> None:
        parser = IntentParser(DEFAULT_KEYWORDS.extended({"reset": ["되돌려"]}))
        assert isinstance(parser.parse("되돌려"), Reset)

    def test_default_parser_unaffected(self, parser: IntentParser) -> None:
        DEFAULT_KEYWORDS.extended({"reset": ["되돌려"]})
        assert not isinstance(parser.parse("되돌려"), Reset)
        assert parser.keywords is DEFAULT_KEYWORDS
