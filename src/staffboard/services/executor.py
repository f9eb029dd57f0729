"""CommandExecutor — apply parsed commands to the live board.

One line of operator text in, one :class:`ServiceResult` out. The result's
``op`` is the command's action. Board mutations run inside
``Workspace.transaction()``, so a failed persist leaves the in-memory board
exactly as it was before the command.

Lifecycle events:
- ``post_board_change`` after a committed change (``data["changed"]``).
- ``post_command`` after every executed command, successful or not.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from staffboard.domain.board import Department, label_of
from staffboard.domain.grid import parse_coordinate
from staffboard.domain.parser import BoardIndex, IntentParser
from staffboard.infrastructure.board_store import StoreError
from staffboard.services._helpers import resolve_department, resolve_employee
from staffboard.services.base import BaseService
from staffboard.services.board import BoardService
from staffboard.services.result import ServiceResult
from staffboard.services.scenario import ScenarioService

if TYPE_CHECKING:
    from staffboard.domain.board import BoardChange
    from staffboard.domain.commands import (
        Command,
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
    from staffboard.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)

HELP_TEXT = """\
명령어 예시:
• 홍길동 C3 → 좌측 블록 C3으로 이동
• 홍길동 U1 → 우측 블록 U1로 이동
• 홍길동 AA5 → 우측 블록 AA5로 이동
• 홍길동 학생처 → 부서 근처 빈자리로 이동
• 홍길동 김철수 바꿔 → 자리 교환
• C3 D5 바꿔 → 좌표끼리 교환
• C3 D5 이동 → C3의 직원을 D5로 옮기기
• 초기화 → 원본 복구
• 저장 → 현재 상태 저장

부서:
• A1에 대학본부 만들어 → 부서 추가
• 부서 삭제 교무처 → 부서 삭제

직원:
• C3에 홍길동(팀장) 추가 → 직원 추가
• 직원 삭제 홍길동 → 직원 삭제

시나리오:
• 시나리오 저장 백업1 → 현재 상태 저장
• 시나리오 불러 백업1 → 저장된 상태 불러오기
• 시나리오 목록 → 저장 목록 보기
• 시나리오 삭제 백업1 → 삭제

좌표: A~T(1–20열) = 좌측 블록, U~AN(21–40열) = 우측 블록, 행 1–13"""

_GUESSED_SWAP_WARNING = "바꾸기 키워드 없이 두 이름만 인식되어 자리 교환으로 처리했습니다"


class CommandExecutor(BaseService):
    """Parse and execute operator commands against a workspace."""

    def __init__(self, workspace: Workspace, parser: IntentParser | None = None) -> None:
        super().__init__(workspace)
        self._parser = parser or IntentParser(workspace.settings.keyword_table())
        self._boards = BoardService(workspace)
        self._scenarios = ScenarioService(workspace)
        self._handlers: dict[str, Callable[[Any], ServiceResult]] = {
            "move_to_department": self._move_to_department,
            "move_to_coordinate": self._move_to_coordinate,
            "move_coordinate": self._move_coordinate,
            "swap_names": self._swap_names,
            "swap_coordinates": self._swap_coordinates,
            "reset": self._reset,
            "persist": self._persist,
            "help": self._help,
            "create_department": self._create_department,
            "delete_department": self._delete_department,
            "create_employee": self._create_employee,
            "delete_employee": self._delete_employee,
            "scenario_save": self._scenario_save,
            "scenario_load": self._scenario_load,
            "scenario_delete": self._scenario_delete,
            "scenario_list": self._scenario_list,
            "unrecognized": self._unrecognized,
        }

    @property
    def parser(self) -> IntentParser:
        return self._parser

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Command:
        """Interpret *text* against the current board's names."""
        try:
            index = BoardIndex.from_board(self._workspace.board)
        except StoreError:
            logger.debug("Board unavailable; parsing without a name index", exc_info=True)
            index = BoardIndex()
        return self._parser.parse(text, index)

    def interpret(self, text: str) -> ServiceResult:
        """Parse only. Nothing on the board changes."""
        command = self.parse(text)
        return ServiceResult(
            ok=True,
            op="parse",
            data={
                "action": command.action,
                "recognized": command.action != "unrecognized",
                "command": command.model_dump(mode="json"),
            },
        )

    def run(self, text: str) -> ServiceResult:
        """Parse *text* and execute the resulting command."""
        return self.execute(self.parse(text))

    def execute(self, command: Command) -> ServiceResult:
        """Execute one command. Never raises for operator or storage errors."""
        handler = self._handlers[command.action]
        try:
            result = handler(command)
        except StoreError as exc:
            logger.warning("Storage failure during %s: %s", command.action, exc)
            result = self._failure(command.action, "STORE_FAILED", f"저장소 오류: {exc}")

        warnings = list(result.warnings)
        changed = result.data.get("changed") if result.ok else None
        if changed:
            self._dispatch_event(
                "post_board_change",
                {
                    "action": command.action,
                    "changed_ids": list(changed),
                    "last_updated": self._workspace.board.last_updated,
                },
                warnings,
            )
        self._dispatch_event(
            "post_command",
            {
                "action": command.action,
                "text": command.original,
                "ok": result.ok,
                "message": result.message,
            },
            warnings,
        )
        logger.debug("Executed %s: ok=%s", command.action, result.ok)
        return result.model_copy(
            update={
                "warnings": warnings,
                "meta": {**(result.meta or {}), "command": command.model_dump(mode="json")},
            }
        )

    # ------------------------------------------------------------------
    # Moves and swaps
    # ------------------------------------------------------------------

    def _move_to_department(self, command: MoveToDepartment) -> ServiceResult:
        op = command.action
        board = self._workspace.board
        employee = resolve_employee(board, command.name)
        if employee is None:
            return self._not_found_person(op, command.name)
        department = resolve_department(board, command.department)
        if department is None:
            return self._failure(
                op,
                "NOT_FOUND",
                f"'{command.department}' 부서를 찾을 수 없습니다",
                department=command.department,
            )

        with self._workspace.transaction() as txn:
            change = txn.apply(
                txn.board.move_to_department(
                    employee.id,
                    department.id,
                    max_radius=self._workspace.settings.board.max_search_radius,
                )
            )
        if not change.ok:
            if change.code == "NO_FREE_SEAT":
                return self._failure(
                    op,
                    "NO_FREE_SEAT",
                    f"{department.label} 주변에 빈자리가 없습니다",
                    department=department.label,
                )
            return self._change_failure(op, change)
        return self._changed(
            op,
            f"{employee.name}님을 {department.label}(으)로 이동했습니다",
            change,
            department=department.label,
        )

    def _move_to_coordinate(self, command: MoveToCoordinate) -> ServiceResult:
        op = command.action
        target = parse_coordinate(command.coordinate)
        if target is None:
            return self._invalid_coordinate(op, command.coordinate)
        board = self._workspace.board
        employee = resolve_employee(board, command.name)
        if employee is None:
            return self._not_found_person(op, command.name)

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.relocate(employee.id, target))
        if not change.ok:
            if change.code == "OCCUPIED" and change.occupant is not None:
                existing = label_of(change.occupant)
                suggestion = f"{employee.name}이랑 {existing} 바꿔"
                return self._failure(
                    op,
                    "OCCUPIED",
                    f'{target}에 이미 {existing}이(가) 있습니다. "{suggestion}"를 시도해보세요.',
                    coordinate=target.label,
                    occupant=existing,
                    suggestion=suggestion,
                )
            if change.code == "SAME_TARGET":
                return self._failure(
                    op, "SAME_TARGET", f"{employee.name}님은 이미 {target}에 있습니다"
                )
            return self._change_failure(op, change)
        return self._changed(op, f"{employee.name}님을 {target}(으)로 이동했습니다", change)

    def _move_coordinate(self, command: MoveCoordinate) -> ServiceResult:
        op = command.action
        source = parse_coordinate(command.source)
        target = parse_coordinate(command.target)
        if source is None or target is None:
            return self._invalid_coordinate(op, command.source if source is None else command.target)
        board = self._workspace.board
        entity = board.at(source)
        if entity is None:
            return self._failure(
                op, "EMPTY_COORDINATE", f"{source}에 아무것도 없습니다", coordinate=source.label
            )
        if isinstance(entity, Department):
            return self._failure(
                op,
                "DEPARTMENT_LOCKED",
                "부서 카드는 이동할 수 없습니다",
                coordinate=source.label,
                department=entity.label,
            )

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.relocate(entity.id, target))
        if not change.ok:
            if change.code == "OCCUPIED" and change.occupant is not None:
                existing = label_of(change.occupant)
                return self._failure(
                    op,
                    "OCCUPIED",
                    f"{target}에 이미 {existing}이(가) 있습니다",
                    coordinate=target.label,
                    occupant=existing,
                )
            return self._change_failure(op, change)
        return self._changed(op, f"{source}를 {target}(으)로 이동했습니다", change)

    def _swap_names(self, command: SwapNames) -> ServiceResult:
        op = command.action
        board = self._workspace.board
        first = resolve_employee(board, command.first)
        if first is None:
            return self._not_found_person(op, command.first)
        second = resolve_employee(board, command.second)
        if second is None:
            return self._not_found_person(op, command.second)

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.swap(first.id, second.id))
        if not change.ok:
            return self._change_failure(op, change)

        result = self._changed(
            op,
            f"{first.name}님과 {second.name}님의 자리를 바꿨습니다",
            change,
            guessed=command.guessed,
        )
        if command.guessed:
            return result.model_copy(update={"warnings": [_GUESSED_SWAP_WARNING]})
        return result

    def _swap_coordinates(self, command: SwapCoordinates) -> ServiceResult:
        op = command.action
        first = parse_coordinate(command.first)
        second = parse_coordinate(command.second)
        if first is None or second is None:
            return self._invalid_coordinate(op, command.first if first is None else command.second)

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.swap_at(first, second))
        if not change.ok:
            if change.code == "EMPTY_COORDINATE":
                return self._failure(
                    op,
                    "EMPTY_COORDINATE",
                    "해당 좌표에 교환할 항목이 없습니다",
                    coordinate=change.coordinate.label if change.coordinate else None,
                )
            return self._change_failure(op, change)
        return self._changed(op, f"{first}과 {second}의 자리를 바꿨습니다", change)

    # ------------------------------------------------------------------
    # Singletons
    # ------------------------------------------------------------------

    def _reset(self, command: Reset) -> ServiceResult:
        return self._boards.reset()

    def _persist(self, command: Persist) -> ServiceResult:
        return self._boards.persist()

    def _help(self, command: Help) -> ServiceResult:
        return ServiceResult(ok=True, op=command.action, data={"message": HELP_TEXT})

    # ------------------------------------------------------------------
    # Structural
    # ------------------------------------------------------------------

    def _create_department(self, command: CreateDepartment) -> ServiceResult:
        op = command.action
        target = parse_coordinate(command.coordinate)
        if target is None:
            return self._invalid_coordinate(op, command.coordinate)

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.add_department(command.name, target))
        if not change.ok:
            if change.code == "OCCUPIED" and change.occupant is not None:
                existing = label_of(change.occupant)
                return self._failure(
                    op,
                    "OCCUPIED",
                    f'{target}에 이미 "{existing}"이(가) 있습니다. 먼저 이동시켜주세요.',
                    coordinate=target.label,
                    occupant=existing,
                )
            return self._change_failure(op, change)
        return self._changed(
            op, f'"{command.name}" 부서를 {target}에 추가했습니다', change, name=command.name
        )

    def _delete_department(self, command: DeleteDepartment) -> ServiceResult:
        op = command.action
        department = resolve_department(self._workspace.board, command.name)
        if department is None:
            return self._failure(
                op, "NOT_FOUND", f'"{command.name}" 부서를 찾을 수 없습니다', name=command.name
            )

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.remove(department.id))
        if not change.ok:
            return self._change_failure(op, change)
        return self._changed(
            op, f'"{department.label}" 부서를 삭제했습니다', change, name=department.label
        )

    def _create_employee(self, command: CreateEmployee) -> ServiceResult:
        op = command.action
        target = parse_coordinate(command.coordinate)
        if target is None:
            return self._invalid_coordinate(op, command.coordinate)

        with self._workspace.transaction() as txn:
            change = txn.apply(
                txn.board.add_employee(command.name, target, position=command.position)
            )
        if not change.ok:
            if change.code == "OCCUPIED" and change.occupant is not None:
                existing = label_of(change.occupant)
                return self._failure(
                    op,
                    "OCCUPIED",
                    f'{target}에 이미 "{existing}"이(가) 있습니다',
                    coordinate=target.label,
                    occupant=existing,
                )
            return self._change_failure(op, change)
        return self._changed(
            op,
            f'"{command.name}" 직원을 {target}에 추가했습니다',
            change,
            name=command.name,
            position=command.position,
        )

    def _delete_employee(self, command: DeleteEmployee) -> ServiceResult:
        op = command.action
        employee = resolve_employee(self._workspace.board, command.name)
        if employee is None:
            return self._failure(
                op, "NOT_FOUND", f'"{command.name}" 직원을 찾을 수 없습니다', name=command.name
            )

        with self._workspace.transaction() as txn:
            change = txn.apply(txn.board.remove(employee.id))
        if not change.ok:
            return self._change_failure(op, change)
        return self._changed(op, f'"{employee.name}" 직원을 삭제했습니다', change, name=employee.name)

    # ------------------------------------------------------------------
    # Scenarios
    # ------------------------------------------------------------------

    def _scenario_save(self, command: ScenarioSave) -> ServiceResult:
        return self._scenarios.save(command.name)

    def _scenario_load(self, command: ScenarioLoad) -> ServiceResult:
        return self._scenarios.load(command.name)

    def _scenario_delete(self, command: ScenarioDelete) -> ServiceResult:
        return self._scenarios.delete(command.name)

    def _scenario_list(self, command: ScenarioList) -> ServiceResult:
        return self._scenarios.list()

    # ------------------------------------------------------------------
    # Terminal
    # ------------------------------------------------------------------

    def _unrecognized(self, command: Unrecognized) -> ServiceResult:
        return self._failure(
            command.action,
            "UNRECOGNIZED",
            f"{command.reason}. '도움말'을 입력하면 사용법을 볼 수 있습니다",
            names=list(command.names),
            coordinates=list(command.coordinates),
            departments=list(command.departments),
        )

    # ------------------------------------------------------------------
    # Result helpers
    # ------------------------------------------------------------------

    def _changed(self, op: str, message: str, change: BoardChange, **extra: Any) -> ServiceResult:
        data: dict[str, Any] = {
            "message": message,
            "changed": list(change.changed),
            "coordinate": change.coordinate.label if change.coordinate else None,
            "last_updated": self._workspace.board.last_updated,
        }
        data.update(extra)
        return ServiceResult(ok=True, op=op, data=data)

    def _change_failure(self, op: str, change: BoardChange) -> ServiceResult:
        return self._failure(
            op,
            change.code or "FAILED",
            change.message,
            coordinate=change.coordinate.label if change.coordinate else None,
        )

    def _not_found_person(self, op: str, name: str) -> ServiceResult:
        return self._failure(op, "NOT_FOUND", f"'{name}'님을 찾을 수 없습니다", name=name)

    def _invalid_coordinate(self, op: str, coordinate: str) -> ServiceResult:
        return self._failure(
            op,
            "INVALID_COORDINATE",
            f"잘못된 좌표입니다: {coordinate}",
            coordinate=coordinate,
        )
