"""ScenarioService — save, list, restore and manage board snapshots."""

from __future__ import annotations

import logging

from staffboard.infrastructure.board_store import StoreError
from staffboard.services._helpers import board_counts, default_scenario_name
from staffboard.services.base import BaseService
from staffboard.services.result import ServiceResult

logger = logging.getLogger(__name__)


def format_scenario_list(items: list[dict[str, str]]) -> str:
    """Numbered plain-text listing, newest first."""
    if not items:
        return "저장된 시나리오가 없습니다."
    lines = ["저장된 시나리오 목록:"]
    for i, item in enumerate(items, start=1):
        desc = f" - {item['description']}" if item.get("description") else ""
        lines.append(f"  {i}. {item['name']}{desc} ({item['created_at']})")
    return "\n".join(lines)


class ScenarioService(BaseService):
    """Named snapshots of the live board."""

    def list(self) -> ServiceResult:
        op = "scenario_list"
        try:
            items = [s.summary() for s in self._workspace.scenario_store.list()]
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc))
        return ServiceResult(
            ok=True,
            op=op,
            data={"scenarios": items, "message": format_scenario_list(items)},
            meta={"count": len(items)},
        )

    def save(self, name: str | None = None, description: str = "") -> ServiceResult:
        """Snapshot the live board. A missing name is synthesised from the clock."""
        op = "scenario_save"
        warnings: list[str] = []
        resolved = (name or "").strip() or default_scenario_name(
            self._workspace.settings.scenario.default_name_format
        )
        try:
            board = self._workspace.board
            scenario = self._workspace.scenario_store.save(resolved, board, description)
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", f"시나리오 저장 실패: {exc}", name=resolved)

        counts = board_counts(len(board.employees), len(board.departments))
        self._dispatch_event(
            "post_scenario_save",
            {"scenario_id": scenario.id, "name": scenario.name, "stats": counts},
            warnings,
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": scenario.id,
                "name": scenario.name,
                "generated_name": not (name or "").strip(),
                "created_at": scenario.created_at,
                "counts": counts,
                "message": f'시나리오 "{scenario.name}"(으)로 저장했습니다',
            },
            warnings=warnings,
        )

    def load(self, name: str | None) -> ServiceResult:
        """Replace the live board with the named snapshot."""
        op = "scenario_load"
        if not name or not name.strip():
            return self._failure(op, "MISSING_NAME", "불러올 시나리오 이름을 입력해주세요")
        try:
            scenario = self._workspace.scenario_store.get_by_name(name.strip())
            if scenario is None:
                return self._failure(
                    op, "NOT_FOUND", f"'{name}' 시나리오를 찾을 수 없습니다", name=name
                )
            board = scenario.board()
            self._workspace.replace_board(board)
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", f"시나리오 불러오기 실패: {exc}", name=name)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": scenario.id,
                "name": scenario.name,
                "changed": [e.id for e in board.entities()],
                "counts": board_counts(len(board.employees), len(board.departments)),
                "message": f'시나리오 "{scenario.name}"(을)를 불러왔습니다',
            },
        )

    def delete(self, name: str | None) -> ServiceResult:
        op = "scenario_delete"
        if not name or not name.strip():
            return self._failure(op, "MISSING_NAME", "삭제할 시나리오 이름을 입력해주세요")
        try:
            scenario = self._workspace.scenario_store.delete_by_name(name.strip())
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", f"시나리오 삭제 실패: {exc}", name=name)
        if scenario is None:
            return self._failure(op, "NOT_FOUND", f"'{name}' 시나리오를 찾을 수 없습니다", name=name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": scenario.id,
                "name": scenario.name,
                "message": f'시나리오 "{scenario.name}"(을)를 삭제했습니다',
            },
        )

    def rename(self, name: str, new_name: str) -> ServiceResult:
        op = "scenario_rename"
        if not new_name or not new_name.strip():
            return self._failure(op, "MISSING_NAME", "새 시나리오 이름을 입력해주세요")
        try:
            scenario = self._workspace.scenario_store.get_by_name(name)
            if scenario is None:
                return self._failure(
                    op, "NOT_FOUND", f"'{name}' 시나리오를 찾을 수 없습니다", name=name
                )
            self._workspace.scenario_store.rename(scenario.id, new_name)
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc), name=name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": scenario.id,
                "old_name": scenario.name,
                "name": new_name.strip(),
                "message": f'시나리오 "{scenario.name}"의 이름을 "{new_name.strip()}"(으)로 바꿨습니다',
            },
        )

    def describe(self, name: str, description: str) -> ServiceResult:
        op = "scenario_describe"
        try:
            scenario = self._workspace.scenario_store.get_by_name(name)
            if scenario is None:
                return self._failure(
                    op, "NOT_FOUND", f"'{name}' 시나리오를 찾을 수 없습니다", name=name
                )
            self._workspace.scenario_store.update_description(scenario.id, description)
        except StoreError as exc:
            return self._failure(op, "STORE_FAILED", str(exc), name=name)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "id": scenario.id,
                "name": scenario.name,
                "description": description.strip(),
                "message": f'시나리오 "{scenario.name}"의 설명을 저장했습니다',
            },
        )
