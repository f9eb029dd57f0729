"""Keyword tables for the intent parser.

The vocabulary is immutable configuration: the parser receives a
:class:`KeywordTable` at construction and never mutates it. Operators can
append phrases through ``[parser.extra_keywords]`` in ``staffboard.toml``;
:meth:`KeywordTable.extended` returns a new table with the additions.

Phrase sets overlap on purpose (``저장`` is both a persist keyword and part
of ``시나리오 저장``). The parser resolves the overlap by checking the
longer, more specific families first.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from pydantic import BaseModel

# Fields of KeywordTable that hold phrase families operators may extend.
PHRASE_FAMILIES: tuple[str, ...] = (
    "scenario_list",
    "scenario_save",
    "scenario_load",
    "scenario_delete",
    "reset",
    "persist",
    "help",
    "create_department",
    "delete_department",
    "create_employee",
    "delete_employee",
    "swap",
)


class KeywordTable(BaseModel):
    """Closed vocabulary of the command grammar."""

    model_config = {"frozen": True}

    # --- Scenario families (checked first, list before save/load/delete) ---
    scenario_list: tuple[str, ...] = ("시나리오 목록", "스냅샷 목록", "저장 목록")
    scenario_save: tuple[str, ...] = ("시나리오 저장", "스냅샷 저장", "상태 저장")
    scenario_load: tuple[str, ...] = (
        "시나리오 불러",
        "시나리오 로드",
        "스냅샷 불러",
        "상태 불러",
    )
    scenario_delete: tuple[str, ...] = ("시나리오 삭제", "스냅샷 삭제")

    # --- Singletons ---
    reset: tuple[str, ...] = ("초기화", "리셋", "reset", "원래대로", "처음으로")
    persist: tuple[str, ...] = ("저장", "save", "세이브")
    help: tuple[str, ...] = ("도움", "도움말", "help", "뭐", "어떻게", "사용법")

    # --- Structural ---
    create_department: tuple[str, ...] = ("부서 만들", "부서 추가", "부서 생성", "만들어")
    delete_department: tuple[str, ...] = ("부서 삭제", "부서 제거")
    create_employee: tuple[str, ...] = ("직원 추가", "사람 추가", "추가해", "추가", "생성해")
    delete_employee: tuple[str, ...] = ("직원 삭제", "사람 삭제", "삭제해")

    # --- Generic extraction ---
    swap: tuple[str, ...] = ("바꿔", "바꾸", "교환", "스왑", "swap", "맞바꿔", "서로")
    name_exclusions: tuple[str, ...] = (
        "이동",
        "옮기",
        "바꿔",
        "교환",
        "자리",
        "위치",
        "으로",
        "에게",
        "우측",
        "좌측",
        "오른",
        "왼쪽",
        "초록",
        "파란",
        "블록",
        "서로",
        "맞바꿔",
        "스왑",
    )

    # --- Structural label extraction (longest alternatives first) ---
    department_fillers: tuple[str, ...] = (
        "주세요",
        "만들어",
        "추가해",
        "생성해",
        "해줘",
        "부서",
        "추가",
        "생성",
        "줘",
        "에",
        "를",
        "을",
    )
    employee_fillers: tuple[str, ...] = (
        "주세요",
        "추가해",
        "만들어",
        "생성해",
        "해줘",
        "직원",
        "사람",
        "추가",
        "줘",
        "에",
        "를",
        "을",
    )

    # --- Scenario name extraction ---
    scenario_name_markers: tuple[str, ...] = (
        "시나리오",
        "스냅샷",
        "상태",
        "저장",
        "불러",
        "로드",
        "삭제",
    )
    particles: tuple[str, ...] = ("으로", "에서", "오기", "을", "를", "로", "에", "와")

    def extended(self, extra: Mapping[str, Sequence[str]]) -> KeywordTable:
        """Return a copy with *extra* phrases appended to the named families.

        Raises:
            KeyError: If a family name is not one of :data:`PHRASE_FAMILIES`.
        """
        updates: dict[str, tuple[str, ...]] = {}
        for family, phrases in extra.items():
            if family not in PHRASE_FAMILIES:
                msg = f"Unknown keyword family: {family!r}"
                raise KeyError(msg)
            current: tuple[str, ...] = getattr(self, family)
            additions = tuple(p for p in phrases if p and p not in current)
            updates[family] = current + additions
        return self.model_copy(update=updates)


DEFAULT_KEYWORDS = KeywordTable()
