"""Intent parser — free-form operator text to a structured :data:`Command`.

This is a closed-vocabulary keyword matcher, not a language model. Word
order does not matter; evidence is pulled out of the text and weighed in a
fixed priority order, first match wins:

1. Scenario families: list, save, load, delete (specific phrases before
   the generic ``저장`` persist keyword).
2. Singletons: reset, persist, help.
3. Structural create/delete for departments, then employees. A create
   needs a coordinate and a label; if either is missing the attempt falls
   through to the next interpretation instead of failing.
4. Generic extraction: names, coordinates, departments, swap intent.
5. Disambiguation:
   swap + 2 names → name swap; swap + 2 coordinates → coordinate swap;
   name + department → move to department; name + coordinate → move to
   coordinate; 2 coordinates → coordinate move; 2 names → name swap
   flagged ``guessed``.
6. Otherwise :class:`~staffboard.domain.commands.Unrecognized` with the
   evidence found.

The parser reads the board only through a :class:`BoardIndex` projection
and never mutates anything. It never raises.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

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
from staffboard.domain.grid import parse_coordinate, scan_coordinates
from staffboard.domain.keywords import DEFAULT_KEYWORDS, KeywordTable

if TYPE_CHECKING:
    from staffboard.domain.board import Board

logger = logging.getLogger(__name__)

# Hangul syllables only; short runs approximate Korean given names.
_SHORT_NAME = re.compile(r"[가-힣]{2,3}")
_PERSON_NAME = re.compile(r"[가-힣]{2,4}")
_HANGUL_WORD = re.compile(r"[가-힣]+")

# Loose coordinate token for structural commands; validated afterwards.
_LOOSE_COORDINATE = re.compile(r"([A-Za-z]{1,2})(\d{1,2})")

_QUOTED = re.compile(r"[\"'`“”‘’]([^\"'`“”‘’]+)[\"'`“”‘’]")
_NAME_WITH_TITLE = re.compile(r"([가-힣]{2,4})\s*[(（]([^)）]+)[)）]")

_MIN_LABEL_LENGTH = 2


@dataclass(frozen=True)
class BoardIndex:
    """Read-only name projection of a board, in insertion order.

    ``departments`` pairs each department name with its sub-label
    (empty string when there is none).
    """

    employee_names: tuple[str, ...] = ()
    departments: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_board(cls, board: Board | None) -> BoardIndex:
        if board is None:
            return cls()
        return cls(
            employee_names=tuple(e.name for e in board.employees),
            departments=tuple((d.dept, d.sub_dept or "") for d in board.departments),
        )

    def mentions_department(self, fragment: str) -> bool:
        return any(
            fragment in name or (sub and fragment in sub) for name, sub in self.departments
        )


class IntentParser:
    """Stateless interpreter configured with an immutable keyword table."""

    def __init__(self, keywords: KeywordTable = DEFAULT_KEYWORDS) -> None:
        self._kw = keywords

    @property
    def keywords(self) -> KeywordTable:
        return self._kw

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def parse(self, text: str | None, index: BoardIndex | None = None) -> Command:
        """Interpret one line of operator text."""
        if not text or not isinstance(text, str) or not text.strip():
            return Unrecognized(original=text or "", reason="빈 명령어")

        source = text.strip()
        index = index or BoardIndex()

        command = (
            self._scenario(source)
            or self._singleton(source)
            or self._structural(source, index)
            or self._generic(source, index)
        )
        logger.debug("Parsed %r as %s", source, command.action)
        return command

    # ------------------------------------------------------------------
    # Stage 1-2: keyword families
    # ------------------------------------------------------------------

    def _scenario(self, text: str) -> Command | None:
        kw = self._kw
        if _contains_any(text, kw.scenario_list):
            return ScenarioList(original=text)
        if _contains_any(text, kw.scenario_save):
            return ScenarioSave(original=text, name=self.scenario_name(text))
        if _contains_any(text, kw.scenario_load):
            return ScenarioLoad(original=text, name=self.scenario_name(text))
        if _contains_any(text, kw.scenario_delete):
            return ScenarioDelete(original=text, name=self.scenario_name(text))
        return None

    def _singleton(self, text: str) -> Command | None:
        kw = self._kw
        if _contains_any(text, kw.reset):
            return Reset(original=text)
        if _contains_any(text, kw.persist):
            return Persist(original=text)
        if _contains_any(text, kw.help):
            return Help(original=text)
        return None

    # ------------------------------------------------------------------
    # Stage 3: structural create/delete
    # ------------------------------------------------------------------

    def _structural(self, text: str, index: BoardIndex) -> Command | None:
        kw = self._kw
        if _contains_any(text, kw.create_department):
            created = self._create_department(text)
            if created is not None:
                return created
        if _contains_any(text, kw.delete_department):
            name = self._department_to_delete(text, index)
            if name is not None:
                return DeleteDepartment(original=text, name=name)
        if _contains_any(text, kw.create_employee):
            created = self._create_employee(text)
            if created is not None:
                return created
        if _contains_any(text, kw.delete_employee):
            names = self.extract_names(text, index)
            if names:
                return DeleteEmployee(original=text, name=names[0])
        return None

    def _create_department(self, text: str) -> CreateDepartment | None:
        coordinate = _structural_coordinate(text)
        if coordinate is None:
            return None

        name = _quoted(text)
        if name is None:
            residual = _strip_fillers(text, self._kw.department_fillers)
            words = _HANGUL_WORD.findall(residual)
            if words:
                # Longest word wins; ties keep the earliest.
                name = max(words, key=len)

        if not name or len(name) < _MIN_LABEL_LENGTH:
            return None
        return CreateDepartment(original=text, name=name, coordinate=coordinate)

    def _create_employee(self, text: str) -> CreateEmployee | None:
        coordinate = _structural_coordinate(text)
        if coordinate is None:
            return None

        titled = _NAME_WITH_TITLE.search(text)
        position = titled.group(2).strip() if titled else ""

        name = _quoted(text)
        if name is None and titled is not None:
            name = titled.group(1)
        if name is None:
            residual = _strip_fillers(text, self._kw.employee_fillers)
            candidates = _PERSON_NAME.findall(residual)
            if candidates:
                name = candidates[0]

        if not name or len(name) < _MIN_LABEL_LENGTH:
            return None
        return CreateEmployee(original=text, name=name, coordinate=coordinate, position=position)

    def _department_to_delete(self, text: str, index: BoardIndex) -> str | None:
        for name, _sub in index.departments:
            if name and name in text:
                return name
        return _quoted(text)

    # ------------------------------------------------------------------
    # Stage 4-6: generic extraction and disambiguation
    # ------------------------------------------------------------------

    def _generic(self, text: str, index: BoardIndex) -> Command:
        names = self.extract_names(text, index)
        coordinates = scan_coordinates(text)
        departments = self.extract_departments(text, index)
        is_swap = _contains_any(text, self._kw.swap)

        logger.debug(
            "Extracted names=%s coordinates=%s departments=%s swap=%s",
            names,
            coordinates,
            departments,
            is_swap,
        )

        if is_swap and len(names) >= 2:
            return SwapNames(original=text, first=names[0], second=names[1])
        if is_swap and len(coordinates) >= 2:
            return SwapCoordinates(original=text, first=coordinates[0], second=coordinates[1])
        if names and departments:
            return MoveToDepartment(original=text, name=names[0], department=departments[0])
        if names and coordinates:
            return MoveToCoordinate(original=text, name=names[0], coordinate=coordinates[0])
        if len(coordinates) >= 2:
            return MoveCoordinate(original=text, source=coordinates[0], target=coordinates[1])
        if len(names) >= 2:
            return SwapNames(original=text, first=names[0], second=names[1], guessed=True)

        return Unrecognized(
            original=text,
            names=tuple(names),
            coordinates=tuple(coordinates),
            departments=tuple(departments),
        )

    def extract_names(self, text: str, index: BoardIndex) -> list[str]:
        """Known employee names found in *text*; otherwise short Hangul runs.

        The fallback drops direction/action words and fragments of known
        department names.
        """
        found: list[str] = []
        for name in index.employee_names:
            if name and name in text and name not in found:
                found.append(name)
        if found:
            return found

        excluded = set(self._kw.name_exclusions)
        for candidate in _SHORT_NAME.findall(text):
            if candidate in excluded or candidate in found:
                continue
            if index.mentions_department(candidate):
                continue
            found.append(candidate)
        return found

    def extract_departments(self, text: str, index: BoardIndex) -> list[str]:
        found: list[str] = []
        for name, sub in index.departments:
            if name and name in text and name not in found:
                found.append(name)
            if sub and sub in text and sub not in found:
                found.append(sub)
        return found

    def scenario_name(self, text: str) -> str | None:
        """Quoted text, else whatever follows the last scenario marker.

        Returns None when nothing usable remains; the caller supplies a
        default name.
        """
        quoted = _quoted(text)
        if quoted:
            return quoted

        cut = -1
        for marker in self._kw.scenario_name_markers:
            pos = text.rfind(marker)
            if pos != -1:
                cut = max(cut, pos + len(marker))
        if cut == -1:
            return None

        remainder = text[cut:].strip()
        remainder = _strip_leading_particle(remainder, self._kw.particles)
        return remainder or None


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def parse_command(
    text: str | None,
    board: Board | None = None,
    *,
    keywords: KeywordTable = DEFAULT_KEYWORDS,
) -> Command:
    """Parse *text* against *board* with a throwaway parser."""
    return IntentParser(keywords).parse(text, BoardIndex.from_board(board))


def _contains_any(text: str, phrases: Sequence[str]) -> bool:
    lower = text.lower()
    return any(phrase.lower() in lower for phrase in phrases)


def _quoted(text: str) -> str | None:
    match = _QUOTED.search(text)
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


def _structural_coordinate(text: str) -> str | None:
    match = _LOOSE_COORDINATE.search(text)
    if match is None:
        return None
    coordinate = parse_coordinate(match.group(1) + match.group(2))
    return coordinate.label if coordinate else None


def _strip_fillers(text: str, fillers: Sequence[str]) -> str:
    residual = _LOOSE_COORDINATE.sub("", text)
    if fillers:
        pattern = "|".join(re.escape(f) for f in sorted(fillers, key=len, reverse=True))
        residual = re.sub(pattern, "", residual)
    return residual.strip()


def _strip_leading_particle(text: str, particles: Sequence[str]) -> str:
    for particle in sorted(particles, key=len, reverse=True):
        if text.startswith(particle):
            rest = text[len(particle) :]
            if not rest or rest[0].isspace():
                return rest.strip()
    return text
