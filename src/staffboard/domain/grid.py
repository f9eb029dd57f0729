"""Spreadsheet-style coordinate system for the 40 x 13 board.

Columns render as ``A``..``Z`` (1-26) followed by ``AA``..``AN`` (27-40).
This is a fixed 40-column alphabet, not general base-26: ``B?`` and longer
prefixes never decode.

Linear index and (column, row) are a bijection over ``0..519``::

    index = (row - 1) * 40 + (column - 1)

Columns 1-20 form the ``left`` block, 21-40 the ``right`` block. The block
is always derived from the column, never stored.

INVARIANT: Invalid input never raises. Every decoder returns ``None`` so
callers can report a rejection reason to the operator.
"""

from __future__ import annotations

import math
import re
from collections.abc import Collection, Iterator
from dataclasses import dataclass

from staffboard.domain.types import Block

TOTAL_COLUMNS = 40
TOTAL_ROWS = 13
BLOCK_COLUMNS = 20
TOTAL_CELLS = TOTAL_COLUMNS * TOTAL_ROWS

_SINGLE_LETTER_COLUMNS = 26
_ORD_A = ord("A")

_COORDINATE_PATTERN = re.compile(r"^([A-Z]{1,2})(1[0-3]|[1-9])$")

# JS-style \b: only ASCII word characters form a boundary, so "A1에" still matches.
_SCAN_PATTERN = re.compile(
    r"(?<![A-Za-z0-9_])([A-Za-z]{1,2})(1[0-3]|[1-9])(?![A-Za-z0-9_])",
)


@dataclass(frozen=True)
class Coordinate:
    """One grid cell, 1-based on both axes."""

    column: int
    row: int

    @property
    def letters(self) -> str:
        return column_to_letters(self.column) or "?"

    @property
    def label(self) -> str:
        """Canonical upper-case address, e.g. ``"AA5"``."""
        return f"{self.letters}{self.row}"

    @property
    def block(self) -> Block:
        return block_of(self)

    @property
    def index(self) -> int:
        return to_index(self)

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class LocalAddress:
    """Block-local position (20 columns x 13 rows per block), 0-based."""

    block: Block
    column: int
    row: int

    @property
    def index(self) -> int:
        return self.row * BLOCK_COLUMNS + self.column


@dataclass(frozen=True)
class Distance:
    """Axis offsets and straight-line distance between two cells."""

    dx: int
    dy: int
    euclidean: float


# ---------------------------------------------------------------------------
# Column alphabet
# ---------------------------------------------------------------------------


def column_to_letters(column: int) -> str | None:
    """Encode a 1-based column: 1 -> ``A``, 26 -> ``Z``, 27 -> ``AA``, 40 -> ``AN``."""
    if not 1 <= column <= TOTAL_COLUMNS:
        return None
    if column <= _SINGLE_LETTER_COLUMNS:
        return chr(_ORD_A + column - 1)
    return "A" + chr(_ORD_A + column - _SINGLE_LETTER_COLUMNS - 1)


def letters_to_column(letters: str) -> int | None:
    """Decode column letters (case-insensitive). Returns None for anything invalid.

    Examples:
        >>> letters_to_column("a")
        1
        >>> letters_to_column("AN")
        40
        >>> letters_to_column("AO") is None
        True
        >>> letters_to_column("BA") is None
        True
    """
    upper = letters.upper()
    if len(upper) == 1 and "A" <= upper <= "Z":
        return ord(upper) - _ORD_A + 1
    if len(upper) == 2 and upper[0] == "A" and "A" <= upper[1] <= "N":
        return _SINGLE_LETTER_COLUMNS + ord(upper[1]) - _ORD_A + 1
    return None


# ---------------------------------------------------------------------------
# Parsing and index mapping
# ---------------------------------------------------------------------------


def make_coordinate(column: int, row: int) -> Coordinate | None:
    """Build a coordinate if both axes are in range."""
    if not (1 <= column <= TOTAL_COLUMNS and 1 <= row <= TOTAL_ROWS):
        return None
    return Coordinate(column=column, row=row)


def parse_coordinate(text: str | None) -> Coordinate | None:
    """Parse ``<1-2 letters><1-13>`` (case-insensitive) into a Coordinate."""
    if not text or not isinstance(text, str):
        return None
    match = _COORDINATE_PATTERN.match(text.strip().upper())
    if match is None:
        return None
    column = letters_to_column(match.group(1))
    if column is None:
        return None
    return make_coordinate(column, int(match.group(2)))


def is_valid_coordinate(text: str | None) -> bool:
    return parse_coordinate(text) is not None


def to_index(coordinate: Coordinate) -> int:
    return (coordinate.row - 1) * TOTAL_COLUMNS + (coordinate.column - 1)


def from_index(index: int) -> Coordinate | None:
    if not 0 <= index < TOTAL_CELLS:
        return None
    row, column = divmod(index, TOTAL_COLUMNS)
    return Coordinate(column=column + 1, row=row + 1)


def block_of(coordinate: Coordinate) -> Block:
    return Block.LEFT if coordinate.column <= BLOCK_COLUMNS else Block.RIGHT


def scan_coordinates(text: str) -> list[str]:
    """Find every valid coordinate token in free text, upper-cased, in order."""
    found: list[str] = []
    for match in _SCAN_PATTERN.finditer(text):
        coordinate = parse_coordinate(match.group(1) + match.group(2))
        if coordinate is not None:
            found.append(coordinate.label)
    return found


# ---------------------------------------------------------------------------
# Block-local addressing
# ---------------------------------------------------------------------------


def to_local(coordinate: Coordinate) -> LocalAddress:
    block = block_of(coordinate)
    column = coordinate.column - 1
    if block is Block.RIGHT:
        column -= BLOCK_COLUMNS
    return LocalAddress(block=block, column=column, row=coordinate.row - 1)


def from_local(block: Block | str, local_index: int) -> Coordinate | None:
    """Inverse of :func:`to_local` given a block and a 0..259 local index."""
    if not 0 <= local_index < BLOCK_COLUMNS * TOTAL_ROWS:
        return None
    row, column = divmod(local_index, BLOCK_COLUMNS)
    if Block(block) is Block.RIGHT:
        column += BLOCK_COLUMNS
    return Coordinate(column=column + 1, row=row + 1)


def distance(a: Coordinate, b: Coordinate) -> Distance:
    dx = abs(b.column - a.column)
    dy = abs(b.row - a.row)
    return Distance(dx=dx, dy=dy, euclidean=math.hypot(dx, dy))


# ---------------------------------------------------------------------------
# Proximity search
# ---------------------------------------------------------------------------


def ring(center: Coordinate, radius: int) -> Iterator[Coordinate]:
    """Yield in-grid cells at Chebyshev distance exactly *radius* from *center*.

    Traversal is column-offset major, row-offset minor, which keeps the
    winner among equally distant cells deterministic.
    """
    for dx in range(-radius, radius + 1):
        for dy in range(-radius, radius + 1):
            if abs(dx) != radius and abs(dy) != radius:
                continue
            cell = make_coordinate(center.column + dx, center.row + dy)
            if cell is not None:
                yield cell


def nearest_free(
    start: Coordinate | str,
    occupied: Collection[Coordinate | str],
    max_radius: int = 10,
) -> Coordinate | None:
    """Return the closest unoccupied cell to *start*, searching rings outward.

    The start cell wins if free. Otherwise rings of radius 1..*max_radius*
    are scanned, smallest radius first; cells off the grid are skipped.
    Returns None when every candidate is taken or *start* is invalid.
    """
    origin = parse_coordinate(start) if isinstance(start, str) else start
    if origin is None:
        return None
    taken = {c if isinstance(c, str) else c.label for c in occupied}
    taken = {label.upper() for label in taken}

    if origin.label not in taken:
        return origin
    for radius in range(1, max_radius + 1):
        for cell in ring(origin, radius):
            if cell.label not in taken:
                return cell
    return None
