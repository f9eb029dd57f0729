"""Board classification enums."""

from __future__ import annotations

from enum import StrEnum


class Block(StrEnum):
    """The two fixed halves of the grid."""

    LEFT = "left"
    RIGHT = "right"


class EntityKind(StrEnum):
    """Variants of a positioned board entity."""

    EMPLOYEE = "employee"
    DEPARTMENT = "department"


class EmploymentType(StrEnum):
    """Employment category tag carried by every employee."""

    REGULAR = "regular"
    CONTRACT = "contract"
    FUNCTIONAL = "functional"
