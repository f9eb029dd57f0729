"""Board model — positioned employees and departments on the grid.

The board is the live, mutable aggregate. Entities are pydantic models whose
field names follow Python conventions while the wire format keeps the
camelCase keys of the original seed files (``empType``, ``subDept``,
``photoPosY``, ``displayName``, ``isParentOrg``, ``lastUpdated``).

``location`` is stored as a :class:`~staffboard.domain.grid.Coordinate`.
On input it accepts either ``"C3"`` or the original
``{"coordinate": "C3", "block": ..., "index": ...}`` shape; ``block`` and
``index`` are always recomputed from the coordinate, never trusted.

INVARIANT: At most one entity occupies any coordinate. Every mutation
primitive validates first and commits second; a rejected mutation leaves
the board untouched and reports why through :class:`BoardChange`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator

from staffboard.domain.grid import Coordinate, nearest_free, parse_coordinate
from staffboard.domain.ids import generate_id
from staffboard.domain.types import Block, EmploymentType

DISPLAY_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


# ---------------------------------------------------------------------------
# Mutation outcome
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BoardChange:
    """Outcome of a board mutation primitive.

    ``changed`` lists the IDs whose position or membership changed.
    On failure ``code`` is one of ``NOT_FOUND``, ``INVALID_COORDINATE``,
    ``OCCUPIED``, ``SAME_TARGET``, ``NO_FREE_SEAT``, ``EMPTY_COORDINATE``,
    ``DUPLICATE_ID``, ``INVALID_NAME``.
    """

    ok: bool
    code: str | None = None
    message: str = ""
    coordinate: Coordinate | None = None
    occupant: Employee | Department | None = None
    changed: tuple[str, ...] = ()

    @classmethod
    def success(
        cls,
        *changed: str,
        coordinate: Coordinate | None = None,
        message: str = "",
    ) -> BoardChange:
        return cls(ok=True, changed=changed, coordinate=coordinate, message=message)

    @classmethod
    def failure(
        cls,
        code: str,
        message: str,
        *,
        occupant: Employee | Department | None = None,
        coordinate: Coordinate | None = None,
    ) -> BoardChange:
        return cls(ok=False, code=code, message=message, occupant=occupant, coordinate=coordinate)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


class _PositionedEntity(BaseModel):
    """Fields shared by both entity variants."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    location: Coordinate

    @field_validator("location", mode="before")
    @classmethod
    def _coerce_location(cls, value: Any) -> Coordinate:
        if isinstance(value, Coordinate):
            return value
        if isinstance(value, dict):
            value = value.get("coordinate")
        coordinate = parse_coordinate(value) if isinstance(value, str) else None
        if coordinate is None:
            msg = f"Invalid coordinate: {value!r}"
            raise ValueError(msg)
        return coordinate

    @field_serializer("location")
    def _dump_location(self, location: Coordinate) -> dict[str, Any]:
        return {
            "coordinate": location.label,
            "block": str(location.block),
            "index": location.index,
        }

    @property
    def coordinate(self) -> str:
        return self.location.label

    @property
    def block(self) -> Block:
        return self.location.block


class Employee(_PositionedEntity):
    """A staff member card."""

    kind: Literal["employee"] = Field(default="employee", exclude=True)
    name: str
    position: str = ""
    emp_type: EmploymentType = Field(default=EmploymentType.REGULAR, alias="empType")
    dept: str = ""
    sub_dept: str = Field(default="", alias="subDept")
    photo: str | None = None
    photo_pos_y: int = Field(default=30, ge=0, le=100, alias="photoPosY")

    @field_validator("position", "dept", "sub_dept", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def label(self) -> str:
        return self.name


class Department(_PositionedEntity):
    """A department header card; ``members`` holds employee IDs."""

    kind: Literal["department"] = Field(default="department", exclude=True)
    dept: str
    display_name: str = Field(default="", alias="displayName")
    sub_dept: str = Field(default="", alias="subDept")
    is_parent_org: bool = Field(default=False, alias="isParentOrg")
    members: list[str] = Field(default_factory=list)

    @field_validator("display_name", "sub_dept", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @property
    def name(self) -> str:
        return self.dept

    @property
    def label(self) -> str:
        return self.display_name or self.dept


Entity = Employee | Department


def label_of(entity: Entity) -> str:
    """Display label used in operator messages."""
    return entity.label


# ---------------------------------------------------------------------------
# Board aggregate
# ---------------------------------------------------------------------------


class Board(BaseModel):
    """All positioned entities plus the last-modified timestamp."""

    model_config = ConfigDict(populate_by_name=True)

    employees: list[Employee] = Field(default_factory=list)
    departments: list[Department] = Field(default_factory=list)
    last_updated: str | None = Field(default=None, alias="lastUpdated")

    @model_validator(mode="after")
    def _check_unique(self) -> Board:
        seen_coords: dict[str, str] = {}
        seen_ids: set[str] = set()
        for entity in self.entities():
            if entity.id in seen_ids:
                msg = f"Duplicate entity id {entity.id!r}"
                raise ValueError(msg)
            seen_ids.add(entity.id)
            label = entity.location.label
            if label in seen_coords:
                msg = f"{entity.id!r} and {seen_coords[label]!r} both occupy {label}"
                raise ValueError(msg)
            seen_coords[label] = entity.id
        return self

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_record(self) -> dict[str, Any]:
        """Dump in the camelCase wire format."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> Board:
        return cls.model_validate(data)

    def snapshot(self) -> Board:
        return self.model_copy(deep=True)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def entities(self) -> Iterable[Entity]:
        yield from self.employees
        yield from self.departments

    def get(self, entity_id: str) -> Entity | None:
        for entity in self.entities():
            if entity.id == entity_id:
                return entity
        return None

    def find_employee(self, employee_id: str) -> Employee | None:
        return next((e for e in self.employees if e.id == employee_id), None)

    def find_department(self, department_id: str) -> Department | None:
        return next((d for d in self.departments if d.id == department_id), None)

    def at(self, coordinate: Coordinate | str) -> Entity | None:
        """Return the entity at *coordinate*, employees checked first."""
        target = _coerce(coordinate)
        if target is None:
            return None
        for entity in self.entities():
            if entity.location == target:
                return entity
        return None

    def is_free(self, coordinate: Coordinate | str) -> bool:
        target = _coerce(coordinate)
        return target is not None and self.at(target) is None

    def find_employees_by_name(self, name: str) -> list[Employee]:
        """Case-insensitive substring match, in insertion order."""
        needle = (name or "").strip().lower()
        if not needle:
            return []
        return [e for e in self.employees if needle in e.name.lower()]

    def find_departments_by_name(self, name: str) -> list[Department]:
        """Case-insensitive substring match over department name and sub-label."""
        needle = (name or "").strip().lower()
        if not needle:
            return []
        return [
            d
            for d in self.departments
            if needle in d.dept.lower() or (d.sub_dept and needle in d.sub_dept.lower())
        ]

    def occupied(self, block: Block | str | None = None) -> set[Coordinate]:
        wanted = Block(block) if block is not None else None
        return {
            entity.location
            for entity in self.entities()
            if wanted is None or entity.location.block is wanted
        }

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def relocate(self, entity_id: str, target: Coordinate | str) -> BoardChange:
        """Move one entity to an empty coordinate. No implicit displacement."""
        entity = self.get(entity_id)
        if entity is None:
            return BoardChange.failure("NOT_FOUND", f"No entity with id {entity_id!r}")
        coordinate = _coerce(target)
        if coordinate is None:
            return BoardChange.failure("INVALID_COORDINATE", f"Invalid coordinate: {target!r}")
        if entity.location == coordinate:
            return BoardChange.failure(
                "SAME_TARGET", f"{entity.label} is already at {coordinate}", coordinate=coordinate
            )
        occupant = self.at(coordinate)
        if occupant is not None:
            return BoardChange.failure(
                "OCCUPIED",
                f"{coordinate} is occupied by {occupant.label}",
                occupant=occupant,
                coordinate=coordinate,
            )
        entity.location = coordinate
        return BoardChange.success(entity.id, coordinate=coordinate)

    def swap(self, first_id: str, second_id: str) -> BoardChange:
        """Exchange two entities' coordinates. Both move or neither does."""
        first = self.get(first_id)
        second = self.get(second_id)
        if first is None or second is None:
            missing = first_id if first is None else second_id
            return BoardChange.failure("NOT_FOUND", f"No entity with id {missing!r}")
        if first.id == second.id:
            return BoardChange.failure("SAME_TARGET", f"Cannot swap {first.label} with itself")
        first.location, second.location = second.location, first.location
        return BoardChange.success(first.id, second.id)

    def swap_at(self, first: Coordinate | str, second: Coordinate | str) -> BoardChange:
        """Exchange whatever occupies two coordinates. Both must be occupied."""
        a = _coerce(first)
        b = _coerce(second)
        if a is None or b is None:
            bad = first if a is None else second
            return BoardChange.failure("INVALID_COORDINATE", f"Invalid coordinate: {bad!r}")
        if a == b:
            return BoardChange.failure("SAME_TARGET", f"Cannot swap {a} with itself", coordinate=a)
        first_entity = self.at(a)
        second_entity = self.at(b)
        if first_entity is None or second_entity is None:
            empty = a if first_entity is None else b
            return BoardChange.failure(
                "EMPTY_COORDINATE", f"Nothing to swap at {empty}", coordinate=empty
            )
        return self.swap(first_entity.id, second_entity.id)

    def move_to_department(
        self,
        employee_id: str,
        department_id: str,
        *,
        max_radius: int = 10,
    ) -> BoardChange:
        """Seat an employee at the free cell nearest the department card.

        The employee's current seat counts as free for the search. Membership
        lists are updated on both the losing and gaining department.
        """
        employee = self.find_employee(employee_id)
        if employee is None:
            return BoardChange.failure("NOT_FOUND", f"No employee with id {employee_id!r}")
        department = self.find_department(department_id)
        if department is None:
            return BoardChange.failure("NOT_FOUND", f"No department with id {department_id!r}")

        taken = self.occupied() - {employee.location}
        seat = nearest_free(department.location, taken, max_radius)
        if seat is None:
            return BoardChange.failure(
                "NO_FREE_SEAT",
                f"No free seat within {max_radius} cells of {department.label}",
                coordinate=department.location,
            )

        changed = [employee.id]
        for other in self.departments:
            if other.id != department.id and employee.id in other.members:
                other.members = [m for m in other.members if m != employee.id]
                changed.append(other.id)
        if employee.id not in department.members:
            department.members.append(employee.id)
        changed.append(department.id)

        employee.dept = department.dept
        employee.sub_dept = department.sub_dept
        employee.location = seat
        return BoardChange.success(*changed, coordinate=seat)

    def add_employee(
        self,
        name: str,
        coordinate: Coordinate | str,
        *,
        position: str = "",
        emp_type: EmploymentType | str = EmploymentType.REGULAR,
        dept: str = "",
        sub_dept: str = "",
        employee_id: str | None = None,
    ) -> BoardChange:
        if not name or not name.strip():
            return BoardChange.failure("INVALID_NAME", "Employee name is required")
        target = self._claimable(coordinate)
        if isinstance(target, BoardChange):
            return target
        new_id = employee_id or generate_id("employee")
        if self.get(new_id) is not None:
            return BoardChange.failure("DUPLICATE_ID", f"Entity id {new_id!r} already exists")
        self.employees.append(
            Employee(
                id=new_id,
                name=name.strip(),
                position=position,
                emp_type=EmploymentType(emp_type),
                dept=dept,
                sub_dept=sub_dept,
                location=target,
            )
        )
        return BoardChange.success(new_id, coordinate=target)

    def add_department(
        self,
        name: str,
        coordinate: Coordinate | str,
        *,
        sub_dept: str = "",
        display_name: str | None = None,
        is_parent_org: bool = False,
        department_id: str | None = None,
    ) -> BoardChange:
        if not name or not name.strip():
            return BoardChange.failure("INVALID_NAME", "Department name is required")
        target = self._claimable(coordinate)
        if isinstance(target, BoardChange):
            return target
        new_id = department_id or generate_id("department")
        if self.get(new_id) is not None:
            return BoardChange.failure("DUPLICATE_ID", f"Entity id {new_id!r} already exists")
        self.departments.append(
            Department(
                id=new_id,
                dept=name.strip(),
                display_name=display_name or name.strip(),
                sub_dept=sub_dept,
                is_parent_org=is_parent_org,
                location=target,
            )
        )
        return BoardChange.success(new_id, coordinate=target)

    def remove(self, entity_id: str) -> BoardChange:
        """Delete an entity. Removing an employee also drops it from member lists."""
        for i, employee in enumerate(self.employees):
            if employee.id == entity_id:
                del self.employees[i]
                for department in self.departments:
                    if entity_id in department.members:
                        department.members.remove(entity_id)
                return BoardChange.success(entity_id, coordinate=employee.location)
        for i, department in enumerate(self.departments):
            if department.id == entity_id:
                del self.departments[i]
                return BoardChange.success(entity_id, coordinate=department.location)
        return BoardChange.failure("NOT_FOUND", f"No entity with id {entity_id!r}")

    def set_photo_offset(self, employee_id: str, offset: int) -> BoardChange:
        """Set the vertical photo crop offset, clamped to 0-100."""
        employee = self.find_employee(employee_id)
        if employee is None:
            return BoardChange.failure("NOT_FOUND", f"No employee with id {employee_id!r}")
        employee.photo_pos_y = max(0, min(100, int(offset)))
        return BoardChange.success(employee.id)

    def ensure_parent_orgs(
        self,
        defaults: Iterable[tuple[str, str]],
        *,
        max_radius: int = 10,
    ) -> list[str]:
        """Create each missing ``(name, coordinate)`` parent-organisation card.

        Whatever sits on the anchor is moved to the nearest free seat first.
        Returns the IDs of created departments.
        """
        created: list[str] = []
        for name, coordinate in defaults:
            if any(d.dept == name for d in self.departments):
                continue
            anchor = _coerce(coordinate)
            if anchor is None:
                continue
            occupant = self.at(anchor)
            if occupant is not None:
                seat = nearest_free(anchor, self.occupied(), max_radius)
                if seat is None:
                    continue
                occupant.location = seat
            change = self.add_department(name, anchor, is_parent_org=True)
            if change.ok:
                created.extend(change.changed)
        return created

    def touch(self, timestamp: str | None = None) -> None:
        """Stamp ``last_updated`` (local time, ``YYYY-MM-DD HH:MM:SS``)."""
        self.last_updated = timestamp or datetime.now().strftime(DISPLAY_TIME_FORMAT)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _claimable(self, coordinate: Coordinate | str) -> Coordinate | BoardChange:
        target = _coerce(coordinate)
        if target is None:
            return BoardChange.failure("INVALID_COORDINATE", f"Invalid coordinate: {coordinate!r}")
        occupant = self.at(target)
        if occupant is not None:
            return BoardChange.failure(
                "OCCUPIED",
                f"{target} is occupied by {occupant.label}",
                occupant=occupant,
                coordinate=target,
            )
        return target


def _coerce(coordinate: Coordinate | str) -> Coordinate | None:
    if isinstance(coordinate, Coordinate):
        return coordinate
    return parse_coordinate(coordinate)
