"""Entity ID generation and validation.

IDs are ``{prefix}_{8 hex chars}`` drawn from a random UUID, matching the
records written by the original seed files (``emp_1a2b3c4d``).

INVARIANT: IDs are permanent. Relocation and relabelling never change them.
"""

from __future__ import annotations

import re
import uuid

ID_PREFIXES: dict[str, str] = {
    "employee": "emp",
    "department": "dept",
    "scenario": "scenario",
}

_ID_PATTERN = re.compile(r"^[a-z]+_[0-9A-Za-z-]+$")


def generate_id(kind: str) -> str:
    """Generate a fresh unique ID for an entity *kind*.

    Raises:
        ValueError: If *kind* has no registered prefix.
    """
    prefix = ID_PREFIXES.get(kind)
    if prefix is None:
        msg = f"Unknown entity kind: {kind!r}. Expected one of {sorted(ID_PREFIXES)}"
        raise ValueError(msg)
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def is_valid_id(entity_id: str) -> bool:
    return _ID_PATTERN.match(entity_id) is not None
