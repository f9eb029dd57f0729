"""Employee photo lookup.

Photos live in ``{root}/photos/{employee_id}.{ext}``. The board only ever
reads them; storing or editing photos is out of scope.
"""

from __future__ import annotations

from pathlib import Path

PHOTO_EXTENSIONS: tuple[str, ...] = ("jpg", "jpeg", "png", "webp")


class PhotoResolver:
    """Resolve an employee ID to its photo file, if one exists."""

    def __init__(self, photos_dir: Path) -> None:
        self._photos_dir = photos_dir

    @property
    def photos_dir(self) -> Path:
        return self._photos_dir

    def resolve(self, employee_id: str) -> Path | None:
        """Return the first existing photo path in extension order, else None."""
        if not employee_id or "/" in employee_id or "\\" in employee_id:
            return None
        for ext in PHOTO_EXTENSIONS:
            candidate = self._photos_dir / f"{employee_id}.{ext}"
            if candidate.is_file():
                return candidate
        return None
