"""Locate and read ``staffboard.toml``.

The file is found by walking up from the working directory, the way git
finds ``.git/``. ``STAFFBOARD_CONFIG`` names a file explicitly and disables
the walk.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

from staffboard.config.models import StaffboardConfig

CONFIG_FILENAME = "staffboard.toml"
CONFIG_ENV_VAR = "STAFFBOARD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``staffboard.toml`` at or above *start*, or None.

    When ``STAFFBOARD_CONFIG`` is set, only that path is considered.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> StaffboardConfig:
    """Validate the TOML sections into :class:`StaffboardConfig`.

    Defaults are returned when no file exists.
    """
    source = path or find_config(cwd)
    if source is None:
        return StaffboardConfig()
    with source.open("rb") as fh:
        return StaffboardConfig.model_validate(tomllib.load(fh))
