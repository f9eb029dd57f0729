"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, staffboard.toml only contains
overrides. A fresh workspace needs nothing but a seed file.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from staffboard.domain.grid import parse_coordinate
from staffboard.domain.keywords import PHRASE_FAMILIES

# --- staffboard.toml sections ---


class StorageConfig(BaseModel):
    """[storage] section. Relative paths resolve against the workspace root."""

    model_config = {"frozen": True}

    seed_file: str = "data.json"
    photos_dir: str = "photos"
    db_name: str = "staffboard.db"


class ParentOrgConfig(BaseModel):
    """One ``[[board.parent_orgs]]`` entry."""

    model_config = {"frozen": True}

    name: str
    coordinate: str

    @field_validator("coordinate")
    @classmethod
    def _valid_coordinate(cls, value: str) -> str:
        parsed = parse_coordinate(value)
        if parsed is None:
            msg = f"invalid coordinate {value!r}"
            raise ValueError(msg)
        return parsed.label


def _default_parent_orgs() -> list[ParentOrgConfig]:
    return [
        ParentOrgConfig(name="대학본부", coordinate="A1"),
        ParentOrgConfig(name="총장직속기관", coordinate="U1"),
    ]


class BoardConfig(BaseModel):
    """[board] section."""

    model_config = {"frozen": True}

    max_search_radius: int = Field(default=10, ge=1, le=40)
    parent_orgs: list[ParentOrgConfig] = Field(default_factory=_default_parent_orgs)

    def parent_org_pairs(self) -> list[tuple[str, str]]:
        return [(org.name, org.coordinate) for org in self.parent_orgs]


class ParserConfig(BaseModel):
    """[parser] section. ``extra_keywords`` maps a phrase family to added phrases."""

    model_config = {"frozen": True}

    extra_keywords: dict[str, list[str]] = Field(default_factory=dict)

    @field_validator("extra_keywords")
    @classmethod
    def _known_families(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = sorted(set(value) - set(PHRASE_FAMILIES))
        if unknown:
            msg = f"unknown keyword families: {', '.join(unknown)}"
            raise ValueError(msg)
        return value


class ScenarioConfig(BaseModel):
    """[scenario] section.

    ``default_name_format`` is a ``str.format`` template with ``month``,
    ``day``, ``hour`` and ``minute`` fields.
    """

    model_config = {"frozen": True}

    default_name_format: str = "{month}월{day}일_{hour}시{minute}분"


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
    local_dir: str = ".staffboard/plugins"


# --- Top-level config ---


class StaffboardConfig(BaseModel):
    """Root model for staffboard.toml."""

    model_config = {"frozen": True}

    storage: StorageConfig = Field(default_factory=StorageConfig)
    board: BoardConfig = Field(default_factory=BoardConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
