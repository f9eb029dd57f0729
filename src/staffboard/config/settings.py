"""StaffboardSettings: one frozen object for CLI flags, env vars and TOML.

Sources, strongest first:

* keyword arguments (the CLI flags Click parsed),
* ``STAFFBOARD_*`` environment variables (``__`` separates nesting, e.g.
  ``STAFFBOARD_BOARD__MAX_SEARCH_RADIUS=5``),
* the ``staffboard.toml`` found by :func:`staffboard.config.discovery.find_config`,
* the defaults on the section models.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from staffboard.config.discovery import find_config
from staffboard.config.models import (
    BoardConfig,
    ParserConfig,
    PluginsConfig,
    ScenarioConfig,
    StorageConfig,
)
from staffboard.domain.keywords import DEFAULT_KEYWORDS, KeywordTable


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a single TOML file (empty when absent)."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return
        try:
            self._data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            import click

            msg = f"Invalid TOML in {toml_path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path reaches settings_customise_sources (a classmethod) through here.
_tls = threading.local()


class StaffboardSettings(BaseSettings):
    """Resolved configuration for one CLI invocation.

    Attributes:
        root: Workspace directory. The config file's directory when one was
            found, else the CWD. Relative storage paths resolve against it.
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "STAFFBOARD_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- Global CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- staffboard.toml sections ---
    storage: StorageConfig = Field(default_factory=StorageConfig)
    board: BoardConfig = Field(default_factory=BoardConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory; TOML sits below env vars.
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> StaffboardSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored (defaults
        apply). Without one, ``staffboard.toml`` is discovered by walking up
        from *root* or the CWD.
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(root)

        if root is None:
            root = toml_path.parent if toml_path is not None else Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

    # --- Derived paths and tables ---

    def resolve(self, relative: str) -> Path:
        path = Path(relative)
        return path if path.is_absolute() else self.root / path

    @property
    def seed_path(self) -> Path:
        return self.resolve(self.storage.seed_file)

    @property
    def photos_path(self) -> Path:
        return self.resolve(self.storage.photos_dir)

    @property
    def plugins_path(self) -> Path:
        return self.resolve(self.plugins.local_dir)

    def keyword_table(self) -> KeywordTable:
        """Default keyword table extended with ``[parser] extra_keywords``."""
        if not self.parser.extra_keywords:
            return DEFAULT_KEYWORDS
        return DEFAULT_KEYWORDS.extended(self.parser.extra_keywords)
