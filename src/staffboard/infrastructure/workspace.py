"""Workspace — the single dependency injected into every service.

The Workspace owns the database engine, the board and scenario stores, the
photo resolver, the plugin event bus, and the live board. The board is
loaded lazily on first access; missing parent-organisation cards are added
at that point.

:meth:`Workspace.transaction` makes a board mutation all-or-nothing:

- The board is snapshotted before the block runs.
- On normal exit, if anything changed, the board is stamped and persisted.
- If the block raises, or persisting fails, the snapshot becomes the live
  board again and the exception propagates.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from staffboard.infrastructure.board_store import BoardStore
from staffboard.infrastructure.database.engine import init_database
from staffboard.infrastructure.photos import PhotoResolver
from staffboard.infrastructure.scenario_store import ScenarioStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from staffboard.config.settings import StaffboardSettings
    from staffboard.domain.board import Board, BoardChange
    from staffboard.plugins.event_bus import EventBus

logger = logging.getLogger(__name__)


@dataclass
class BoardTransaction:
    """Active board transaction. Record mutations through :meth:`apply`."""

    board: Board
    changed: list[str] = field(default_factory=list)

    def apply(self, change: BoardChange) -> BoardChange:
        """Track a primitive's outcome. Failed changes leave nothing to commit."""
        if change.ok:
            self.changed.extend(i for i in change.changed if i not in self.changed)
        return change

    @property
    def dirty(self) -> bool:
        return bool(self.changed)


class Workspace:
    """Repository over one staffboard directory.

    Constructed once at CLI startup from :class:`StaffboardSettings` and held
    by the CLI context. Services receive it via :class:`BaseService`.
    """

    def __init__(self, settings: StaffboardSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root, settings.storage.db_name)
        self._board_store = BoardStore(self._engine, settings.seed_path)
        self._scenario_store = ScenarioStore(self._engine)
        self._photos = PhotoResolver(settings.photos_path)
        self._board: Board | None = None
        self._event_bus: EventBus | None = None

    @property
    def root(self) -> Path:
        return self._settings.root

    @property
    def settings(self) -> StaffboardSettings:
        return self._settings

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def board_store(self) -> BoardStore:
        return self._board_store

    @property
    def scenario_store(self) -> ScenarioStore:
        return self._scenario_store

    @property
    def photos(self) -> PhotoResolver:
        return self._photos

    @property
    def event_bus(self) -> EventBus | None:
        """The plugin event bus (None if not initialized)."""
        return self._event_bus

    @property
    def board(self) -> Board:
        """The live board, loaded on first access.

        Raises:
            StoreError: If neither a persisted board nor the seed file can be read.
        """
        if self._board is None:
            board = self._board_store.load()
            created = self.ensure_parent_orgs(board)
            if created:
                board.touch()
                self._board_store.persist(board)
            self._board = board
        return self._board

    def ensure_parent_orgs(self, board: Board) -> list[str]:
        """Add configured parent-organisation cards missing from *board*."""
        board_config = self._settings.board
        created = board.ensure_parent_orgs(
            board_config.parent_org_pairs(),
            max_radius=board_config.max_search_radius,
        )
        if created:
            logger.debug("Created parent organisations: %s", ", ".join(created))
        return created

    def replace_board(self, board: Board) -> None:
        """Make *board* the live board and persist it.

        On a persistence failure the previous live board is kept.
        """
        previous = self._board
        self._board = board
        try:
            board.touch()
            self._board_store.persist(board)
        except BaseException:
            self._board = previous
            raise

    def reset_board(self) -> Board:
        """Discard the persisted board and start again from the seed chart."""
        board = self._board_store.reset()
        if self.ensure_parent_orgs(board):
            board.touch()
            self._board_store.persist(board)
        self._board = board
        return board

    def reload(self) -> Board:
        """Drop the cached board and load it again."""
        self._board = None
        return self.board

    def init_event_bus(self) -> None:
        """Create a PluginManager, discover plugins, and wire up the EventBus.

        Called by AppContext when the workspace is first accessed.
        """
        from staffboard.plugins.event_bus import EventBus
        from staffboard.plugins.manager import PluginManager

        pm = PluginManager()
        if self._settings.plugins.enabled:
            pm.discover_and_load(local_dir=self._settings.plugins_path)
        self._event_bus = EventBus(pm)

    @contextmanager
    def transaction(self) -> Iterator[BoardTransaction]:
        """All-or-nothing board mutation with snapshot rollback.

        Usage::

            with workspace.transaction() as txn:
                change = txn.apply(txn.board.relocate(emp_id, "C3"))
        """
        board = self.board
        backup = board.snapshot()
        txn = BoardTransaction(board=board)
        try:
            yield txn
            if txn.dirty:
                board.touch()
                self._board_store.persist(board)
        except BaseException:
            self._board = backup
            raise

    def close(self) -> None:
        self._engine.dispose()
