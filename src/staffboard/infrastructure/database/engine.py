"""Database engine setup for SQLite.

The DB lives at ``{root}/.staffboard/{db_name}``. SQLAlchemy Core (not ORM)
is used because staffboard is a short-lived CLI process that reads and
writes whole JSON documents.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from staffboard.infrastructure.database.schema import metadata

STATE_DIRNAME = ".staffboard"
DEFAULT_DB_NAME = "staffboard.db"


def create_db_engine(db_path: Path) -> Engine:
    """Create a SQLite engine with WAL journaling."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    return engine


def init_database(root: Path, db_name: str = DEFAULT_DB_NAME) -> Engine:
    """Create ``{root}/.staffboard/`` and all tables. Idempotent."""
    state_dir = root / STATE_DIRNAME
    state_dir.mkdir(parents=True, exist_ok=True)
    (state_dir / "plugins").mkdir(exist_ok=True)

    engine = create_db_engine(state_dir / db_name)
    metadata.create_all(engine)
    return engine
