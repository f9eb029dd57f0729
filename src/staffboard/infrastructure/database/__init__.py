"""SQLite database engine and schema via SQLAlchemy Core."""

from staffboard.infrastructure.database.engine import create_db_engine, init_database
from staffboard.infrastructure.database.schema import board_state, metadata, scenarios

__all__ = [
    "board_state",
    "create_db_engine",
    "init_database",
    "metadata",
    "scenarios",
]
