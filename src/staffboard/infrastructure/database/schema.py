"""SQLAlchemy Core table definitions for the staffboard database.

Board state and scenario snapshots are stored as JSON documents in the
original camelCase wire format, so a snapshot can be exported verbatim
back to a seed file.
"""

from __future__ import annotations

from sqlalchemy import Column, Index, Integer, MetaData, Table, Text

metadata = MetaData()

# Single-row table: the live board. ``slot`` is always BOARD_SLOT.
board_state = Table(
    "board_state",
    metadata,
    Column("slot", Integer, primary_key=True),
    Column("payload", Text, nullable=False),  # JSON
    Column("last_updated", Text),
    Column("saved_at", Text, nullable=False),
)

BOARD_SLOT = 1

scenarios = Table(
    "scenarios",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("id", Text, nullable=False, unique=True),
    Column("name", Text, nullable=False),
    Column("description", Text, nullable=False, default="", server_default=""),
    Column("created_at", Text, nullable=False),
    Column("updated_at", Text, nullable=False),
    Column("payload", Text, nullable=False),  # JSON
)

Index("ix_scenarios_name", scenarios.c.name)
