"""SQLite database engine, schema, and ID counters via SQLAlchemy Core."""

from cipherpad.infrastructure.database.counters import next_sequential_id
from cipherpad.infrastructure.database.engine import create_db_engine, db_path_for, init_database
from cipherpad.infrastructure.database.schema import (
    devices,
    id_counters,
    metadata,
    note_lists,
    notes,
    secrets,
)

__all__ = [
    "create_db_engine",
    "db_path_for",
    "devices",
    "id_counters",
    "init_database",
    "metadata",
    "next_sequential_id",
    "note_lists",
    "notes",
    "secrets",
]
