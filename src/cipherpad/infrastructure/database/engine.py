"""Database engine setup for SQLite with WAL mode.

SQLite is the persistence layer: WAL mode for concurrent reads and
ACID transactions so every registry call commits or rolls back as one
unit. The DB is stored at {data_root}/.cipherpad/cipherpad.db.

SQLAlchemy Core (not ORM) is used because each call is a short
check-then-write against a handful of rows.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import Connection, create_engine, event, insert, select
from sqlalchemy.engine import Engine

from cipherpad.infrastructure.database.schema import id_counters, metadata

DATA_DIRNAME = ".cipherpad"
DB_FILENAME = "cipherpad.db"

_SEEDED_COUNTERS = ("note",)


def db_path_for(data_root: Path) -> Path:
    """Location of the database file under *data_root*."""
    return data_root / DATA_DIRNAME / DB_FILENAME


def sqlite_url(db_path: Path) -> str:
    return f"sqlite:///{db_path}"


def apply_pragmas(dbapi_conn: Any, _record: Any) -> None:
    """``connect`` listener: WAL journal and enforced note-list foreign keys.

    Also turns off pysqlite's own transaction handling, which would defer
    ``BEGIN`` until the first write; :func:`begin_immediate` issues it
    instead. Shared with the Alembic environment so migrations run under
    the same constraints as the application.
    """
    dbapi_conn.isolation_level = None
    cursor = dbapi_conn.cursor()
    try:
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def begin_immediate(conn: Connection) -> None:
    """``begin`` listener: take the write lock when the transaction opens.

    Validation reads then see the same state the writes land on, and a
    concurrent caller waits (up to the driver's busy timeout) instead of
    interleaving between the reads and the writes.
    """
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_db_engine(db_path: Path, **kwargs: Any) -> Engine:
    """Create a SQLite engine with :func:`apply_pragmas` on every connection."""
    engine = create_engine(sqlite_url(db_path), **kwargs)
    event.listen(engine, "connect", apply_pragmas)
    event.listen(engine, "begin", begin_immediate)
    return engine


def init_database(data_root: Path) -> Engine:
    """Initialize the database at ``{data_root}/.cipherpad/cipherpad.db``.

    Creates the ``.cipherpad/`` directory structure, all tables from
    :data:`schema.metadata`, and seeds the ``id_counters`` table.

    Idempotent; safe to call on an existing store.

    Returns the engine ready for use.
    """
    data_dir = data_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "backups").mkdir(exist_ok=True)

    engine = create_db_engine(db_path_for(data_root))
    metadata.create_all(engine)
    _seed_counters(engine)
    return engine


def _seed_counters(engine: Engine) -> None:
    """Insert initial counter rows if they don't exist."""
    with engine.begin() as conn:
        for name in _SEEDED_COUNTERS:
            row = conn.execute(select(id_counters.c.name).where(id_counters.c.name == name)).first()
            if row is None:
                conn.execute(insert(id_counters).values(name=name, next_value=1))
