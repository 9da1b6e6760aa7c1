"""Alembic environment: runs cipherpad revisions against one SQLite file."""

from __future__ import annotations

from pathlib import Path

from alembic import context
from sqlalchemy import pool

from cipherpad.infrastructure.database.engine import create_db_engine
from cipherpad.infrastructure.database.schema import metadata

_url = context.config.get_main_option("sqlalchemy.url")
if not _url:
    raise RuntimeError("cipherpad migrations need sqlalchemy.url; use build_config()")

# SQLite cannot ALTER most constraints in place; batch mode rebuilds tables.
_options = {"target_metadata": metadata, "render_as_batch": True}

if context.is_offline_mode():
    context.configure(url=_url, literal_binds=True, **_options)
    with context.begin_transaction():
        context.run_migrations()
else:
    engine = create_db_engine(Path(_url.removeprefix("sqlite:///")), poolclass=pool.NullPool)
    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **_options)
            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()
