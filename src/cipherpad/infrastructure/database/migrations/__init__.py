"""Alembic plumbing for the cipherpad database.

Configured in code from the package directory, so installs need no
``alembic.ini``. Revision helpers here are what the upgrade service uses
to decide between stamping an ``init_database`` schema and migrating.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import Script, ScriptDirectory

from cipherpad.infrastructure.database.engine import sqlite_url

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SCRIPT_LOCATION = Path(__file__).parent


def build_config(db_path: Path) -> Config:
    """Alembic Config for the database file at *db_path*."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    cfg.set_main_option("sqlalchemy.url", sqlite_url(db_path))
    return cfg


def head_revision(cfg: Config) -> str | None:
    return ScriptDirectory.from_config(cfg).get_current_head()


def current_revision(engine: Engine) -> str | None:
    """Revision recorded in ``alembic_version``; None when never stamped."""
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def pending_revisions(cfg: Config, current: str | None) -> list[Script]:
    """Revisions between *current* and head, oldest first."""
    script = ScriptDirectory.from_config(cfg)
    lower = current or "base"
    return list(reversed(list(script.iterate_revisions("heads", lower))))
