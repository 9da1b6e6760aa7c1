"""UpgradeService — schema migrations for the registry database.

Pipeline: CHECK → BACKUP → MIGRATE (or STAMP) → REPORT

A database built by ``init_database`` already has every table but no
``alembic_version`` row. Such a database is stamped at head instead of
migrated, since replaying the baseline would collide with its tables.
"""

from __future__ import annotations

import logging
from typing import Any

from alembic import command
from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from cipherpad.infrastructure.database.migrations import (
    build_config,
    current_revision,
    head_revision,
    pending_revisions,
)
from cipherpad.services.base import BaseService
from cipherpad.services.result import ServiceResult, failure

logger = logging.getLogger(__name__)

_OP = "upgrade"


class UpgradeService(BaseService):
    """Reports and applies pending Alembic revisions."""

    def _unversioned_schema(self, current: str | None) -> bool:
        return current is None and "devices" in inspect(self._store.engine).get_table_names()

    def check_pending(self) -> ServiceResult:
        """List pending revisions, oldest first, without applying them."""
        cfg = build_config(self._store.db_path)
        try:
            head = head_revision(cfg)
            current = current_revision(self._store.engine)
            pending: list[dict[str, Any]] = [
                {"revision": rev.revision, "description": rev.doc or ""}
                for rev in pending_revisions(cfg, current)
            ]
        except SQLAlchemyError as exc:
            return failure(_OP, "CHECK_FAILED", f"Failed to read migration state: {exc}")

        return ServiceResult(
            ok=True,
            op=_OP,
            data={
                "pending_count": len(pending),
                "pending": pending,
                "current": current,
                "head": head,
            },
        )

    def apply(self) -> ServiceResult:
        check = self.check_pending()
        if not check.ok:
            return check
        if not check.data["pending_count"]:
            return ServiceResult(
                ok=True,
                op=_OP,
                data={
                    "applied_count": 0,
                    "current": check.data["head"],
                    "message": "Database is already up to date",
                },
            )

        try:
            backup_path = self._store.backup()
        except OSError as exc:
            return failure(_OP, "BACKUP_FAILED", f"Backup failed: {exc}")

        cfg = build_config(self._store.db_path)
        stamped = self._unversioned_schema(check.data["current"])
        try:
            if stamped:
                command.stamp(cfg, "head")
            else:
                command.upgrade(cfg, "head")
        except SQLAlchemyError as exc:
            logger.warning("Migration failed, backup kept at %s", backup_path)
            return failure(
                _OP,
                "MIGRATION_FAILED",
                f"Migration failed: {exc}. Backup at: {backup_path}",
                detail={"backup_path": str(backup_path)},
            )

        logger.info("Database at %s (stamped: %s)", check.data["head"], stamped)
        return ServiceResult(
            ok=True,
            op=_OP,
            data={
                "applied_count": check.data["pending_count"],
                "current": check.data["head"],
                "stamped": stamped,
                "backup_path": str(backup_path),
            },
        )

    def stamp_current(self) -> ServiceResult:
        """Mark a freshly created database as being at head."""
        cfg = build_config(self._store.db_path)
        try:
            command.stamp(cfg, "head")
        except SQLAlchemyError as exc:
            return failure(_OP, "STAMP_FAILED", f"Failed to stamp database: {exc}")
        return ServiceResult(ok=True, op=_OP, data={"stamped": True, "current": head_revision(cfg)})
