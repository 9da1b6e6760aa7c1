"""Store — repository pattern with per-call transaction coordination.

The Store is the single dependency injected into every service. It owns
the database engine and hands out :class:`StoreTransaction` objects whose
repositories share one connection, so a service call's device, secret
and ledger writes commit together or not at all.

There is one Store per process and no ambient "current caller": the
identity token is an explicit argument of every repository method.
"""

from __future__ import annotations

import logging
import shutil
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from cipherpad.infrastructure.database.engine import db_path_for, init_database
from cipherpad.infrastructure.repositories.ledger import NoteLedger
from cipherpad.infrastructure.repositories.registry import DeviceRepository, SecretRepository

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from cipherpad.config.settings import CipherpadSettings

logger = logging.getLogger(__name__)


@dataclass
class StoreTransaction:
    """Active transaction with repositories bound to its connection."""

    conn: Connection
    devices: DeviceRepository = field(init=False)
    secrets: SecretRepository = field(init=False)
    ledger: NoteLedger = field(init=False)

    def __post_init__(self) -> None:
        self.devices = DeviceRepository(self.conn)
        self.secrets = SecretRepository(self.conn)
        self.ledger = NoteLedger(self.conn)


class Store:
    """Repository owning the DeviceSet, SecretRecord, and note ledger state.

    Constructed once at CLI startup from :class:`CipherpadSettings`.
    Services receive the Store via their :class:`BaseService` constructor.
    """

    def __init__(self, settings: CipherpadSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(self.root)

    @property
    def root(self) -> Path:
        """The data root directory (holds ``.cipherpad/``)."""
        return self._settings.data_root

    @property
    def db_path(self) -> Path:
        return db_path_for(self.root)

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> CipherpadSettings:
        """The resolved settings for this store."""
        return self._settings

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()

    def backup(self) -> Path:
        """Copy the database to a timestamped file under ``backups/``.

        Keeps at most ``backup.max_count`` copies, newest first.
        """
        backup_dir = self.db_path.parent / "backups"
        backup_dir.mkdir(parents=True, exist_ok=True)
        stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%S%f")
        backup_path = backup_dir / f"cipherpad-{stamp}.db"
        shutil.copy2(str(self.db_path), str(backup_path))

        backups = sorted(backup_dir.glob("cipherpad-*.db"))
        max_count = self._settings.backup.max_count
        if len(backups) > max_count:
            for old in backups[: len(backups) - max_count]:
                old.unlink(missing_ok=True)
        logger.debug("Database backed up to %s", backup_path)
        return backup_path

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """One atomic unit of work.

        Commits when the block exits normally and rolls back on any
        exception. The engine opens it with ``BEGIN IMMEDIATE``, so the
        reads a call validates against are taken under the write lock and
        concurrent calls run one after another.

        Usage::

            with store.transaction() as txn:
                if not txn.devices.count(identity):
                    txn.devices.insert(identity, device, now)
                    txn.ledger.create_list(identity, now)
        """
        with self._engine.begin() as conn:
            yield StoreTransaction(conn=conn)
