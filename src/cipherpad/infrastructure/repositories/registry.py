"""Device and secret-record repositories.

Both repositories wrap a connection from an open ``Store.transaction()``
so reads and writes made by one service call commit or roll back
together. They perform no policy checks; that is the service's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select, update

from cipherpad.domain.models import Device, SecretRecord
from cipherpad.infrastructure.database.schema import devices, secrets

if TYPE_CHECKING:
    from sqlalchemy import Connection


class DeviceRepository:
    """Per-identity DeviceSet: ``alias -> public_key``."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def list(self, identity: str) -> list[Device]:
        """All devices of *identity*, ordered by alias."""
        rows = self._conn.execute(
            select(devices.c.alias, devices.c.public_key)
            .where(devices.c.identity == identity)
            .order_by(devices.c.alias)
        ).all()
        return [Device(alias=row.alias, public_key=row.public_key) for row in rows]

    def count(self, identity: str) -> int:
        return int(
            self._conn.execute(
                select(func.count()).select_from(devices).where(devices.c.identity == identity)
            ).scalar_one()
        )

    def get(self, identity: str, alias: str) -> Device | None:
        row = self._conn.execute(
            select(devices.c.alias, devices.c.public_key).where(
                devices.c.identity == identity,
                devices.c.alias == alias,
            )
        ).first()
        if row is None:
            return None
        return Device(alias=row.alias, public_key=row.public_key)

    def public_keys(self, identity: str) -> set[str]:
        rows = self._conn.execute(
            select(devices.c.public_key).where(devices.c.identity == identity).distinct()
        ).all()
        return {row.public_key for row in rows}

    def has_public_key(self, identity: str, public_key: str) -> bool:
        row = self._conn.execute(
            select(devices.c.alias).where(
                devices.c.identity == identity,
                devices.c.public_key == public_key,
            )
        ).first()
        return row is not None

    def insert(self, identity: str, device: Device, now: str) -> None:
        self._conn.execute(
            insert(devices).values(
                identity=identity,
                alias=device.alias,
                public_key=device.public_key,
                created=now,
            )
        )

    def remove(self, identity: str, alias: str) -> bool:
        """Delete one alias. Returns False if it was not registered."""
        result = self._conn.execute(
            delete(devices).where(devices.c.identity == identity, devices.c.alias == alias)
        )
        return bool(result.rowcount)


class SecretRepository:
    """Per-identity SecretRecord map: ``public_key -> ciphertext``."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def is_empty(self, identity: str) -> bool:
        row = self._conn.execute(
            select(secrets.c.public_key).where(secrets.c.identity == identity).limit(1)
        ).first()
        return row is None

    def synced_keys(self, identity: str) -> set[str]:
        rows = self._conn.execute(
            select(secrets.c.public_key).where(secrets.c.identity == identity)
        ).all()
        return {row.public_key for row in rows}

    def get(self, identity: str, public_key: str) -> SecretRecord | None:
        row = self._conn.execute(
            select(secrets.c.public_key, secrets.c.ciphertext).where(
                secrets.c.identity == identity,
                secrets.c.public_key == public_key,
            )
        ).first()
        if row is None:
            return None
        return SecretRecord(public_key=row.public_key, ciphertext=row.ciphertext)

    def upsert(self, identity: str, public_key: str, ciphertext: str, now: str) -> None:
        """Insert or overwrite the record for *public_key*."""
        result = self._conn.execute(
            update(secrets)
            .where(secrets.c.identity == identity, secrets.c.public_key == public_key)
            .values(ciphertext=ciphertext, updated=now)
        )
        if not result.rowcount:
            self._conn.execute(
                insert(secrets).values(
                    identity=identity,
                    public_key=public_key,
                    ciphertext=ciphertext,
                    updated=now,
                )
            )

    def upsert_many(self, identity: str, records: Iterable[tuple[str, str]], now: str) -> int:
        count = 0
        for public_key, ciphertext in records:
            self.upsert(identity, public_key, ciphertext, now)
            count += 1
        return count

    def remove(self, identity: str, public_key: str) -> bool:
        result = self._conn.execute(
            delete(secrets).where(
                secrets.c.identity == identity,
                secrets.c.public_key == public_key,
            )
        )
        return bool(result.rowcount)
