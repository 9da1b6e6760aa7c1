"""Note ledger — per-identity ordered list of encrypted note records.

The ledger is pure CRUD over opaque ciphertexts. Whether an identity
*has* a list is decided by the device registry, which creates it once
at first-device registration.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import delete, func, insert, select, update

from cipherpad.domain.models import EncryptedNote
from cipherpad.infrastructure.database.counters import next_sequential_id
from cipherpad.infrastructure.database.schema import note_lists, notes

if TYPE_CHECKING:
    from sqlalchemy import Connection


class NoteLedger:
    """Encapsulates SQL for the note list of each identity."""

    def __init__(self, conn: Connection) -> None:
        self._conn = conn

    def has_list(self, identity: str) -> bool:
        row = self._conn.execute(
            select(note_lists.c.identity).where(note_lists.c.identity == identity)
        ).first()
        return row is not None

    def create_list(self, identity: str, now: str) -> None:
        """Create an empty list. Fails on the primary key if one exists."""
        self._conn.execute(insert(note_lists).values(identity=identity, created=now))

    def list(self, identity: str) -> list[EncryptedNote]:
        """Notes in insertion order. Empty when the identity has no list."""
        rows = self._conn.execute(
            select(notes.c.id, notes.c.encrypted_text)
            .where(notes.c.identity == identity)
            .order_by(notes.c.id)
        ).all()
        return [EncryptedNote(id=row.id, encrypted_text=row.encrypted_text) for row in rows]

    def count(self, identity: str) -> int:
        return int(
            self._conn.execute(
                select(func.count()).select_from(notes).where(notes.c.identity == identity)
            ).scalar_one()
        )

    def append(self, identity: str, encrypted_text: str, now: str) -> int:
        """Add a note at the end of the list and return its new id."""
        note_id = next_sequential_id(self._conn, "note")
        self._conn.execute(
            insert(notes).values(
                id=note_id,
                identity=identity,
                encrypted_text=encrypted_text,
                created=now,
                modified=now,
            )
        )
        return note_id

    def update(self, identity: str, note_id: int, encrypted_text: str, now: str) -> bool:
        """Replace a note's ciphertext. False if the id is not in the list."""
        result = self._conn.execute(
            update(notes)
            .where(notes.c.identity == identity, notes.c.id == note_id)
            .values(encrypted_text=encrypted_text, modified=now)
        )
        return bool(result.rowcount)

    def remove(self, identity: str, note_id: int) -> bool:
        result = self._conn.execute(
            delete(notes).where(notes.c.identity == identity, notes.c.id == note_id)
        )
        return bool(result.rowcount)
