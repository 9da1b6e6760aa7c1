"""NoteService — CRUD over an identity's encrypted note list.

The list exists only once the identity has registered its first device;
writing to an identity without one is a fault, reading returns nothing.
"""

from __future__ import annotations

import logging

from cipherpad.domain.rules import validate_note_text
from cipherpad.domain.types import FaultCode, NoteErrorCode
from cipherpad.services._helpers import now_iso
from cipherpad.services.base import BaseService
from cipherpad.services.contracts import (
    NoteAddData,
    NoteDeleteData,
    NoteListData,
    NoteUpdateData,
    dump_validated,
)
from cipherpad.services.result import ServiceResult, failure
from cipherpad.services.telemetry import traced

logger = logging.getLogger(__name__)


def _no_list(op: str) -> ServiceResult:
    return failure(
        op,
        FaultCode.NO_SUCH_IDENTITY,
        "No note list exists for this identity; register a device first",
        fatal=True,
    )


class NoteService(BaseService):
    """Append, replace, and remove opaque note ciphertexts."""

    def _check_text(self, op: str, encrypted_text: str) -> ServiceResult | None:
        limit = self._store.settings.notes.max_note_length
        vr = validate_note_text(encrypted_text, max_note_length=limit)
        if vr.valid:
            return None
        return failure(op, NoteErrorCode.NOTE_TOO_LARGE, "; ".join(vr.errors))

    @traced
    def get_notes(self, identity: str) -> ServiceResult:
        with self._store.transaction() as txn:
            items = txn.ledger.list(identity)
        return ServiceResult(
            ok=True,
            op="get_notes",
            data=dump_validated(
                NoteListData,
                {"count": len(items), "items": [n.model_dump() for n in items]},
            ),
        )

    @traced
    def add_note(self, identity: str, encrypted_text: str) -> ServiceResult:
        """Append a note and return its new id in ``data.id``."""
        op = "add_note"
        rejected = self._check_text(op, encrypted_text)
        if rejected is not None:
            return rejected

        limit = self._store.settings.notes.max_notes_per_identity
        with self._store.transaction() as txn:
            if not txn.ledger.has_list(identity):
                return _no_list(op)
            if limit and txn.ledger.count(identity) >= limit:
                return failure(
                    op,
                    NoteErrorCode.NOTE_LIMIT,
                    f"Note limit reached ({limit})",
                    detail={"limit": limit},
                )
            note_id = txn.ledger.append(identity, encrypted_text, now_iso())

        logger.debug("Note added: %d", note_id)
        return ServiceResult(ok=True, op=op, data=dump_validated(NoteAddData, {"id": note_id}))

    @traced
    def update_note(self, identity: str, note_id: int, encrypted_text: str) -> ServiceResult:
        """Replace a note's ciphertext. Unknown ids are a no-op with a warning."""
        op = "update_note"
        rejected = self._check_text(op, encrypted_text)
        if rejected is not None:
            return rejected

        with self._store.transaction() as txn:
            if not txn.ledger.has_list(identity):
                return _no_list(op)
            updated = txn.ledger.update(identity, note_id, encrypted_text, now_iso())

        warnings = [] if updated else [f"No note with id {note_id}"]
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(NoteUpdateData, {"id": note_id, "updated": updated}),
            warnings=warnings,
        )

    @traced
    def delete_note(self, identity: str, note_id: int) -> ServiceResult:
        op = "delete_note"
        with self._store.transaction() as txn:
            if not txn.ledger.has_list(identity):
                return _no_list(op)
            deleted = txn.ledger.remove(identity, note_id)

        warnings = [] if deleted else [f"No note with id {note_id}"]
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(NoteDeleteData, {"id": note_id, "deleted": deleted}),
            warnings=warnings,
        )
