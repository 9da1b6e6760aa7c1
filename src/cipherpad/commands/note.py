"""Command group: the identity's encrypted note list."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cipherpad.commands._base import CipherGroup

if TYPE_CHECKING:
    from cipherpad.commands._context import AppContext

_NOTE_EXAMPLES = """\
  cipherpad -i alice note add "$(encrypt < draft.txt)"
  cipherpad -i alice note list
  cipherpad -i alice note update 3 "$(encrypt < draft.txt)"
  cipherpad -i alice note delete 3"""


@click.group(cls=CipherGroup, examples=_NOTE_EXAMPLES)
@click.pass_obj
def note(app: AppContext) -> None:
    """Store and fetch encrypted notes."""


@note.command(
    "list",
    examples="""\
  cipherpad -i alice note list
  cipherpad -i alice -q note list""",
)
@click.pass_obj
def list_notes(app: AppContext) -> None:
    """List notes in insertion order."""
    from cipherpad.services.notes import NoteService

    app.emit(NoteService(app.store).get_notes(app.identity))


@note.command(
    examples="""\
  cipherpad -i alice note add "$(encrypt < draft.txt)"
  cipherpad -i alice -q note add CIPHERTEXT""",
)
@click.argument("encrypted_text")
@click.pass_obj
def add(app: AppContext, encrypted_text: str) -> None:
    """Append a note and print its id."""
    from cipherpad.services.notes import NoteService

    app.emit(NoteService(app.store).add_note(app.identity, encrypted_text))


@note.command(
    examples="""\
  cipherpad -i alice note update 3 CIPHERTEXT""",
)
@click.argument("note_id", type=int)
@click.argument("encrypted_text")
@click.pass_obj
def update(app: AppContext, note_id: int, encrypted_text: str) -> None:
    """Replace the ciphertext of note NOTE_ID."""
    from cipherpad.services.notes import NoteService

    app.emit(NoteService(app.store).update_note(app.identity, note_id, encrypted_text))


@note.command(
    examples="""\
  cipherpad -i alice note delete 3""",
)
@click.argument("note_id", type=int)
@click.pass_obj
def delete(app: AppContext, note_id: int) -> None:
    """Delete note NOTE_ID."""
    from cipherpad.services.notes import NoteService

    app.emit(NoteService(app.store).delete_note(app.identity, note_id))
