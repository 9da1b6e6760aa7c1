"""Command: data directory initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from cipherpad.commands._base import CipherCommand

if TYPE_CHECKING:
    from cipherpad.commands._context import AppContext


@click.command(
    "init",
    cls=CipherCommand,
    examples="""\
  cipherpad init
  cipherpad init /srv/cipherpad --max-devices 8
  cipherpad --json init /tmp/cipherpad""",
)
@click.argument("path", required=False, default=".")
@click.option(
    "--max-devices",
    type=click.IntRange(min=0),
    default=None,
    help="Device limit per identity written to cipherpad.toml (0 = unlimited).",
)
@click.pass_obj
def init_cmd(app: AppContext, path: str, max_devices: int | None) -> None:
    """Create cipherpad.toml and an up-to-date database under PATH."""
    from cipherpad.services.init import InitService

    app.emit(InitService.init_store(Path(path).resolve(), max_devices=max_devices))
