"""Command group: shared-secret bootstrap and distribution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cipherpad.commands._base import CipherGroup

if TYPE_CHECKING:
    from cipherpad.commands._context import AppContext

_SECRET_EXAMPLES = """\
  cipherpad -i alice secret is-seed
  cipherpad -i alice secret upload-seed PK1 ENC1
  cipherpad -i alice secret unsynced
  cipherpad -i alice secret upload -s PK2 ENC2 -s PK3 ENC3
  cipherpad -i alice -q secret get PK2"""


@click.group(cls=CipherGroup, examples=_SECRET_EXAMPLES)
@click.pass_obj
def secret(app: AppContext) -> None:
    """Publish and fetch per-device copies of the shared secret."""


@secret.command(
    "is-seed",
    examples="""\
  cipherpad -i alice secret is-seed
  cipherpad -i alice -q secret is-seed""",
)
@click.pass_obj
def is_seed(app: AppContext) -> None:
    """Report whether no device has received the secret yet."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).is_seed(app.identity))


@secret.command(
    "upload-seed",
    examples="""\
  cipherpad -i alice secret upload-seed PK1 ENC1""",
)
@click.argument("public_key")
@click.argument("ciphertext")
@click.pass_obj
def upload_seed(app: AppContext, public_key: str, ciphertext: str) -> None:
    """Upload the originating device's own encrypted secret."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).upload_seed_secret(app.identity, public_key, ciphertext))


@secret.command(
    examples="""\
  cipherpad -i alice secret unsynced
  cipherpad -i alice -q secret unsynced""",
)
@click.pass_obj
def unsynced(app: AppContext) -> None:
    """List public keys still waiting for the secret."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).get_unsynced_public_keys(app.identity))


@secret.command(
    examples="""\
  cipherpad -i alice secret upload -s PK2 ENC2
  cipherpad -i alice secret upload -s PK2 ENC2 -s PK3 ENC3""",
)
@click.option(
    "-s",
    "--secret",
    "pairs",
    type=(str, str),
    multiple=True,
    required=True,
    metavar="PUBLIC_KEY CIPHERTEXT",
    help="Secret encrypted to one device (repeatable).",
)
@click.pass_obj
def upload(app: AppContext, pairs: tuple[tuple[str, str], ...]) -> None:
    """Upload encrypted secrets for several devices at once."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).upload_encrypted_secrets(app.identity, list(pairs)))


@secret.command(
    examples="""\
  cipherpad -i alice secret get PK2
  cipherpad -i alice -q secret get PK2 > secret.enc""",
)
@click.argument("public_key")
@click.pass_obj
def get(app: AppContext, public_key: str) -> None:
    """Fetch the secret ciphertext addressed to PUBLIC_KEY."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).get_encrypted_secrets(app.identity, public_key))


@secret.command(
    examples="""\
  cipherpad -i alice secret state PK2""",
)
@click.argument("public_key")
@click.pass_obj
def state(app: AppContext, public_key: str) -> None:
    """Show whether PUBLIC_KEY is seed, synced, unsynced, or unknown."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).get_sync_state(app.identity, public_key))
