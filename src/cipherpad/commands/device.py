"""Command group: device registration for the calling identity."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cipherpad.commands._base import CipherGroup

if TYPE_CHECKING:
    from cipherpad.commands._context import AppContext

_DEVICE_EXAMPLES = """\
  cipherpad -i alice device register Brave "$(cat brave.pub)"
  cipherpad -i alice device list
  cipherpad -i alice --json device delete Chrome"""


@click.group(cls=CipherGroup, examples=_DEVICE_EXAMPLES)
@click.pass_obj
def device(app: AppContext) -> None:
    """Register, list, and delete devices."""


@device.command(
    "list",
    examples="""\
  cipherpad -i alice device list
  cipherpad -i alice -q device list""",
)
@click.pass_obj
def list_devices(app: AppContext) -> None:
    """List the identity's devices (alias and public key)."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).get_devices(app.identity))


@device.command(
    examples="""\
  cipherpad -i alice device register Brave PK1
  cipherpad -i alice --json device register Chrome "$(cat chrome.pub)" """,
)
@click.argument("alias")
@click.argument("public_key")
@click.pass_obj
def register(app: AppContext, alias: str, public_key: str) -> None:
    """Register a device under ALIAS with its PUBLIC_KEY.

    Reports registered=False when the alias is already taken.
    """
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).register_device(app.identity, alias, public_key))


@device.command(
    examples="""\
  cipherpad -i alice device delete Chrome""",
)
@click.argument("alias")
@click.pass_obj
def delete(app: AppContext, alias: str) -> None:
    """Delete the device registered as ALIAS (never the last one)."""
    from cipherpad.services.registry import RegistryService

    app.emit(RegistryService(app.store).delete_device(app.identity, alias))
