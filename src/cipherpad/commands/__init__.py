"""Subcommand modules for cipherpad.

Provides register_commands() which uses deferred imports to keep
``cipherpad --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group."""
    # --- Groups ---
    from cipherpad.commands.device import device
    from cipherpad.commands.note import note
    from cipherpad.commands.secret import secret

    cli.add_command(device)
    cli.add_command(secret)
    cli.add_command(note)

    # --- Standalone commands ---
    from cipherpad.commands.init_cmd import init_cmd
    from cipherpad.commands.upgrade import upgrade

    cli.add_command(init_cmd)
    cli.add_command(upgrade)
