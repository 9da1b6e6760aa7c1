"""Command: bring the database schema to the latest revision."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cipherpad.commands._base import CipherCommand

if TYPE_CHECKING:
    from cipherpad.commands._context import AppContext

_UPGRADE_EXAMPLES = """\
  cipherpad upgrade --check
  cipherpad upgrade
  cipherpad -c /srv/cipherpad/cipherpad.toml --json upgrade"""


@click.command("upgrade", cls=CipherCommand, examples=_UPGRADE_EXAMPLES)
@click.option("--check", is_flag=True, help="List pending revisions and exit.")
@click.pass_obj
def upgrade(app: AppContext, check: bool) -> None:
    """Back up the database, then apply pending schema revisions.

    Databases created before versioning are stamped rather than migrated.
    """
    from cipherpad.services.upgrade import UpgradeService

    service = UpgradeService(app.store)
    app.emit(service.check_pending() if check else service.apply())
