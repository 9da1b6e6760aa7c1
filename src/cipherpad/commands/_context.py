"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Store initialization, the caller
identity, and centralized result emission (stdout/stderr routing +
exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from cipherpad.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from cipherpad.config.settings import CipherpadSettings
    from cipherpad.infrastructure.store import Store
    from cipherpad.services.result import ServiceResult

EXIT_ERROR = 1
EXIT_FATAL = 2


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is lazily initialized on first use so ``--help`` and
    ``--version`` never touch the database.
    """

    def __init__(self, settings: CipherpadSettings) -> None:
        self.settings = settings
        self._store: Store | None = None

        from cipherpad.config.logging import bind_identity, configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_identity(settings.identity)

        if settings.verbose:
            from cipherpad.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> Store:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from cipherpad.infrastructure.store import Store

            self._store = Store(self.settings)
        return self._store

    @property
    def identity(self) -> str:
        """The caller identity; a usage error when none was supplied."""
        identity = self.settings.identity
        if not identity:
            msg = "No identity given. Pass --identity or set CIPHERPAD_IDENTITY."
            raise click.UsageError(msg)
        return identity

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Recoverable failure: writes to stderr, exits with code 1.
        * Fatal fault: writes to stderr, exits with code 2.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(EXIT_FATAL if result.fatal else EXIT_ERROR)
