"""Root CLI group for cipherpad with global flags and command registration."""

from __future__ import annotations

import click

from cipherpad import __version__
from cipherpad.commands import register_commands
from cipherpad.commands._context import AppContext
from cipherpad.config.settings import CipherpadSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="cipherpad")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.option(
    "-i",
    "--identity",
    default=None,
    help="Caller identity token (default: $CIPHERPAD_IDENTITY).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    identity: str | None,
) -> None:
    """cipherpad — device registry and secret sync for encrypted notes."""
    ctx.ensure_object(dict)
    settings = CipherpadSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        identity=identity,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
