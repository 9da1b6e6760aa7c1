"""Human-readable views of a ServiceResult.

A view draws the data of one successful op onto a Rich console. Views
register themselves per op with :func:`_view`; ops without one get the
key-value fallback. Failures share a single view whatever the op.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from cipherpad.output.console import create_console, get_output, style_for_state

if TYPE_CHECKING:
    from rich.console import Console

    from cipherpad.services.result import ServiceResult

View = Callable[["Console", "ServiceResult", bool], None]

_VIEWS: dict[str, View] = {}

_FIELD_STYLES = {"id": "cp.id", "alias": "cp.alias", "public_key": "cp.pubkey"}


def _view(*ops: str) -> Callable[[View], View]:
    def register(fn: View) -> View:
        for op in ops:
            _VIEWS[op] = fn
        return fn

    return register


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Draw *result* and return the text.

    Rich emits no ANSI codes off a terminal, so CliRunner and pipes
    receive plain text.
    """
    console = create_console()
    if not result.ok:
        _draw_failure(console, result, verbose)
    else:
        console.print(Text("OK", style="cp.ok"), Text(f"  {result.op}", style="cp.op"), sep="")
        _VIEWS.get(result.op, _draw_fields)(console, result, verbose)
        if verbose and result.meta:
            _draw_meta(console, result.meta)
    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Values a script would pipe onward are printed bare: one device, key
    or note id per line, the ciphertext, or the seed flag.
    """
    if result.error is not None:
        err = result.error
        return f"ERROR: {result.op} — {err.code}: {err.message}"
    if not result.ok:
        return f"ERROR: {result.op}"

    data = result.data
    bare = {
        "get_encrypted_secrets": "ciphertext",
        "get_sync_state": "state",
        "add_note": "id",
    }
    if result.op in bare:
        return str(data[bare[result.op]])
    if result.op == "is_seed":
        return str(bool(data["seed"])).lower()

    items = data.get("items")
    if not isinstance(items, list):
        return f"OK: {result.op}"
    lines = []
    for item in items:
        if not isinstance(item, dict):
            lines.append(str(item))
        elif "alias" in item:
            lines.append(f"{item['alias']}\t{item['public_key']}")
        else:
            lines.append(str(item.get("id", "")))
    return "\n".join(lines)


def _print_pair(console: Console, key: str, value: Any, style: str | None = None) -> None:
    if isinstance(value, (dict, list)):
        shown = json.dumps(value, separators=(",", ":"))
    else:
        shown = str(value)
    console.print(
        Text(f"  {key}: ", style="cp.key"),
        Text(shown, style=style or _FIELD_STYLES.get(key, "")),
        sep="",
    )


def _print_table(
    console: Console,
    columns: Iterable[tuple[str, dict[str, Any]]],
    rows: Iterable[tuple[str, ...]],
    empty: str,
) -> None:
    rows = list(rows)
    if not rows:
        console.print(f"  {empty}")
        return
    table = Table(pad_edge=False)
    for header, options in columns:
        table.add_column(header, **options)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def _draw_meta(console: Console, meta: dict[str, Any]) -> None:
    console.print()
    console.print(Text("  meta:", style="dim"))
    for key, value in meta.items():
        if key == "telemetry" and isinstance(value, dict):
            name = value.get("name", "?")
            console.print(f"    {value.get('duration_ms', 0.0):>8.2f}ms  {name}")
        else:
            console.print(f"    {key}: {value}")


def _draw_failure(console: Console, result: ServiceResult, verbose: bool) -> None:
    err = result.error
    fatal = err is not None and err.fatal
    console.print(
        Text("FATAL" if fatal else "ERROR", style="cp.fatal" if fatal else "cp.error"),
        Text(f"  {result.op}", style="cp.op"),
        Text(f" [{err.code}]" if err else "", style="cp.key"),
        Text(" — "),
        Text(err.message if err else "Unknown error"),
    )
    if verbose and err is not None and err.detail:
        console.print(Text("  detail:", style="dim"))
        for key, value in err.detail.items():
            console.print(f"    {key}: {value}")


def _draw_fields(console: Console, result: ServiceResult, verbose: bool) -> None:
    for key, value in result.data.items():
        _print_pair(console, key, value)


@_view("get_devices")
def _draw_devices(console: Console, result: ServiceResult, verbose: bool) -> None:
    _print_table(
        console,
        [
            ("Alias", {"style": "cp.alias", "no_wrap": True}),
            ("Public key", {"style": "cp.pubkey"}),
        ],
        ((str(d["alias"]), str(d["public_key"])) for d in result.data.get("items", [])),
        empty="No devices registered.",
    )


@_view("get_unsynced_public_keys")
def _draw_keys(console: Console, result: ServiceResult, verbose: bool) -> None:
    keys = result.data.get("items", [])
    _print_pair(console, "count", len(keys))
    for key in keys:
        console.print(Text(f"  - {key}", style="cp.pubkey"))


@_view("get_sync_state")
def _draw_sync_state(console: Console, result: ServiceResult, verbose: bool) -> None:
    state = str(result.data.get("state", ""))
    _print_pair(console, "public_key", result.data.get("public_key", ""))
    _print_pair(console, "state", state, style=style_for_state(state))


@_view("get_notes")
def _draw_notes(console: Console, result: ServiceResult, verbose: bool) -> None:
    # Ciphertexts are truncated to one line unless verbose.
    _print_table(
        console,
        [
            ("ID", {"style": "cp.id", "justify": "right", "no_wrap": True}),
            ("Encrypted text", {"overflow": "ellipsis", "no_wrap": not verbose}),
        ],
        ((str(n["id"]), str(n["encrypted_text"])) for n in result.data.get("items", [])),
        empty="No notes.",
    )
