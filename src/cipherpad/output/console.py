"""Rich Console factory and theme for cipherpad output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract. In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

CIPHERPAD_THEME = Theme(
    {
        "cp.ok": "bold green",
        "cp.error": "bold red",
        "cp.fatal": "bold white on red",
        "cp.warning": "bold yellow",
        "cp.op": "bold cyan",
        "cp.key": "dim",
        "cp.alias": "bold",
        "cp.pubkey": "blue",
        "cp.id": "bold blue",
        "cp.state.seed": "magenta",
        "cp.state.synced": "green",
        "cp.state.unsynced": "yellow",
        "cp.state.unknown": "red",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=CIPHERPAD_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_state(state: str) -> str:
    """Return the Rich style name for a sync state."""
    return f"cp.state.{state}" if state in {"seed", "synced", "unsynced", "unknown"} else ""
