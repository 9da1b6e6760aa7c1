"""Shared service-layer helper functions."""

from __future__ import annotations

from datetime import UTC, datetime


def now_iso() -> str:
    """Current UTC time as standard ISO 8601 (for row timestamps)."""
    return datetime.now(UTC).isoformat()


def short_key(public_key: str, width: int = 16) -> str:
    """Truncate a public key for log lines and messages."""
    if len(public_key) <= width:
        return public_key
    return f"{public_key[:width]}…"
