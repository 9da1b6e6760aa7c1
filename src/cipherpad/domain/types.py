"""Error codes and derived sync states for the device registry.

Recoverable codes are reported as values the caller branches on.
Fault codes signal protocol misuse or an internal inconsistency; the
operation that hits one aborts before writing anything.
"""

from __future__ import annotations

from enum import StrEnum


class SecretErrorCode(StrEnum):
    """Recoverable outcomes of secret lookups and uploads."""

    UNKNOWN = "UNKNOWN"
    NOT_SYNCED = "NOT_SYNCED"
    INVALID_SECRET = "INVALID_SECRET"


class DeviceErrorCode(StrEnum):
    """Recoverable outcomes of device registration."""

    INVALID_DEVICE = "INVALID_DEVICE"
    DEVICE_LIMIT = "DEVICE_LIMIT"


class NoteErrorCode(StrEnum):
    """Recoverable outcomes of note ledger writes."""

    NOTE_TOO_LARGE = "NOTE_TOO_LARGE"
    NOTE_LIMIT = "NOTE_LIMIT"


class FaultCode(StrEnum):
    """Unrecoverable conditions. Never retried, never partially applied."""

    NO_SUCH_IDENTITY = "NO_SUCH_IDENTITY"
    LAST_DEVICE = "LAST_DEVICE"
    LEDGER_DESYNC = "LEDGER_DESYNC"


class SyncState(StrEnum):
    """Derived secret-distribution state of one public key."""

    SEED = "seed"
    SYNCED = "synced"
    UNSYNCED = "unsynced"
    UNKNOWN = "unknown"


UPLOADED = "Uploaded"
