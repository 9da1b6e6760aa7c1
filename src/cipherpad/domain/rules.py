"""Pure registry rules: input bounds and derived sync state.

Nothing here touches storage. Services load rows, call these functions,
and decide what to write.
"""

from __future__ import annotations

from collections.abc import Iterable, Set
from dataclasses import dataclass, field

from cipherpad.domain.models import Device
from cipherpad.domain.types import SyncState


@dataclass
class ValidationResult:
    """Result of an input bounds check."""

    valid: bool
    errors: list[str] = field(default_factory=list)


def _check_length(errors: list[str], label: str, value: str, limit: int) -> None:
    if limit and len(value) > limit:
        errors.append(f"{label} exceeds {limit} characters")


def validate_device(
    alias: str,
    public_key: str,
    *,
    max_alias_length: int = 0,
    max_public_key_length: int = 0,
) -> ValidationResult:
    """Check alias and public key against the configured bounds.

    A limit of ``0`` disables that bound. Empty strings are accepted:
    both are opaque tokens chosen by the client.
    """
    errors: list[str] = []
    _check_length(errors, "alias", alias, max_alias_length)
    _check_length(errors, "public key", public_key, max_public_key_length)
    return ValidationResult(valid=not errors, errors=errors)


def validate_ciphertexts(
    secrets: Iterable[tuple[str, str]], *, max_ciphertext_length: int = 0
) -> ValidationResult:
    """Check every ``(public_key, ciphertext)`` pair of an upload batch."""
    errors: list[str] = []
    for public_key, ciphertext in secrets:
        _check_length(errors, f"ciphertext for {public_key!r}", ciphertext, max_ciphertext_length)
    return ValidationResult(valid=not errors, errors=errors)


def validate_note_text(encrypted_text: str, *, max_note_length: int = 0) -> ValidationResult:
    """Check a note ciphertext length. Empty notes are allowed."""
    if max_note_length and len(encrypted_text) > max_note_length:
        return ValidationResult(
            valid=False,
            errors=[f"note exceeds {max_note_length} characters"],
        )
    return ValidationResult(valid=True)


def unsynced_public_keys(devices: Iterable[Device], synced: Set[str]) -> list[str]:
    """Registered keys with no secret record, deduplicated, in device order.

    Equals ``{registered keys} - synced`` as a set.
    """
    seen: set[str] = set()
    pending: list[str] = []
    for device in devices:
        key = device.public_key
        if key in synced or key in seen:
            continue
        seen.add(key)
        pending.append(key)
    return pending


def sync_state(public_key: str, registered: Set[str], synced: Set[str]) -> SyncState:
    """Derive the sync state of *public_key* for one identity.

    ``SEED`` wins for registered keys while no secret exists anywhere,
    since the caller must generate the secret rather than wait for it.
    """
    if public_key not in registered:
        return SyncState.UNKNOWN
    if not synced:
        return SyncState.SEED
    if public_key in synced:
        return SyncState.SYNCED
    return SyncState.UNSYNCED
