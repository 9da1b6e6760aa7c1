"""Tests for pure registry rules."""

from __future__ import annotations

from cipherpad.domain.models import Device
from cipherpad.domain.rules import (
    sync_state,
    unsynced_public_keys,
    validate_ciphertexts,
    validate_device,
    validate_note_text,
)
from cipherpad.domain.types import SyncState


class TestValidateDevice:
    def test_valid(self) -> None:
        vr = validate_device("Brave", "PK1", max_alias_length=64, max_public_key_length=64)
        assert vr.valid
        assert vr.errors == []

    def test_empty_fields_accepted(self) -> None:
        vr = validate_device("", "", max_alias_length=64, max_public_key_length=64)
        assert vr.valid
        assert vr.errors == []

    def test_limits(self) -> None:
        vr = validate_device("Brave", "PK1", max_alias_length=3)
        assert not vr.valid
        assert "alias exceeds 3 characters" in vr.errors

    def test_zero_limit_is_unbounded(self) -> None:
        assert validate_device("x" * 10_000, "y" * 10_000).valid


class TestValidateCiphertexts:
    def test_each_pair_checked(self) -> None:
        vr = validate_ciphertexts(
            [("PK1", "ok"), ("PK2", ""), ("PK3", "toolong")], max_ciphertext_length=4
        )
        assert not vr.valid
        assert vr.errors == ["ciphertext for 'PK3' exceeds 4 characters"]

    def test_empty_batch_valid(self) -> None:
        assert validate_ciphertexts([]).valid


class TestValidateNoteText:
    def test_empty_allowed(self) -> None:
        assert validate_note_text("").valid

    def test_limit(self) -> None:
        assert validate_note_text("abcd", max_note_length=4).valid
        assert not validate_note_text("abcde", max_note_length=4).valid


class TestUnsyncedPublicKeys:
    def test_set_difference_in_device_order(self) -> None:
        devices = [
            Device(alias="a", public_key="PK3"),
            Device(alias="b", public_key="PK1"),
            Device(alias="c", public_key="PK3"),
            Device(alias="d", public_key="PK2"),
        ]
        assert unsynced_public_keys(devices, {"PK1"}) == ["PK3", "PK2"]

    def test_all_synced(self) -> None:
        devices = [Device(alias="a", public_key="PK1")]
        assert unsynced_public_keys(devices, {"PK1", "PK-stray"}) == []


class TestSyncState:
    def test_unregistered_is_unknown(self) -> None:
        assert sync_state("PK9", {"PK1"}, {"PK9"}) is SyncState.UNKNOWN

    def test_seed_before_any_secret(self) -> None:
        assert sync_state("PK1", {"PK1", "PK2"}, set()) is SyncState.SEED

    def test_synced_and_unsynced(self) -> None:
        assert sync_state("PK1", {"PK1", "PK2"}, {"PK1"}) is SyncState.SYNCED
        assert sync_state("PK2", {"PK1", "PK2"}, {"PK1"}) is SyncState.UNSYNCED
