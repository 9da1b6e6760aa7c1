"""Tests for config models — defaults, sparse overrides and bounds."""

from __future__ import annotations

import pydantic
import pytest

from cipherpad.config.models import BackupConfig, CipherpadConfig, RegistryConfig


class TestCipherpadConfig:
    def test_full_defaults(self) -> None:
        cfg = CipherpadConfig()
        assert cfg.registry.max_devices_per_identity == 16
        assert cfg.registry.max_alias_length == 64
        assert cfg.registry.max_public_key_length == 4096
        assert cfg.registry.max_ciphertext_length == 65536
        assert cfg.registry.purge_secret_on_delete is False
        assert cfg.registry.strict_secret_uploads is False
        assert cfg.notes.max_notes_per_identity == 0
        assert cfg.notes.max_note_length == 1_000_000
        assert cfg.backup.max_count == 10

    def test_sparse_override(self) -> None:
        cfg = CipherpadConfig.model_validate(
            {"registry": {"strict_secret_uploads": True}, "notes": {"max_notes_per_identity": 3}}
        )
        assert cfg.registry.strict_secret_uploads is True
        assert cfg.registry.max_devices_per_identity == 16
        assert cfg.notes.max_notes_per_identity == 3
        assert cfg.notes.max_note_length == 1_000_000

    def test_frozen(self) -> None:
        cfg = RegistryConfig()
        with pytest.raises(pydantic.ValidationError):
            cfg.max_alias_length = 1  # type: ignore[misc]


class TestBounds:
    def test_zero_limit_allowed(self) -> None:
        assert RegistryConfig(max_devices_per_identity=0).max_devices_per_identity == 0

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            RegistryConfig(max_alias_length=-1)

    def test_backup_keeps_at_least_one(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            BackupConfig(max_count=0)
