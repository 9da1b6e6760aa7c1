"""Tests for frozen domain value models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cipherpad.domain.models import Device, EncryptedNote, SecretRecord


class TestDevice:
    def test_frozen(self) -> None:
        device = Device(alias="Brave", public_key="PK1")
        with pytest.raises(ValidationError):
            device.alias = "Chrome"  # type: ignore[misc]


class TestEncryptedNote:
    def test_id_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EncryptedNote(id=0, encrypted_text="x")

    def test_secret_record_equality(self) -> None:
        a = SecretRecord(public_key="PK1", ciphertext="ENC1")
        assert a == SecretRecord(public_key="PK1", ciphertext="ENC1")
