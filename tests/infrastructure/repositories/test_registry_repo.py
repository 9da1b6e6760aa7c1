"""Tests for DeviceRepository and SecretRepository."""

from __future__ import annotations

import pytest
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from cipherpad.domain.models import Device, SecretRecord
from cipherpad.infrastructure.repositories import DeviceRepository, SecretRepository

NOW = "2026-01-01T00:00:00+00:00"


class TestDeviceRepository:
    def test_insert_list_count(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = DeviceRepository(conn)
            repo.insert("alice", Device(alias="z", public_key="PK2"), NOW)
            repo.insert("alice", Device(alias="a", public_key="PK1"), NOW)
            repo.insert("bob", Device(alias="a", public_key="PK1"), NOW)

            assert [d.alias for d in repo.list("alice")] == ["a", "z"]
            assert repo.count("alice") == 2
            assert repo.count("carol") == 0
            assert repo.public_keys("alice") == {"PK1", "PK2"}

    def test_get_and_has_public_key(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = DeviceRepository(conn)
            repo.insert("alice", Device(alias="Brave", public_key="PK1"), NOW)
            assert repo.get("alice", "Brave") == Device(alias="Brave", public_key="PK1")
            assert repo.get("alice", "Chrome") is None
            assert repo.has_public_key("alice", "PK1")
            assert not repo.has_public_key("bob", "PK1")

    def test_alias_unique_per_identity(self, db_engine: Engine) -> None:
        with pytest.raises(IntegrityError), db_engine.begin() as conn:
            repo = DeviceRepository(conn)
            repo.insert("alice", Device(alias="Brave", public_key="PK1"), NOW)
            repo.insert("alice", Device(alias="Brave", public_key="PK2"), NOW)

    def test_remove(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = DeviceRepository(conn)
            repo.insert("alice", Device(alias="Brave", public_key="PK1"), NOW)
            assert repo.remove("alice", "Brave") is True
            assert repo.remove("alice", "Brave") is False


class TestSecretRepository:
    def test_upsert_and_get(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = SecretRepository(conn)
            assert repo.is_empty("alice")
            repo.upsert("alice", "PK1", "ENC1", NOW)
            repo.upsert("alice", "PK1", "ENC1-v2", NOW)
            assert repo.get("alice", "PK1") == SecretRecord(public_key="PK1", ciphertext="ENC1-v2")
            assert not repo.is_empty("alice")
            assert repo.is_empty("bob")

    def test_upsert_many(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = SecretRepository(conn)
            count = repo.upsert_many("alice", [("PK1", "E1"), ("PK2", "E2")], NOW)
            assert count == 2
            assert repo.synced_keys("alice") == {"PK1", "PK2"}

    def test_remove(self, db_engine: Engine) -> None:
        with db_engine.begin() as conn:
            repo = SecretRepository(conn)
            repo.upsert("alice", "PK1", "E1", NOW)
            assert repo.remove("alice", "PK1") is True
            assert repo.get("alice", "PK1") is None
            assert repo.remove("alice", "PK1") is False
