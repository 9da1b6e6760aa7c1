"""Tests for InitService — data root bootstrap."""

from __future__ import annotations

import tomllib
from pathlib import Path

from cipherpad.config.settings import CipherpadSettings
from cipherpad.infrastructure.store import Store
from cipherpad.services.init import InitService
from cipherpad.services.upgrade import UpgradeService


class TestInitStore:
    def test_creates_config_and_db(self, tmp_path: Path) -> None:
        result = InitService.init_store(tmp_path)
        assert result.ok
        assert result.op == "init_store"
        assert (tmp_path / "cipherpad.toml").is_file()
        assert (tmp_path / ".cipherpad" / "cipherpad.db").is_file()
        assert result.data["revision"] == "001_baseline"

    def test_config_round_trips(self, tmp_path: Path) -> None:
        InitService.init_store(tmp_path, max_devices=3)
        raw = tomllib.loads((tmp_path / "cipherpad.toml").read_text(encoding="utf-8"))
        assert raw["registry"]["max_devices_per_identity"] == 3

        settings = CipherpadSettings.from_cli(config_path=str(tmp_path / "cipherpad.toml"))
        assert settings.registry.max_devices_per_identity == 3
        assert settings.data_root == tmp_path

    def test_database_is_at_head(self, tmp_path: Path) -> None:
        InitService.init_store(tmp_path)
        store = Store(CipherpadSettings.from_cli(data_root=tmp_path))
        try:
            assert UpgradeService(store).check_pending().data["pending_count"] == 0
        finally:
            store.close()

    def test_refuses_existing_config(self, tmp_path: Path) -> None:
        InitService.init_store(tmp_path)
        result = InitService.init_store(tmp_path)
        assert not result.ok
        assert result.error.code == "ALREADY_INITIALIZED"
