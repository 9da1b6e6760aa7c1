"""Tests for the device command group."""

from __future__ import annotations

import json

import pytest
from click.testing import CliRunner

from cipherpad.cli import cli


def _json(cli_runner: CliRunner, *args: str) -> tuple[int, dict]:
    result = cli_runner.invoke(cli, ["--json", "-i", "alice", *args])
    return result.exit_code, json.loads(result.output)


@pytest.mark.usefixtures("_isolated_store")
class TestDeviceCommands:
    def test_register_and_list(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "device", "register", "Brave", "PK1")
        assert code == 0
        assert data["op"] == "register_device"
        assert data["data"]["registered"] is True
        assert data["data"]["first_device"] is True

        code, data = _json(cli_runner, "device", "list")
        assert code == 0
        assert data["data"]["items"] == [{"alias": "Brave", "public_key": "PK1"}]

    def test_duplicate_alias_exit_zero(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        code, data = _json(cli_runner, "device", "register", "Brave", "PK2")
        assert code == 0
        assert data["data"]["registered"] is False
        assert data["warnings"] == ["Alias already registered: Brave"]

    def test_duplicate_alias_warning_on_stderr(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        result = cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK2"])
        assert result.exit_code == 0
        assert "WARNING: Alias already registered: Brave" in result.output

    def test_delete_last_device_is_fatal(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        code, data = _json(cli_runner, "device", "delete", "Brave")
        assert code == 2
        assert data["error"]["code"] == "LAST_DEVICE"
        assert data["error"]["fatal"] is True

        _, listing = _json(cli_runner, "device", "list")
        assert listing["data"]["count"] == 1

    def test_delete_second_device(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Chrome", "PK2"])
        code, data = _json(cli_runner, "device", "delete", "Chrome")
        assert code == 0
        assert data["data"]["remaining"] == 1

    def test_invalid_device_exit_one(self, cli_runner: CliRunner) -> None:
        code, data = _json(cli_runner, "device", "register", "x" * 65, "PK1")
        assert code == 1
        assert data["error"]["code"] == "INVALID_DEVICE"

    def test_quiet_list(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        result = cli_runner.invoke(cli, ["-q", "-i", "alice", "device", "list"])
        assert result.exit_code == 0
        assert result.output.strip() == "Brave\tPK1"

    def test_rich_list(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["-i", "alice", "device", "register", "Brave", "PK1"])
        result = cli_runner.invoke(cli, ["-i", "alice", "device", "list"])
        assert result.exit_code == 0
        assert "get_devices" in result.output
        assert "Brave" in result.output

    def test_identity_from_env(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(
            cli,
            ["--json", "device", "register", "Brave", "PK1"],
            env={"CIPHERPAD_IDENTITY": "bob"},
        )
        assert result.exit_code == 0
        _, data = _json(cli_runner, "device", "list")
        assert data["data"]["count"] == 0

    def test_missing_identity_is_usage_error(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["device", "list"])
        assert result.exit_code == 2
        assert "No identity given" in result.output
