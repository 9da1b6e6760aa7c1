"""Shared pytest fixtures and test helpers for cipherpad tests."""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from cipherpad.config.settings import CipherpadSettings
from cipherpad.infrastructure.database.engine import init_database
from cipherpad.infrastructure.store import Store


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's CIPHERPAD_* environment out of the tests."""
    for name in ("CIPHERPAD_IDENTITY", "CIPHERPAD_CONFIG", "CIPHERPAD_DATA_ROOT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def db_engine(tmp_path: Path) -> Generator[Engine]:
    """Initialized SQLite engine with all tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    """Temporary data root; ``.cipherpad/`` is created beneath it on first use."""
    return tmp_path


@pytest.fixture
def store(data_root: Path) -> Generator[Store]:
    """Store with default limits on a temp data root."""
    s = Store(CipherpadSettings.from_cli(data_root=data_root))
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_store(data_root: Path) -> Generator[Callable[..., Store]]:
    """Factory for stores with overridden config sections.

    Usage::

        store = make_store(registry=RegistryConfig(strict_secret_uploads=True))
    """
    created: list[Store] = []

    def _make(**sections: Any) -> Store:
        s = Store(CipherpadSettings.from_cli(data_root=data_root, **sections))
        created.append(s)
        return s

    try:
        yield _make
    finally:
        for s in created:
            s.close()


@pytest.fixture
def _isolated_store(data_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp data root so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_store")`` on command test
    classes.
    """
    monkeypatch.chdir(data_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across service test modules)
# ---------------------------------------------------------------------------


def register(store: Store, identity: str, alias: str, public_key: str) -> dict[str, Any]:
    """Register a device via RegistryService, asserting success."""
    from cipherpad.services.registry import RegistryService

    result = RegistryService(store).register_device(identity, alias, public_key)
    assert result.ok, result.error
    return result.data


def seed(store: Store, identity: str, alias: str, public_key: str, ciphertext: str) -> None:
    """Register a first device and upload its seed secret."""
    from cipherpad.services.registry import RegistryService

    register(store, identity, alias, public_key)
    result = RegistryService(store).upload_seed_secret(identity, public_key, ciphertext)
    assert result.ok, result.error


def ledger_matches_devices(store: Store, identity: str) -> bool:
    """True when the identity owns a note list exactly while it has devices."""
    with store.transaction() as txn:
        return txn.ledger.has_list(identity) == (txn.devices.count(identity) > 0)
