"""InitService — data directory bootstrap.

Pipeline: CHECK → WRITE CONFIG → CREATE DB → STAMP
"""

from __future__ import annotations

import logging
from pathlib import Path

from cipherpad.config.discovery import CONFIG_FILENAME, load_config
from cipherpad.config.models import RegistryConfig
from cipherpad.services.result import ServiceResult, failure

logger = logging.getLogger(__name__)

_CONFIG_TEMPLATE = """\
# cipherpad configuration
# Limits of 0 mean unbounded.

[registry]
max_devices_per_identity = {max_devices}
purge_secret_on_delete = false
strict_secret_uploads = false

[notes]
max_notes_per_identity = 0

[backup]
max_count = 10
"""


class InitService:
    """Creates ``cipherpad.toml`` and a stamped database in one directory."""

    @staticmethod
    def init_store(path: Path, *, max_devices: int | None = None) -> ServiceResult:
        op = "init_store"
        config_file = path / CONFIG_FILENAME
        if config_file.exists():
            return failure(
                op,
                "ALREADY_INITIALIZED",
                f"{CONFIG_FILENAME} already exists in {path}",
                detail={"path": str(path)},
            )

        if max_devices is None:
            max_devices = RegistryConfig().max_devices_per_identity

        try:
            path.mkdir(parents=True, exist_ok=True)
            config_file.write_text(
                _CONFIG_TEMPLATE.format(max_devices=max_devices), encoding="utf-8"
            )
        except OSError as exc:
            return failure(op, "INIT_FAILED", f"Cannot write {config_file}: {exc}")
        config = load_config(config_file)

        from cipherpad.config.settings import CipherpadSettings
        from cipherpad.infrastructure.store import Store
        from cipherpad.services.upgrade import UpgradeService

        settings = CipherpadSettings.from_cli(config_path=str(config_file), data_root=path)
        store = Store(settings)
        try:
            stamped = UpgradeService(store).stamp_current()
        finally:
            store.close()
        if not stamped.ok:
            return failure(
                op,
                stamped.error.code if stamped.error else "STAMP_FAILED",
                stamped.error.message if stamped.error else "Failed to stamp database",
            )

        logger.info("Initialized cipherpad data root at %s", path)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "data_root": str(path),
                "config": str(config_file),
                "db_path": str(store.db_path),
                "revision": stamped.data["current"],
                "max_devices_per_identity": config.registry.max_devices_per_identity,
            },
        )
