"""RegistryService — device registration and shared-secret distribution.

One logical identity runs several independently keyed devices. The first
device to register finds the identity in *seed* state, generates the
shared secret itself and publishes its own encrypted copy. Later devices
register, show up as *unsynced*, and wait for an already-synced peer to
encrypt the secret to their public key. The server never sees the secret
in the clear; it only enforces who may read which ciphertext.

Pipeline per call: VALIDATE → APPLY → RESPOND, inside one
``Store.transaction()``. Every fault is detected before the first write,
so a rejected call leaves no trace.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from cipherpad.domain.models import Device
from cipherpad.domain.rules import (
    sync_state,
    unsynced_public_keys,
    validate_ciphertexts,
    validate_device,
)
from cipherpad.domain.types import (
    UPLOADED,
    DeviceErrorCode,
    FaultCode,
    SecretErrorCode,
)
from cipherpad.services._helpers import now_iso, short_key
from cipherpad.services.base import BaseService
from cipherpad.services.contracts import (
    DeleteDeviceData,
    DeviceListData,
    RegisterDeviceData,
    SecretData,
    SecretsUploadData,
    SeedData,
    SeedUploadData,
    SyncStateData,
    UnsyncedKeysData,
    dump_validated,
)
from cipherpad.services.result import ServiceResult, failure
from cipherpad.services.telemetry import traced

logger = logging.getLogger(__name__)


class RegistryService(BaseService):
    """Owns the DeviceSet and SecretRecord maps of every identity."""

    # ------------------------------------------------------------------
    # Devices
    # ------------------------------------------------------------------

    @traced
    def get_devices(self, identity: str) -> ServiceResult:
        """List ``(alias, public_key)`` pairs, ordered by alias."""
        with self._store.transaction() as txn:
            devices = txn.devices.list(identity)

        return ServiceResult(
            ok=True,
            op="get_devices",
            data=dump_validated(
                DeviceListData,
                {"count": len(devices), "items": [d.model_dump() for d in devices]},
            ),
        )

    @traced
    def register_device(self, identity: str, alias: str, public_key: str) -> ServiceResult:
        """Add a device to the identity's DeviceSet.

        ``data.registered`` is False when *alias* is already taken; that is
        a normal outcome and the caller should pick another alias. The very
        first device also creates the identity's note list, atomically.
        """
        op = "register_device"
        config = self._store.settings.registry
        now = now_iso()

        with self._store.transaction() as txn:
            # ── VALIDATE ─────────────────────────────────────────
            if txn.devices.get(identity, alias) is not None:
                return ServiceResult(
                    ok=True,
                    op=op,
                    data=dump_validated(
                        RegisterDeviceData,
                        {
                            "alias": alias,
                            "public_key": public_key,
                            "registered": False,
                            "first_device": False,
                        },
                    ),
                    warnings=[f"Alias already registered: {alias}"],
                )

            vr = validate_device(
                alias,
                public_key,
                max_alias_length=config.max_alias_length,
                max_public_key_length=config.max_public_key_length,
            )
            if not vr.valid:
                return failure(op, DeviceErrorCode.INVALID_DEVICE, "; ".join(vr.errors))

            count = txn.devices.count(identity)
            first_device = count == 0
            if first_device:
                if txn.ledger.has_list(identity):
                    logger.error("Note list exists for identity without devices: %s", identity)
                    return failure(
                        op,
                        FaultCode.LEDGER_DESYNC,
                        "Identity already owns a note list but has no devices",
                        fatal=True,
                    )
            elif config.max_devices_per_identity and count >= config.max_devices_per_identity:
                return failure(
                    op,
                    DeviceErrorCode.DEVICE_LIMIT,
                    f"Identity already has {count} devices "
                    f"(limit {config.max_devices_per_identity})",
                    detail={"count": count, "limit": config.max_devices_per_identity},
                )

            # ── APPLY ────────────────────────────────────────────
            txn.devices.insert(identity, Device(alias=alias, public_key=public_key), now)
            if first_device:
                txn.ledger.create_list(identity, now)
                logger.info("First device registered; identity is in seed state")
            else:
                logger.debug("Device registered: %s (%s)", alias, short_key(public_key))

        # ── RESPOND ──────────────────────────────────────────────
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                RegisterDeviceData,
                {
                    "alias": alias,
                    "public_key": public_key,
                    "registered": True,
                    "first_device": first_device,
                },
            ),
        )

    @traced
    def delete_device(self, identity: str, alias: str) -> ServiceResult:
        """Remove *alias* from the DeviceSet.

        The last device of an identity can never be deleted: the note list
        would be left with no device able to hold its protecting secret.
        The device's secret record stays unless
        ``registry.purge_secret_on_delete`` is set.
        """
        op = "delete_device"
        config = self._store.settings.registry
        warnings: list[str] = []
        purged = False

        with self._store.transaction() as txn:
            count = txn.devices.count(identity)
            if count == 0:
                return failure(
                    op,
                    FaultCode.NO_SUCH_IDENTITY,
                    "No devices are registered for this identity",
                    fatal=True,
                )
            if count == 1:
                return failure(
                    op,
                    FaultCode.LAST_DEVICE,
                    "Cannot delete the last device of an identity",
                    fatal=True,
                    detail={"alias": alias},
                )

            device = txn.devices.get(identity, alias)
            if device is None:
                warnings.append(f"No device registered with alias: {alias}")
            else:
                txn.devices.remove(identity, alias)
                count -= 1
                # Another alias may share the key; only purge once it is unused.
                if config.purge_secret_on_delete and not txn.devices.has_public_key(
                    identity, device.public_key
                ):
                    purged = txn.secrets.remove(identity, device.public_key)
                logger.debug("Device deleted: %s (secret purged: %s)", alias, purged)

        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(
                DeleteDeviceData,
                {
                    "alias": alias,
                    "deleted": device is not None,
                    "purged_secret": purged,
                    "remaining": count,
                },
            ),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Secrets
    # ------------------------------------------------------------------

    @traced
    def is_seed(self, identity: str) -> ServiceResult:
        """True iff no device of *identity* has been given the secret yet."""
        with self._store.transaction() as txn:
            seed = txn.secrets.is_empty(identity)
        return ServiceResult(ok=True, op="is_seed", data=dump_validated(SeedData, {"seed": seed}))

    @traced
    def upload_seed_secret(
        self, identity: str, public_key: str, ciphertext: str
    ) -> ServiceResult:
        """Publish the originating device's own encrypted copy of the secret."""
        op = "upload_seed_secret"
        config = self._store.settings.registry

        with self._store.transaction() as txn:
            if not txn.devices.has_public_key(identity, public_key):
                return failure(
                    op,
                    SecretErrorCode.UNKNOWN,
                    f"Public key is not registered: {short_key(public_key)}",
                    detail={"public_key": public_key},
                )
            vr = validate_ciphertexts(
                [(public_key, ciphertext)], max_ciphertext_length=config.max_ciphertext_length
            )
            if not vr.valid:
                return failure(op, SecretErrorCode.INVALID_SECRET, "; ".join(vr.errors))
            was_seed = txn.secrets.is_empty(identity)
            txn.secrets.upsert(identity, public_key, ciphertext, now_iso())

        if was_seed:
            logger.info("Seed secret uploaded; identity left seed state")
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(SeedUploadData, {"status": UPLOADED, "public_key": public_key}),
        )

    @traced
    def get_unsynced_public_keys(self, identity: str) -> ServiceResult:
        """Registered public keys that have no secret record yet."""
        with self._store.transaction() as txn:
            pending = unsynced_public_keys(
                txn.devices.list(identity), txn.secrets.synced_keys(identity)
            )
        return ServiceResult(
            ok=True,
            op="get_unsynced_public_keys",
            data=dump_validated(UnsyncedKeysData, {"count": len(pending), "items": pending}),
        )

    @traced
    def upload_encrypted_secrets(
        self, identity: str, secrets: Sequence[tuple[str, str]]
    ) -> ServiceResult:
        """Bulk insert or overwrite secret records.

        Target keys are not checked against the DeviceSet unless
        ``registry.strict_secret_uploads`` is set, in which case a batch
        naming any unregistered key is rejected whole.
        """
        op = "upload_encrypted_secrets"
        config = self._store.settings.registry

        vr = validate_ciphertexts(secrets, max_ciphertext_length=config.max_ciphertext_length)
        if not vr.valid:
            return failure(op, SecretErrorCode.INVALID_SECRET, "; ".join(vr.errors))

        public_keys = list(dict.fromkeys(key for key, _ in secrets))
        with self._store.transaction() as txn:
            if config.strict_secret_uploads:
                registered = txn.devices.public_keys(identity)
                unknown = [key for key in public_keys if key not in registered]
                if unknown:
                    return failure(
                        op,
                        SecretErrorCode.UNKNOWN,
                        f"{len(unknown)} public key(s) are not registered",
                        detail={"unknown": unknown},
                    )
            count = txn.secrets.upsert_many(identity, secrets, now_iso())

        logger.debug("Uploaded %d encrypted secret(s)", count)
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(SecretsUploadData, {"count": count, "public_keys": public_keys}),
        )

    @traced
    def get_encrypted_secrets(self, identity: str, public_key: str) -> ServiceResult:
        """Return the secret ciphertext addressed to *public_key*."""
        op = "get_encrypted_secrets"
        with self._store.transaction() as txn:
            if not txn.devices.has_public_key(identity, public_key):
                return failure(
                    op,
                    SecretErrorCode.UNKNOWN,
                    f"Public key is not registered: {short_key(public_key)}",
                    detail={"public_key": public_key},
                )
            record = txn.secrets.get(identity, public_key)

        if record is None:
            return failure(
                op,
                SecretErrorCode.NOT_SYNCED,
                "No secret has been uploaded for this device yet",
                detail={"public_key": public_key},
            )
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(SecretData, record.model_dump()),
        )

    @traced
    def get_sync_state(self, identity: str, public_key: str) -> ServiceResult:
        """Derived state of one key: seed, synced, unsynced, or unknown."""
        with self._store.transaction() as txn:
            state = sync_state(
                public_key,
                txn.devices.public_keys(identity),
                txn.secrets.synced_keys(identity),
            )
        return ServiceResult(
            ok=True,
            op="get_sync_state",
            data=dump_validated(
                SyncStateData, {"public_key": public_key, "state": state.value}
            ),
        )
