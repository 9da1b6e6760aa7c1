"""Typed payload contracts for service boundaries.

These models validate operation payload shapes before they leave the
service layer so key regressions (for example ``items`` vs ``keys``)
fail fast in tests and during development.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel


def dump_validated[T: BaseModel](model_cls: type[T], data: dict[str, Any]) -> dict[str, Any]:
    """Validate *data* against *model_cls* and return a normalized payload dict."""
    model = model_cls.model_validate(data)
    return model.model_dump(mode="python")


class DeviceItem(BaseModel):
    """One registered device."""

    alias: str
    public_key: str


class DeviceListData(BaseModel):
    """Payload contract for ``RegistryService.get_devices``."""

    count: int
    items: list[DeviceItem]


class RegisterDeviceData(BaseModel):
    """Payload contract for ``RegistryService.register_device``."""

    alias: str
    public_key: str
    registered: bool
    first_device: bool


class DeleteDeviceData(BaseModel):
    """Payload contract for ``RegistryService.delete_device``."""

    alias: str
    deleted: bool
    purged_secret: bool
    remaining: int


class SeedData(BaseModel):
    """Payload contract for ``RegistryService.is_seed``."""

    seed: bool


class SeedUploadData(BaseModel):
    """Payload contract for ``RegistryService.upload_seed_secret``."""

    status: Literal["Uploaded"]
    public_key: str


class UnsyncedKeysData(BaseModel):
    """Payload contract for ``RegistryService.get_unsynced_public_keys``."""

    count: int
    items: list[str]


class SecretsUploadData(BaseModel):
    """Payload contract for ``RegistryService.upload_encrypted_secrets``."""

    count: int
    public_keys: list[str]


class SecretData(BaseModel):
    """Payload contract for ``RegistryService.get_encrypted_secrets``."""

    public_key: str
    ciphertext: str


class SyncStateData(BaseModel):
    """Payload contract for ``RegistryService.get_sync_state``."""

    public_key: str
    state: Literal["seed", "synced", "unsynced", "unknown"]


class NoteItem(BaseModel):
    """One encrypted note record."""

    id: int
    encrypted_text: str


class NoteListData(BaseModel):
    """Payload contract for ``NoteService.get_notes``."""

    count: int
    items: list[NoteItem]


class NoteAddData(BaseModel):
    """Payload contract for ``NoteService.add_note``."""

    id: int


class NoteUpdateData(BaseModel):
    """Payload contract for ``NoteService.update_note``."""

    id: int
    updated: bool


class NoteDeleteData(BaseModel):
    """Payload contract for ``NoteService.delete_note``."""

    id: int
    deleted: bool
