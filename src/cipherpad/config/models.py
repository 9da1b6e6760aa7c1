"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, cipherpad.toml only contains
overrides. A numeric limit of ``0`` means "unbounded".
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class RegistryConfig(BaseModel):
    """[registry] section."""

    model_config = {"frozen": True}

    max_devices_per_identity: int = Field(default=16, ge=0)
    max_alias_length: int = Field(default=64, ge=0)
    max_public_key_length: int = Field(default=4096, ge=0)
    max_ciphertext_length: int = Field(default=65536, ge=0)
    # Policy switches; both default to the permissive protocol behaviour.
    purge_secret_on_delete: bool = False
    strict_secret_uploads: bool = False


class NotesConfig(BaseModel):
    """[notes] section."""

    model_config = {"frozen": True}

    max_notes_per_identity: int = Field(default=0, ge=0)
    max_note_length: int = Field(default=1_000_000, ge=0)


class BackupConfig(BaseModel):
    """[backup] section."""

    model_config = {"frozen": True}

    max_count: int = Field(default=10, ge=1)


class CipherpadConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    registry: RegistryConfig = Field(default_factory=RegistryConfig)
    notes: NotesConfig = Field(default_factory=NotesConfig)
    backup: BackupConfig = Field(default_factory=BackupConfig)
