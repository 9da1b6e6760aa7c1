"""Value models for devices, secret records, and encrypted notes.

All models are frozen: a Device is never mutated after registration,
and a note record is replaced rather than edited in place.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class Device(BaseModel):
    """One alias + public key registration under an identity."""

    model_config = {"frozen": True}

    alias: str
    public_key: str


class SecretRecord(BaseModel):
    """The shared secret re-encrypted under one device's public key."""

    model_config = {"frozen": True}

    public_key: str
    ciphertext: str


class EncryptedNote(BaseModel):
    """An opaque note ciphertext and its ledger id."""

    model_config = {"frozen": True}

    id: int = Field(ge=1)
    encrypted_text: str
