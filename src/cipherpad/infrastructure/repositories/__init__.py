"""Row-level repositories bound to an open transaction connection."""

from cipherpad.infrastructure.repositories.ledger import NoteLedger
from cipherpad.infrastructure.repositories.registry import DeviceRepository, SecretRepository

__all__ = ["DeviceRepository", "NoteLedger", "SecretRepository"]
