"""cipherpad — device registry and secret synchronization for encrypted notes."""

__version__ = "0.1.0"
