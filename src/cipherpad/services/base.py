"""BaseService — abstract foundation for all cipherpad services.

Every service receives a :class:`Store` at construction time and owns
its transaction boundaries via ``self._store.transaction()``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from cipherpad.infrastructure.store import Store


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class RegistryService(BaseService):
            def is_seed(self, identity: str) -> ServiceResult:
                with self._store.transaction() as txn:
                    ...
    """

    def __init__(self, store: Store) -> None:
        self._store = store
