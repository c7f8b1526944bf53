# src/pc_cache/domain/repository.py
"""Cache store Protocol — dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the file-backed implementation.
"""

from typing import Protocol

from src.pc_cache.application.schemas import CacheEntry


class PoolCacheStoreProtocol(Protocol):
    def ensure_root(self) -> None: ...

    def load(self, address: str) -> CacheEntry | None: ...

    def save(
        self,
        address: str,
        entry: CacheEntry,
        *,
        refresh_ttl: bool = True,
    ) -> int: ...
