"""Concrete implementations of the CacheStore interface.

`DiskCacheStore` persists responses with `diskcache`, expiring entries after a
configurable stale age. `MemoryCacheStore` keeps them in a dict for the life
of the process.
"""

import logging
import pickle
from pathlib import Path
from typing import Dict, Optional

import diskcache as dc

# Domain Layer Imports
from ghfetch.domain.interfaces.cache import CacheStore
from ghfetch.domain.models.common import CacheKey
from ghfetch.domain.models.response import CachedResponse

logger = logging.getLogger(__name__)

DEFAULT_STALE_AGE_SECONDS = 7 * 24 * 60 * 60 # 7 days

class DiskCacheStore(CacheStore):
    """File-based response cache backed by diskcache."""

    def __init__(self, cache_dir: Path, stale_age: int = DEFAULT_STALE_AGE_SECONDS):
        """Initializes the disk cache.

        Args:
            cache_dir: Directory holding the cache database and files.
            stale_age: Seconds after which an entry is treated as a miss.
        """
        self.cache_dir = Path(cache_dir)
        self.stale_age = stale_age
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache = dc.Cache(str(self.cache_dir), timeout=1)
        logger.info(f"Initialized disk cache at: {self._cache.directory} with stale age: {stale_age}s")

    def get(self, key: CacheKey) -> Optional[CachedResponse]:
        try:
            value = self._cache.get(key, default=None)
        except (pickle.UnpicklingError, EOFError, AttributeError, ImportError) as e:
            logger.warning(f"Failed to read cache entry for {key}: {e}. Removing.")
            self._cache.delete(key)
            return None

        if value is None:
            logger.debug(f"Cache MISS for key: {key}")
            return None
        if not isinstance(value, CachedResponse):
            logger.warning(f"Unexpected cache entry type {type(value).__name__} for {key}. Removing.")
            self._cache.delete(key)
            return None
        logger.debug(f"Cache HIT for key: {key}")
        return value

    def put(self, key: CacheKey, value: CachedResponse) -> None:
        self._cache.set(key, value, expire=self.stale_age)
        logger.debug(f"Cache PUT key: {key} TTL: {self.stale_age}s")

    def delete(self, key: CacheKey) -> None:
        if self._cache.delete(key):
            logger.debug(f"Deleted cache entry: {key}")

    def clear(self) -> None:
        removed = self._cache.clear()
        logger.info(f"Cleared disk cache at {self.cache_dir} ({removed} entries).")

    def close(self) -> None:
        self._cache.close()

    def __len__(self) -> int:
        return len(self._cache)


class MemoryCacheStore(CacheStore):
    """Process-local response cache without expiry."""

    def __init__(self):
        self._entries: Dict[CacheKey, CachedResponse] = {}

    def get(self, key: CacheKey) -> Optional[CachedResponse]:
        return self._entries.get(key)

    def put(self, key: CacheKey, value: CachedResponse) -> None:
        self._entries[key] = value

    def delete(self, key: CacheKey) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
