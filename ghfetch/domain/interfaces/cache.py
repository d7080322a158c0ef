"""Interface for response cache stores.

Defines the contract for storing and retrieving previously fetched
responses, keyed by request URL.
"""

import abc
from typing import Optional

# Import relevant domain models
from ..models.common import CacheKey
from ..models.response import CachedResponse

class CacheStore(abc.ABC):
    """Abstract Base Class for response caching operations."""

    @abc.abstractmethod
    def get(self, key: CacheKey) -> Optional[CachedResponse]:
        """Retrieves a cached response.

        Args:
            key: The cache key (request URL) to look up.

        Returns:
            The cached response if found and not expired, otherwise None.
        """
        pass

    @abc.abstractmethod
    def put(self, key: CacheKey, value: CachedResponse) -> None:
        """Stores a response under the given key, replacing any previous entry.

        Args:
            key: The cache key (request URL) to store the response under.
            value: The response to store.
        """
        pass

    @abc.abstractmethod
    def delete(self, key: CacheKey) -> None:
        """Deletes a cached response if present."""
        pass

    @abc.abstractmethod
    def clear(self) -> None:
        """Removes every entry from the store."""
        pass
