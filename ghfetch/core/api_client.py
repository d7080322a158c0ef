"""API Client: the public entry point for fetching resources.

Exposes `request` for single lookups and `request_paged` for pagination
walks. Resolves the configured cache mode on first use and keeps it for the
life of the client.
"""

import logging
from typing import Any, Optional

# Core Imports
from ghfetch.core.cache_policy import resolve_cache_mode, should_use_cache
from ghfetch.core.json_decoder import decode
from ghfetch.core.services.pagination_service import PaginatedFetcher
from ghfetch.core.transport import Transport

# Domain Layer Imports
from ghfetch.domain.interfaces.config import ConfigurationProvider
from ghfetch.domain.models.common import CacheMode, RequestKind, Url, UNBOUNDED_PAGES

logger = logging.getLogger(__name__)

class ApiClient:
    """Rate-limited, cache-aware client for a page-oriented JSON API."""

    def __init__(self, transport: Transport, config: ConfigurationProvider):
        """Initializes the ApiClient.

        Args:
            transport: Transport used for every fetch.
            config: Provider of 'mirror.cache_mode'.
        """
        self.transport = transport
        self.config = config
        self._cache_mode: Optional[CacheMode] = None
        self.paginator = PaginatedFetcher(transport, cache_mode=self.cache_mode)

    def cache_mode(self) -> CacheMode:
        """Returns the cache mode, resolving it from configuration on first use.

        Raises:
            ConfigError: If the configured mode is not 'dev' or 'prod'.
        """
        if self._cache_mode is None:
            self._cache_mode = resolve_cache_mode(self.config.get('mirror.cache_mode'))
            logger.info(f"Cache mode resolved to: {self._cache_mode.value}")
        return self._cache_mode

    def request(self, url: str, cache: bool = False) -> Any:
        """Fetches a single, non-paginated resource.

        Args:
            url: Absolute URL of the resource.
            cache: Whether the caller wants the cache consulted.

        Returns:
            The decoded JSON value, or an empty list for a soft failure.

        Raises:
            TransportFailure: On an unexpected status or network failure.
            ResponseDecodeError: If the body is not valid JSON.
        """
        use_cache = should_use_cache(self.cache_mode(), cache, RequestKind.NON_PAGED)
        result = self.transport.fetch_raw(Url(url), use_cache)
        result.raise_for_failure()
        return decode(result.response)

    def request_paged(self, url: str, pages: int = UNBOUNDED_PAGES, cache: bool = True) -> Any:
        """Fetches a paginated resource, following `next` links.

        Args:
            url: URL of the first page.
            pages: Maximum number of pages to visit, -1 for all of them.
            cache: Whether the caller wants the cache consulted.

        Returns:
            The merged decoded pages (see PaginatedFetcher.fetch_pages).
        """
        return self.paginator.fetch_pages(Url(url), pages, cache)

    def close(self) -> None:
        self.transport.fetcher.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
