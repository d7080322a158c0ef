"""Single logical fetch with caching, rate limiting and error classification.

A fetch first consults the cache store when asked to. On a miss, or when the
cache is bypassed, it waits for rate limiter permission, performs one live
call through the NetworkFetcher and counts it. HTTP statuses the API uses for
"valid but nothing here" become soft failures; anything else becomes a hard
failure the caller must raise.
"""

import logging
import time
from typing import Callable, FrozenSet, Optional

# Domain Layer Imports
from ghfetch.domain.events.api_events import DomainEvent, RequestCompleted, RequestFailed
from ghfetch.domain.exceptions import HttpStatusError, TransportFailure
from ghfetch.domain.interfaces.cache import CacheStore
from ghfetch.domain.interfaces.http import NetworkFetcher
from ghfetch.domain.models.common import CacheKey, Url
from ghfetch.domain.models.response import CachedResponse, FailureKind, FetchFailure, FetchResult

# Infrastructure Layer Imports
from ghfetch.infrastructure.resilience.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

# Bad request, unauthorized, forbidden, not found, unprocessable entity
SOFT_FAILURE_STATUSES: FrozenSet[int] = frozenset({400, 401, 403, 404, 422})

def log_event(event: DomainEvent) -> None:
    """Default event sink."""
    logger.debug(f"EVENT: {event}")

class Transport:
    """Performs single fetches on behalf of the request orchestration layer."""

    def __init__(
        self,
        fetcher: NetworkFetcher,
        rate_limiter: RateLimiter,
        cache_store: CacheStore,
        event_sink: Callable[[DomainEvent], None] = log_event,
    ):
        """Initializes the Transport.

        Args:
            fetcher: Network primitive performing the live GET.
            rate_limiter: Limiter consulted before every live call.
            cache_store: Store used when a fetch is cache-enabled.
            event_sink: Receives RequestCompleted / RequestFailed events.
        """
        self.fetcher = fetcher
        self.rate_limiter = rate_limiter
        self.cache_store = cache_store
        self.event_sink = event_sink

    @property
    def num_api_calls(self) -> int:
        return self.rate_limiter.call_count

    def fetch_raw(self, url: Url, use_cache: bool = False) -> FetchResult:
        """Fetches a URL, from the cache when allowed, otherwise live.

        Args:
            url: Absolute URL of the resource.
            use_cache: Whether to look up and populate the cache store.

        Returns:
            A FetchResult holding the response, or a soft/hard failure.
        """
        start_time = time.perf_counter()
        from_cache = False

        try:
            cached = self.cache_store.get(CacheKey(url)) if use_cache else None
            if cached is not None:
                from_cache = True
                response = cached
            else:
                response = self._fetch_live(url)
                if use_cache:
                    self.cache_store.put(CacheKey(url), response)
        except TransportFailure as e:
            return self._failed(url, e)

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Request: {url} ({self.num_api_calls} calls,"
            f"{' from cache,' if from_cache else ''} Total: {latency_ms:.0f} ms)"
        )
        self.event_sink(RequestCompleted(
            url=url, num_api_calls=self.num_api_calls, from_cache=from_cache, latency_ms=latency_ms
        ))
        return FetchResult(response=response, from_cache=from_cache)

    def _fetch_live(self, url: Url) -> CachedResponse:
        """Waits for rate limit permission, then performs and counts one live call."""
        self.rate_limiter.throttle()
        try:
            response = self.fetcher.fetch(url)
        except HttpStatusError:
            # The server answered, so the call counts against the budget
            self.rate_limiter.record_call()
            raise
        except BaseException:
            self.rate_limiter.release()
            raise
        self.rate_limiter.record_call()
        return response

    def _failed(self, url: Url, error: TransportFailure) -> FetchResult:
        """Classifies a failed live call as soft or hard."""
        status_code: Optional[int] = getattr(error, "status_code", None)
        if status_code in SOFT_FAILURE_STATUSES:
            reason = getattr(error, "reason", "")
            logger.error(f"{url}: {status_code} {reason}".rstrip())
            failure = FetchFailure(
                kind=FailureKind.SOFT, url=url, message=str(error), status_code=status_code, error=error
            )
        else:
            logger.error(f"Request failed: {error}")
            failure = FetchFailure(
                kind=FailureKind.HARD, url=url, message=str(error), status_code=status_code, error=error
            )
        self.event_sink(RequestFailed(
            url=url, soft=failure.kind is FailureKind.SOFT, error_message=failure.message, status_code=status_code
        ))
        return FetchResult(failure=failure)
