import json
from typing import Any, Dict, List, Optional

import pytest
from unittest.mock import MagicMock

from ghfetch.core.api_client import ApiClient
from ghfetch.core.transport import Transport
from ghfetch.domain.interfaces.config import ConfigurationProvider
from ghfetch.domain.interfaces.http import NetworkFetcher
from ghfetch.domain.models.response import CachedResponse
from ghfetch.infrastructure.cache.caching_service import MemoryCacheStore
from ghfetch.infrastructure.resilience.rate_limiter import RateLimiter


def make_response(url: str, data: Any = None, link: Optional[str] = None, body: Optional[bytes] = None) -> CachedResponse:
    """Builds a 200 response whose body is `data` encoded as JSON."""
    headers = {"Content-Type": "application/json"}
    if link is not None:
        headers["Link"] = link
    if body is None:
        body = json.dumps(data).encode() if data is not None else b""
    return CachedResponse(body=body, base_uri=url, headers=headers, status_code=200)


def link_header(**rels: str) -> str:
    """link_header(next='u2', last='u5') -> '<u2>; rel="next", <u5>; rel="last"'"""
    return ", ".join(f'<{url}>; rel="{rel}"' for rel, url in rels.items())


class FakeClock:
    """Manual clock; sleeping advances it instantly."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps: List[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()

@pytest.fixture
def rate_limiter(clock: FakeClock):
    return RateLimiter(max_requests=5, clock=clock, sleep=clock.sleep)

@pytest.fixture
def cache_store():
    return MemoryCacheStore()

@pytest.fixture
def responses() -> Dict[str, Any]:
    """URL -> CachedResponse or Exception served by `mock_fetcher`."""
    return {}

@pytest.fixture
def mock_fetcher(responses: Dict[str, Any]):
    """A NetworkFetcher mock serving the `responses` fixture."""
    mock = MagicMock(spec=NetworkFetcher)

    def fetch(url):
        outcome = responses[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    mock.fetch.side_effect = fetch
    return mock

@pytest.fixture
def events() -> List[Any]:
    return []

@pytest.fixture
def transport(mock_fetcher: MagicMock, rate_limiter: RateLimiter, cache_store: MemoryCacheStore, events: List[Any]):
    return Transport(
        fetcher=mock_fetcher,
        rate_limiter=rate_limiter,
        cache_store=cache_store,
        event_sink=events.append,
    )

@pytest.fixture
def config_values() -> Dict[str, Any]:
    """Configuration served by `mock_config`; tests may change it before use."""
    return {'mirror.cache_mode': 'dev'}

@pytest.fixture
def mock_config(config_values: Dict[str, Any]):
    mock = MagicMock(spec=ConfigurationProvider)
    mock.get.side_effect = lambda key, default=None: config_values.get(key, default)
    return mock

@pytest.fixture
def api_client(transport: Transport, mock_config: MagicMock):
    return ApiClient(transport=transport, config=mock_config)
