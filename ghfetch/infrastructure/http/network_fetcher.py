"""Concrete implementation of the NetworkFetcher interface using httpx.

Hides the specifics of the HTTP library and translates its responses and
errors into the domain model. When a source address is configured the
client is built on a transport bound to that local address, so every
connection it opens originates from there.
"""

import logging
from typing import Dict, Optional

import httpx

# Domain Layer Imports
from ghfetch.domain.exceptions import HttpStatusError, NetworkError
from ghfetch.domain.interfaces.http import NetworkFetcher
from ghfetch.domain.models.common import Url
from ghfetch.domain.models.response import CachedResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "ghfetch"
ACCEPT_HEADER = "application/vnd.github+json"

class HttpxFetcher(NetworkFetcher):
    """httpx implementation of the NetworkFetcher interface."""

    def __init__(
        self,
        attach_ip: Optional[str] = None,
        token: Optional[str] = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initializes the HTTP client.

        Args:
            attach_ip: Local address to originate connections from (None for the OS default).
            token: Optional API token sent as `Authorization: token <token>`.
            user_agent: Value of the User-Agent header.
            timeout: Timeout in seconds for connect and read.
            transport: Explicit httpx transport; overrides attach_ip when given.
        """
        headers: Dict[str, str] = {
            "Accept": ACCEPT_HEADER,
            "User-Agent": user_agent,
        }
        if token:
            headers["Authorization"] = f"token {token}"

        if transport is None and attach_ip:
            transport = httpx.HTTPTransport(local_address=attach_ip)
            logger.info(f"Outbound connections bound to local address {attach_ip}")

        self.attach_ip = attach_ip
        self.client = httpx.Client(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )
        logger.info(f"HttpxFetcher initialized (timeout={timeout}s, authenticated={bool(token)})")

    def fetch(self, url: Url) -> CachedResponse:
        """Performs a GET request, raising domain errors on failure."""
        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise HttpStatusError(url, e.response.status_code, e.response.reason_phrase) from e
        except httpx.RequestError as e:
            raise NetworkError(url, f"{type(e).__name__}: {e}") from e

        return CachedResponse(
            body=response.content,
            base_uri=str(response.url),
            headers=dict(response.headers),
            status_code=response.status_code,
        )

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "HttpxFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
