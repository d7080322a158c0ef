"""Interface for the network fetch primitive.

Hides the HTTP library behind a single `fetch(url)` call. Implementations
decide at construction how outbound connections are made (e.g. bound to a
specific local address); callers never alter that at runtime.
"""

import abc

from ..models.common import Url
from ..models.response import CachedResponse


class NetworkFetcher(abc.ABC):
    """Abstract Base Class for performing one live HTTP GET."""

    @abc.abstractmethod
    def fetch(self, url: Url) -> CachedResponse:
        """Performs a GET request and returns the full response.

        Args:
            url: Absolute URL to fetch.

        Returns:
            The response for a successful (2xx) status.

        Raises:
            HttpStatusError: If the server answers with a non-success status.
            NetworkError: If no status could be obtained (connection, timeout).
        """
        pass

    @abc.abstractmethod
    def close(self) -> None:
        """Releases pooled connections."""
        pass
