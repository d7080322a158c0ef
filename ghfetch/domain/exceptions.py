"""Exception hierarchy for ghfetch.

Soft client outcomes (400/401/403/404/422) are never raised; they travel as
`FetchResult` failures. Everything defined here aborts the current request
chain and is left to the caller to handle.
"""

from typing import Optional


class GhFetchError(Exception):
    """Base class for all ghfetch errors."""


class ConfigError(GhFetchError):
    """Raised when configuration is missing or has an unusable value."""


class LinkHeaderError(GhFetchError):
    """Raised when a pagination header segment does not match `<URL>; rel="NAME"`."""

    def __init__(self, segment: str, header: str):
        self.segment = segment
        self.header = header
        super().__init__(f"Malformed Link header segment: {segment!r}")


class ResponseDecodeError(GhFetchError):
    """Raised when a response body is not valid JSON."""

    def __init__(self, url: str, reason: str):
        self.url = url
        super().__init__(f"Could not decode JSON from {url}: {reason}")


# --- Transport Failures ---

class TransportFailure(GhFetchError):
    """A live fetch failed in a way that must abort the request chain."""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"{url}: {message}")


class HttpStatusError(TransportFailure):
    """The server answered with a non-success HTTP status."""

    def __init__(self, url: str, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(url, f"{status_code} {self.reason}".strip())


class NetworkError(TransportFailure):
    """Connection, DNS, TLS or timeout failure before a status was received."""
