"""Response value objects shared by the transport, cache and pagination layers.

`CachedResponse` is the single representation of an HTTP response, whether it
was just fetched or reconstructed from the cache store. `FetchResult` carries
either a response or a tagged failure so callers can tell a "valid but empty"
outcome (e.g. 404) from one that must abort the request chain.
"""

import enum
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

from ghfetch.domain.exceptions import TransportFailure
from ghfetch.domain.models.common import Url


@dataclass(frozen=True)
class CachedResponse:
    """Immutable snapshot of one HTTP response."""
    body: bytes
    base_uri: str
    headers: Mapping[str, str] = field(default_factory=dict)
    status_code: int = 200

    def __post_init__(self):
        # Header names are case-insensitive on the wire; store them lower-cased
        normalized: Dict[str, str] = {str(k).lower(): str(v) for k, v in self.headers.items()}
        object.__setattr__(self, "headers", normalized)

    def header(self, name: str) -> Optional[str]:
        """Returns a header value by case-insensitive name, or None."""
        return self.headers.get(name.lower())


class FailureKind(enum.Enum):
    """Tag separating expected negative outcomes from chain-aborting ones."""
    SOFT = "soft"  # defined client outcome, surfaced as "no data"
    HARD = "hard"  # unexpected status or network failure, must propagate


@dataclass(frozen=True)
class FetchFailure:
    """Describes why a fetch produced no response."""
    kind: FailureKind
    url: Url
    message: str
    status_code: Optional[int] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class FetchResult:
    """Outcome of a single logical fetch: a response, or a tagged failure."""
    response: Optional[CachedResponse] = None
    failure: Optional[FetchFailure] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def is_soft_failure(self) -> bool:
        return self.failure is not None and self.failure.kind is FailureKind.SOFT

    @property
    def is_hard_failure(self) -> bool:
        return self.failure is not None and self.failure.kind is FailureKind.HARD

    def raise_for_failure(self) -> None:
        """Raises the underlying error if this result is a hard failure."""
        if self.is_hard_failure:
            if self.failure.error is not None:
                raise self.failure.error
            raise TransportFailure(self.failure.url, self.failure.message)
