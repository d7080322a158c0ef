"""Cache usage policy.

Decides, from the configured cache mode and the kind of request, whether a
fetch should consult and populate the response cache. In production mode
pagination sweeps always go through the cache; single lookups honor the
caller's choice.
"""

from typing import Any

from ghfetch.domain.exceptions import ConfigError
from ghfetch.domain.models.common import CacheMode, RequestKind

def resolve_cache_mode(value: Any) -> CacheMode:
    """Maps a configured mode string to a CacheMode.

    Raises:
        ConfigError: If the value is neither "dev" nor "prod".
    """
    if value == CacheMode.DEV.value:
        return CacheMode.DEV
    if value == CacheMode.PROD.value:
        return CacheMode.PROD
    raise ConfigError(f"Unknown cache mode {value!r}: expected 'dev' or 'prod'")

def should_use_cache(mode: CacheMode, request_wants_cache: bool, kind: RequestKind) -> bool:
    """Returns whether a request of this kind should use the cache."""
    if request_wants_cache:
        return True
    if mode is CacheMode.PROD:
        return kind is RequestKind.PAGED
    return False
