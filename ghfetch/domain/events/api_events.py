"""Domain Events related to API requests and rate limiting.

Examples include events for when requests complete, are throttled, or fail.
"""

from dataclasses import dataclass, field
import time
from typing import Optional

# Base Event Class
@dataclass
class DomainEvent:
    """Base class for domain events."""
    pass

# --- Specific API Events ---

@dataclass
class RequestCompleted(DomainEvent):
    """Event triggered when a logical fetch returns a response."""
    url: str
    num_api_calls: int # live calls made in the current rate window
    from_cache: bool
    latency_ms: float
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestThrottled(DomainEvent):
    """Event triggered when the rate limiter blocks to stay within budget."""
    wait_time_seconds: float
    num_api_calls: int
    timestamp: float = field(default_factory=time.time)

@dataclass
class RequestFailed(DomainEvent):
    """Event triggered when a live fetch fails (soft or hard)."""
    url: str
    soft: bool
    error_message: str
    status_code: Optional[int] = None
    timestamp: float = field(default_factory=time.time)
