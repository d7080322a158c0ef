"""Implementation of a rate limiter.

Controls the frequency of live requests so an external budget of `max_requests`
calls per 60-second window is never exceeded. When the budget is spent the
calling thread sleeps out the rest of the window.
"""

import time
import logging
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Optional

from ghfetch.domain.events.api_events import DomainEvent, RequestThrottled

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 80
DEFAULT_TIME_WINDOW_SECONDS = 60


@dataclass
class RateWindow:
    """Accounting state for the current window."""
    window_start: Optional[float] = None
    call_count: int = 0
    in_flight: int = 0 # slots reserved by throttle() and not yet recorded

    def reset(self, now: float) -> None:
        # Reservations outlive the window; their calls are recorded in the new one
        self.window_start = now
        self.call_count = 0


class RateLimiter:
    """Fixed window rate limiter that blocks once the window budget is spent.

    `throttle()` reserves a slot for the caller's next live call and
    `record_call()` (or `release()`) settles it, so concurrent callers can
    never hold more than `max_requests` counted and in-flight calls in one
    window.
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        time_window: int = DEFAULT_TIME_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        event_sink: Optional[Callable[[DomainEvent], None]] = None,
    ):
        """Initializes the rate limiter.

        Args:
            max_requests: Maximum number of live calls allowed in one window.
            time_window: The window length in seconds.
            clock: Time source in seconds.
            sleep: Blocking sleep function.
            event_sink: Optional callable receiving RequestThrottled events.
        """
        if max_requests <= 0 or time_window <= 0:
            raise ValueError("Max requests and time window must be positive.")

        self.max_requests = max_requests
        self.time_window = time_window
        self.window = RateWindow()
        self._clock = clock
        self._sleep = sleep
        self._event_sink = event_sink
        self._lock = Lock() # Guards self.window; never held while sleeping
        logger.info(f"RateLimiter initialized: {max_requests} requests / {time_window} seconds")

    @property
    def call_count(self) -> int:
        return self.window.call_count

    def throttle(self) -> None:
        """Blocks until the budget has room, then reserves a slot for one call.

        Must be called immediately before every live network call, and be
        followed by exactly one `record_call()` (the call was issued) or
        `release()` (it never reached the server). It never increments the
        call count itself.
        """
        while True:
            with self._lock:
                now = self._clock()
                if self.window.window_start is None:
                    self.window.reset(now)
                elif now - self.window.window_start >= self.time_window:
                    logger.debug(f"Rate window elapsed, num_calls = {self.window.call_count}, zeroing")
                    self.window.reset(now)

                if self.window.call_count + self.window.in_flight < self.max_requests:
                    self.window.in_flight += 1
                    return

                wait_time = self.time_window - (now - self.window.window_start)
                num_calls = self.window.call_count
            logger.debug(f"Rate limit reached ({num_calls} calls). Sleeping for {wait_time:.2f} seconds.")
            if self._event_sink:
                self._event_sink(RequestThrottled(wait_time_seconds=wait_time, num_api_calls=num_calls))
            self._sleep(wait_time)

    def record_call(self) -> int:
        """Counts one live call against the current window, settling a reservation.

        Returns:
            The call count after recording.
        """
        with self._lock:
            if self.window.in_flight > 0:
                self.window.in_flight -= 1
            self.window.call_count += 1
            return self.window.call_count

    def release(self) -> None:
        """Gives back a reservation whose call was never issued."""
        with self._lock:
            if self.window.in_flight > 0:
                self.window.in_flight -= 1
