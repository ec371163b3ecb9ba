# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Proactive throttling from server-reported quota.

Every response may carry the server's view of the client's quota. When the
remaining share of the limit drops below ``quota_low_threshold``, the
remaining requests are spread over the time left until the window resets:
the next admission waits ``reset / (remaining + 1)`` seconds, capped at
``max_delay``. With nothing left it waits for the whole reset. A response
showing the quota has recovered lifts the delay.
"""

from __future__ import annotations

import logging
import time

from ..encoding.envelope import RateLimitInfo
from .config import RateLimitingOptions

logger = logging.getLogger(__name__)


class QuotaThrottle:
    """
    Tracks the earliest time the next request may be admitted.

    Example:
        >>> throttle = QuotaThrottle(threshold=0.1)
        >>> throttle.observe(RateLimitInfo(remaining=4, limit=100, reset_seconds=10.0))
        >>> throttle.delay()  # about 2.0
    """

    def __init__(
        self,
        threshold: float = 0.1,
        enabled: bool = True,
        max_delay: float = 60.0,
    ):
        """
        Initialize the throttle.

        Args:
            threshold: Remaining/limit fraction below which to slow down.
            enabled: If False, observations are ignored and delay is 0.
            max_delay: Upper bound in seconds for one delay.
        """
        self.threshold = threshold
        self.enabled = enabled
        self.max_delay = max_delay
        self._not_before = 0.0
        self._last: RateLimitInfo | None = None

    @classmethod
    def from_options(cls, options: RateLimitingOptions) -> QuotaThrottle:
        return cls(
            threshold=options.quota_low_threshold,
            enabled=options.enable_proactive_throttling,
            max_delay=options.max_backoff,
        )

    @property
    def last_observed(self) -> RateLimitInfo | None:
        """The most recent quota state seen, if any."""
        return self._last

    def observe(self, info: RateLimitInfo | None) -> None:
        """Update the admission delay from one response's quota state."""
        if not self.enabled or info is None:
            return
        self._last = info

        fraction = info.remaining_fraction
        if fraction is None or fraction >= self.threshold:
            self._not_before = 0.0
            return
        if info.reset_seconds is None:
            logger.debug(
                f"Quota low ({info.remaining}/{info.limit}) but no reset time reported"
            )
            return

        delay = min(self.max_delay, info.reset_seconds / (info.remaining + 1))
        self._not_before = max(self._not_before, time.monotonic() + delay)
        logger.info(
            f"Quota low ({info.remaining}/{info.limit} remaining, reset in "
            f"{info.reset_seconds:.0f}s); delaying next request by {delay:.2f}s"
        )

    def delay(self) -> float:
        """Seconds the next admission should wait, 0.0 if none."""
        if not self.enabled:
            return 0.0
        return max(0.0, self._not_before - time.monotonic())


__all__ = ["QuotaThrottle"]
