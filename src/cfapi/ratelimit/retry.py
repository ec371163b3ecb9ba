# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Retry policy and failure tracking.

Only ``TransientTransportError`` is ever retried: network faults, request
timeouts (408), throttling (429) and server errors (5xx). By default only
idempotent methods are retried, since a POST or PATCH that timed out may
already have been applied.
"""

from __future__ import annotations

import logging
import random
import time
from collections import deque

from ..exceptions import TransientTransportError
from ..types.request import HttpMethod
from .config import RateLimitingOptions

logger = logging.getLogger(__name__)


class RetryPolicy:
    """
    Decides whether a failed attempt is retried and how long to wait.

    Example:
        >>> policy = RetryPolicy(RateLimitingOptions(jitter_factor=0.0))
        >>> policy.compute_delay(2)
        4.0
    """

    def __init__(self, options: RateLimitingOptions):
        self.options = options

    @property
    def max_retries(self) -> int:
        return self.options.max_retries

    def is_retryable(self, method: HttpMethod, error: BaseException) -> bool:
        """
        Check whether a failed attempt may be retried.

        Args:
            method: HTTP method of the request.
            error: The exception raised by the attempt.
        """
        if not isinstance(error, TransientTransportError):
            return False
        return method.is_idempotent or self.options.retry_non_idempotent

    def compute_delay(
        self, attempt: int, error: TransientTransportError | None = None
    ) -> float:
        """
        Calculate the delay before the next attempt.

        A positive server ``Retry-After`` hint wins, capped at
        ``max_backoff``. Otherwise the delay is exponential with jitter.

        Args:
            attempt: The attempt that just failed (0-based).
            error: The failure, consulted for a Retry-After hint.

        Returns:
            Delay in seconds
        """
        retry_after = error.retry_after_seconds if error is not None else None
        if retry_after is not None and retry_after > 0:
            return float(min(retry_after, self.options.max_backoff))

        # Exponential backoff: base_delay * (backoff_base ^ attempt)
        delay = self.options.base_delay * (self.options.backoff_base**attempt)
        delay = min(delay, self.options.max_backoff)

        jitter = random.uniform(0.0, delay * self.options.jitter_factor)  # nosec B311
        delay += jitter

        logger.debug(f"Calculated backoff for attempt {attempt}: {delay:.2f}s")
        return delay


class FailedRequestCounter:
    """
    Sliding-window count of transient failures.

    Once ``max_failures`` failures fall inside the last ``window_seconds``
    the limit is exceeded until the oldest of them ages out.
    """

    def __init__(self, max_failures: int = 20, window_seconds: float = 30.0):
        self.max_failures = max_failures
        self.window_seconds = window_seconds
        self._failures: deque[float] = deque()

    def _expire(self, now: float) -> None:
        cutoff = now - self.window_seconds
        while self._failures and self._failures[0] <= cutoff:
            self._failures.popleft()

    def increment(self) -> int:
        """Record a failure and return the count within the window."""
        now = time.monotonic()
        self._expire(now)
        self._failures.append(now)
        return len(self._failures)

    @property
    def count(self) -> int:
        """Failures within the current window."""
        self._expire(time.monotonic())
        return len(self._failures)

    def is_limit_exceeded(self) -> bool:
        """Check if failed request limit is exceeded."""
        return self.count >= self.max_failures

    def reset(self) -> None:
        self._failures.clear()


__all__ = ["FailedRequestCounter", "RetryPolicy"]
