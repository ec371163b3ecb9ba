# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Local concurrency admission for one client.

``ConcurrencyLimiter`` bounds the number of requests in flight and queues
excess callers first-in-first-out. When the queue is full a caller is
rejected at once with ``RateLimitRejectedError``. All state changes happen
between suspension points on the event loop, so no caller can observe a
permit count above the limit.

Permit hand-off: a release gives the permit directly to the oldest waiter
instead of returning it to the pool, so a newly arriving caller can never
overtake a queued one.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections import deque
from collections.abc import AsyncIterator

from ..exceptions import RateLimitRejectedError
from ..observability.collector import MetricsCollector
from ..observability.constants import (
    IN_FLIGHT_REQUESTS,
    QUEUE_DEPTH,
    REASON_QUEUE_FULL,
    REJECTIONS_TOTAL,
)

logger = logging.getLogger(__name__)


class ConcurrencyLimiter:
    """
    Permit counter with a bounded FIFO wait queue.

    Example:
        >>> limiter = ConcurrencyLimiter(permit_limit=2, queue_limit=10)
        >>> async with limiter.permit():
        ...     await do_request()
    """

    def __init__(
        self,
        permit_limit: int,
        queue_limit: int,
        enabled: bool = True,
        metrics: MetricsCollector | None = None,
        name: str = "default",
    ):
        """
        Initialize the limiter.

        Args:
            permit_limit: Maximum concurrent permits (>= 1).
            queue_limit: Maximum waiting callers (>= 0).
            enabled: If False, admission is unconditional.
            metrics: Optional collector for gauges and rejection counts.
            name: Client name, used as the ``client`` gauge label.
        """
        if permit_limit < 1:
            raise ValueError("permit_limit must be at least 1")
        if queue_limit < 0:
            raise ValueError("queue_limit must not be negative")

        self._permit_limit = permit_limit
        self._queue_limit = queue_limit
        self._enabled = enabled
        self._metrics = metrics
        self._labels = {"client": name}
        self._in_flight = 0
        self._waiters: deque[asyncio.Future[None]] = deque()

    @property
    def permit_limit(self) -> int:
        return self._permit_limit

    @property
    def queue_limit(self) -> int:
        return self._queue_limit

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def in_flight(self) -> int:
        """Number of permits currently held."""
        return self._in_flight

    @property
    def queue_depth(self) -> int:
        """Number of callers waiting for a permit."""
        return sum(1 for waiter in self._waiters if not waiter.done())

    def _publish(self) -> None:
        if self._metrics is None:
            return
        self._metrics.set_gauge(IN_FLIGHT_REQUESTS, self._in_flight, labels=self._labels)
        self._metrics.set_gauge(QUEUE_DEPTH, self.queue_depth, labels=self._labels)

    async def acquire(self) -> None:
        """
        Wait for a permit.

        Raises:
            RateLimitRejectedError: If all permits are held and the wait
                queue is full.
            asyncio.CancelledError: If cancelled while queued; the queue
                slot is released immediately and no permit is kept.
        """
        if not self._enabled:
            return

        if self._in_flight < self._permit_limit and not self._waiters:
            self._in_flight += 1
            self._publish()
            return

        if self.queue_depth >= self._queue_limit:
            logger.warning(
                f"Rejecting request: {self._in_flight}/{self._permit_limit} permits "
                f"in use and {self.queue_depth}/{self._queue_limit} waiters queued"
            )
            if self._metrics is not None:
                self._metrics.inc_counter(
                    REJECTIONS_TOTAL, labels={"reason": REASON_QUEUE_FULL}
                )
            raise RateLimitRejectedError(
                "Rate limit queue is full",
                permit_limit=self._permit_limit,
                queue_limit=self._queue_limit,
            )

        waiter: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._waiters.append(waiter)
        self._publish()
        logger.debug(f"Request queued for a permit (depth={self.queue_depth})")

        try:
            await waiter
        except asyncio.CancelledError:
            if waiter.done() and not waiter.cancelled():
                # Permit was handed over just before the cancellation landed
                self.release()
            else:
                with contextlib.suppress(ValueError):
                    self._waiters.remove(waiter)
                self._publish()
            raise

    def release(self) -> None:
        """Return a permit, handing it to the oldest live waiter if any."""
        if not self._enabled:
            return

        while self._waiters:
            waiter = self._waiters.popleft()
            if not waiter.done():
                waiter.set_result(None)
                self._publish()
                return

        if self._in_flight <= 0:
            raise RuntimeError("release() called more times than acquire()")
        self._in_flight -= 1
        self._publish()

    @contextlib.asynccontextmanager
    async def permit(self) -> AsyncIterator[None]:
        """Hold one permit for the duration of the block."""
        await self.acquire()
        try:
            yield
        finally:
            self.release()


__all__ = ["ConcurrencyLimiter"]
