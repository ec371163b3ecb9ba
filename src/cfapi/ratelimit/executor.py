# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request execution with admission, retry and backoff.

The executor runs each attempt inside a permit from the client's
``ConcurrencyLimiter``. While the server reports a low quota, the
``QuotaThrottle`` delay is slept before asking for the permit. When an
attempt fails with a transient error the permit is released, the policy's
backoff delay is slept, and the request is re-admitted through the queue
like any other caller. After the last attempt the final
``TransientTransportError`` is re-raised unchanged.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import TypeVar

from ..exceptions import (
    ApplicationError,
    RateLimitRejectedError,
    TooManyFailedRequestsError,
    TransientTransportError,
)
from ..observability.collector import MetricsCollector, get_metrics_collector
from ..observability.constants import (
    OUTCOME_APPLICATION_ERROR,
    OUTCOME_CANCELLED,
    OUTCOME_REJECTED,
    OUTCOME_SUCCESS,
    OUTCOME_TRANSIENT_ERROR,
    REASON_TOO_MANY_FAILURES,
    REJECTIONS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUESTS_TOTAL,
    RETRIES_TOTAL,
)
from ..types.request import RequestDescriptor
from .limiter import ConcurrencyLimiter
from .retry import FailedRequestCounter, RetryPolicy
from .throttle import QuotaThrottle

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RequestExecutor:
    """
    Runs one logical API call: admit, send, retry on transient failure.

    Attributes:
        limiter: The client's concurrency limiter.
        policy: Retry policy (attempt budget, retryability, backoff).
        failures: Sliding-window failure counter for local short-circuiting.
        total_timeout: Upper bound in seconds for a whole call including
            retries and backoff, or None for no bound.
        throttle: Delays admission while the server reports a low quota.
    """

    def __init__(
        self,
        limiter: ConcurrencyLimiter,
        policy: RetryPolicy,
        failures: FailedRequestCounter | None = None,
        total_timeout: float | None = None,
        metrics: MetricsCollector | None = None,
        throttle: QuotaThrottle | None = None,
    ):
        self.limiter = limiter
        self.policy = policy
        self.failures = failures or FailedRequestCounter(
            max_failures=policy.options.max_failures,
            window_seconds=policy.options.failure_window,
        )
        self.total_timeout = total_timeout
        self.metrics = metrics or get_metrics_collector()
        self.throttle = throttle or QuotaThrottle.from_options(policy.options)

    async def execute(
        self,
        descriptor: RequestDescriptor,
        send: Callable[[], Awaitable[T]],
    ) -> T:
        """
        Execute ``send`` under admission control with retries.

        Args:
            descriptor: The request being executed (method and label).
            send: Performs one attempt and returns its decoded result, or
                raises a ``CloudflareError``.

        Returns:
            The result of the first successful attempt.

        Raises:
            TooManyFailedRequestsError: If too many transient failures
                occurred recently.
            RateLimitRejectedError: If the wait queue is full.
            TransientTransportError: The last transient failure, once the
                retry budget is exhausted or the total timeout expires.
            ApplicationError: Immediately, never retried.
        """
        method = descriptor.method.value

        if self.failures.is_limit_exceeded():
            failure_count = self.failures.count
            logger.warning(
                f"Rejecting {descriptor.label}: {failure_count} transient failures "
                f"in the last {self.failures.window_seconds}s"
            )
            self.metrics.inc_counter(
                REJECTIONS_TOTAL, labels={"reason": REASON_TOO_MANY_FAILURES}
            )
            self._record(method, OUTCOME_REJECTED)
            raise TooManyFailedRequestsError(
                f"Too many failed requests: {failure_count} in "
                f"{self.failures.window_seconds}s",
                failure_count=failure_count,
                window_seconds=self.failures.window_seconds,
                threshold=self.failures.max_failures,
            )

        try:
            if self.total_timeout is None:
                result = await self._execute_with_retry(descriptor, send)
            else:
                result = await self._execute_with_deadline(descriptor, send)
        except asyncio.CancelledError:
            self._record(method, OUTCOME_CANCELLED)
            raise
        except RateLimitRejectedError:
            self._record(method, OUTCOME_REJECTED)
            raise
        except TransientTransportError:
            self._record(method, OUTCOME_TRANSIENT_ERROR)
            raise
        except ApplicationError:
            self._record(method, OUTCOME_APPLICATION_ERROR)
            raise

        self._record(method, OUTCOME_SUCCESS)
        return result

    async def _execute_with_deadline(
        self,
        descriptor: RequestDescriptor,
        send: Callable[[], Awaitable[T]],
    ) -> T:
        assert self.total_timeout is not None
        try:
            return await asyncio.wait_for(
                self._execute_with_retry(descriptor, send), self.total_timeout
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"{descriptor.label} exceeded total timeout of {self.total_timeout}s"
            )
            raise TransientTransportError(
                f"Request exceeded total timeout of {self.total_timeout}s"
            ) from e

    async def _execute_with_retry(
        self,
        descriptor: RequestDescriptor,
        send: Callable[[], Awaitable[T]],
    ) -> T:
        method = descriptor.method
        last_error: TransientTransportError | None = None

        for attempt in range(self.policy.max_retries + 1):
            wait = self.throttle.delay()
            if wait > 0:
                logger.debug(f"Holding {descriptor.label} for {wait:.2f}s: quota low")
                await asyncio.sleep(wait)

            try:
                async with self.limiter.permit():
                    started = time.monotonic()
                    try:
                        return await send()
                    finally:
                        self.metrics.observe_histogram(
                            REQUEST_LATENCY_SECONDS,
                            time.monotonic() - started,
                            labels={"method": method.value},
                        )

            except asyncio.CancelledError:
                raise

            except RateLimitRejectedError as e:
                # Re-admission after a backoff can still find the queue full
                if last_error is not None:
                    raise e from last_error
                raise

            except TransientTransportError as e:
                last_error = e
                self.failures.increment()

                if attempt >= self.policy.max_retries:
                    break
                if not self.policy.is_retryable(method, e):
                    logger.debug(
                        f"{descriptor.label} failed transiently; "
                        f"{method.value} is not retried"
                    )
                    break

                delay = self.policy.compute_delay(attempt, e)
                logger.warning(
                    f"{descriptor.label} failed ({e}); retry "
                    f"{attempt + 1}/{self.policy.max_retries} in {delay:.2f}s"
                )
                self.metrics.inc_counter(RETRIES_TOTAL, labels={"method": method.value})
                if delay > 0:
                    await asyncio.sleep(delay)

        assert last_error is not None
        raise last_error

    def _record(self, method: str, outcome: str) -> None:
        self.metrics.inc_counter(
            REQUESTS_TOTAL, labels={"method": method, "outcome": outcome}
        )


__all__ = ["RequestExecutor"]
