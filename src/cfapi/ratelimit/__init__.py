# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Local rate limiting and retry for API calls.

Main Components:
    - RateLimitingOptions: Admission and retry configuration
    - ConcurrencyLimiter: Permit counter with a bounded FIFO wait queue
    - RetryPolicy: Retryability and exponential backoff with jitter
    - FailedRequestCounter: Sliding-window failure tracking
    - QuotaThrottle: Slows admission when the server reports a low quota
    - RequestExecutor: Admit, send and retry one logical call
"""

from .config import BACKOFF_JITTER_FACTOR, RateLimitingOptions
from .executor import RequestExecutor
from .limiter import ConcurrencyLimiter
from .retry import FailedRequestCounter, RetryPolicy
from .throttle import QuotaThrottle

__all__ = [
    "BACKOFF_JITTER_FACTOR",
    "ConcurrencyLimiter",
    "FailedRequestCounter",
    "QuotaThrottle",
    "RateLimitingOptions",
    "RequestExecutor",
    "RetryPolicy",
]
