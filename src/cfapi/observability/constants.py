# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metric name constants following Prometheus naming conventions.

All metric names use the ``cfapi_`` prefix.

Naming Conventions:
    - Counter metrics end with `_total`
    - Histogram metrics for time end with `_seconds`
    - Gauges use present-tense descriptive names

Label Best Practices:
    Labels are limited to bounded, categorical values:
    - `method` - HTTP method (GET, POST, ...)
    - `outcome` - success, application_error, transient_error, rejected, cancelled
    - `reason` - Local rejection reason (queue_full, too_many_failures)

    Identifiers such as zone ids, record ids or account ids are never used
    as labels.

Usage:
    >>> from cfapi.observability.constants import REQUESTS_TOTAL
    >>> print(REQUESTS_TOTAL)
    'cfapi_requests_total'
"""


# =============================================================================
# Global Prefix
# =============================================================================

METRIC_PREFIX = "cfapi"
"""Prefix for all Prometheus metrics in this library."""


# =============================================================================
# Request Metrics (ratelimit/executor.py)
# =============================================================================

REQUESTS_TOTAL = f"{METRIC_PREFIX}_requests_total"
"""Total API calls by method and final outcome."""

RETRIES_TOTAL = f"{METRIC_PREFIX}_retries_total"
"""Total retry attempts after a transient failure."""

REJECTIONS_TOTAL = f"{METRIC_PREFIX}_rejections_total"
"""Total calls rejected locally before reaching the network."""

REQUEST_LATENCY_SECONDS = f"{METRIC_PREFIX}_request_latency_seconds"
"""Latency of a single attempt (histogram)."""


# =============================================================================
# Pagination Metrics (pagination/cursor.py)
# =============================================================================

PAGES_FETCHED_TOTAL = f"{METRIC_PREFIX}_pages_fetched_total"
"""Total pages fetched by pagination cursors."""


# =============================================================================
# Active State Gauges (ratelimit/limiter.py)
# =============================================================================

IN_FLIGHT_REQUESTS = f"{METRIC_PREFIX}_in_flight_requests"
"""Number of permits currently held."""

QUEUE_DEPTH = f"{METRIC_PREFIX}_queue_depth"
"""Number of callers waiting for a permit."""


# =============================================================================
# Label Values
# =============================================================================

OUTCOME_SUCCESS = "success"
OUTCOME_APPLICATION_ERROR = "application_error"
OUTCOME_TRANSIENT_ERROR = "transient_error"
OUTCOME_REJECTED = "rejected"
OUTCOME_CANCELLED = "cancelled"

REASON_QUEUE_FULL = "queue_full"
REASON_TOO_MANY_FAILURES = "too_many_failures"


# =============================================================================
# Histogram Buckets
# =============================================================================

LATENCY_BUCKETS: list[float] = [
    0.005,
    0.01,
    0.025,
    0.05,
    0.1,
    0.25,
    0.5,
    1.0,
    2.5,
    5.0,
    10.0,
    30.0,
]
"""Default latency buckets for request duration histograms (in seconds)."""


__all__ = [
    "IN_FLIGHT_REQUESTS",
    "LATENCY_BUCKETS",
    "METRIC_PREFIX",
    "OUTCOME_APPLICATION_ERROR",
    "OUTCOME_CANCELLED",
    "OUTCOME_REJECTED",
    "OUTCOME_SUCCESS",
    "OUTCOME_TRANSIENT_ERROR",
    "PAGES_FETCHED_TOTAL",
    "QUEUE_DEPTH",
    "REASON_QUEUE_FULL",
    "REASON_TOO_MANY_FAILURES",
    "REJECTIONS_TOTAL",
    "REQUESTS_TOTAL",
    "REQUEST_LATENCY_SECONDS",
    "RETRIES_TOTAL",
]
