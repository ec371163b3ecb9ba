# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Observability for the cfapi client runtime.

Metrics are kept by a ``MetricsCollector`` and mirrored to Prometheus when
``prometheus_client`` is installed (``pip install cfapi[full]``).
"""

from .collector import (
    METRIC_DEFINITIONS,
    PROMETHEUS_AVAILABLE,
    MetricDefinition,
    MetricsCollector,
    get_metrics_collector,
    reset_metrics_collector,
)
from .constants import (
    IN_FLIGHT_REQUESTS,
    METRIC_PREFIX,
    PAGES_FETCHED_TOTAL,
    QUEUE_DEPTH,
    REJECTIONS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUESTS_TOTAL,
    RETRIES_TOTAL,
)

__all__ = [
    "IN_FLIGHT_REQUESTS",
    "METRIC_DEFINITIONS",
    "METRIC_PREFIX",
    "PAGES_FETCHED_TOTAL",
    "PROMETHEUS_AVAILABLE",
    "QUEUE_DEPTH",
    "REJECTIONS_TOTAL",
    "REQUESTS_TOTAL",
    "REQUEST_LATENCY_SECONDS",
    "RETRIES_TOTAL",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
