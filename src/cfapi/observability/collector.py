# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Metrics collector with an optional Prometheus mirror.

Counters, gauges and histogram observations are always kept in plain dicts
so they can be read back with ``snapshot()``. When ``prometheus_client``
is installed each update is also applied to a Prometheus metric registered
on demand.

Usage:
    >>> from cfapi.observability.collector import get_metrics_collector
    >>> collector = get_metrics_collector()
    >>> collector.inc_counter('cfapi_requests_total',
    ...                       labels={'method': 'GET', 'outcome': 'success'})
    >>> collector.counter_value('cfapi_requests_total', method='GET', outcome='success')
    1

Thread Safety:
    All operations are thread-safe. Uses RLock for reentrant locking.
"""

from __future__ import annotations

import logging
import threading
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, ClassVar

from .constants import (
    IN_FLIGHT_REQUESTS,
    LATENCY_BUCKETS,
    PAGES_FETCHED_TOTAL,
    QUEUE_DEPTH,
    REJECTIONS_TOTAL,
    REQUEST_LATENCY_SECONDS,
    REQUESTS_TOTAL,
    RETRIES_TOTAL,
)

logger = logging.getLogger(__name__)

try:
    from prometheus_client import REGISTRY, Counter, Gauge, Histogram

    PROMETHEUS_AVAILABLE = True
except ImportError:
    REGISTRY = None
    Counter = None  # type: ignore[assignment,misc]
    Gauge = None  # type: ignore[assignment,misc]
    Histogram = None  # type: ignore[assignment,misc]
    PROMETHEUS_AVAILABLE = False


@dataclass(frozen=True)
class MetricDefinition:
    """Schema of one metric: type, description, labels and buckets."""

    name: str
    metric_type: str  # 'counter', 'gauge', 'histogram'
    description: str
    label_names: tuple[str, ...] = ()
    buckets: tuple[float, ...] | None = None


METRIC_DEFINITIONS: dict[str, MetricDefinition] = {
    REQUESTS_TOTAL: MetricDefinition(
        REQUESTS_TOTAL,
        "counter",
        "Total API calls by final outcome",
        ("method", "outcome"),
    ),
    RETRIES_TOTAL: MetricDefinition(
        RETRIES_TOTAL,
        "counter",
        "Total retries after transient failures",
        ("method",),
    ),
    REJECTIONS_TOTAL: MetricDefinition(
        REJECTIONS_TOTAL,
        "counter",
        "Total calls rejected by local admission",
        ("reason",),
    ),
    PAGES_FETCHED_TOTAL: MetricDefinition(
        PAGES_FETCHED_TOTAL,
        "counter",
        "Total pages fetched by pagination cursors",
        (),
    ),
    IN_FLIGHT_REQUESTS: MetricDefinition(
        IN_FLIGHT_REQUESTS,
        "gauge",
        "Permits currently held",
        ("client",),
    ),
    QUEUE_DEPTH: MetricDefinition(
        QUEUE_DEPTH,
        "gauge",
        "Callers waiting for a permit",
        ("client",),
    ),
    REQUEST_LATENCY_SECONDS: MetricDefinition(
        REQUEST_LATENCY_SECONDS,
        "histogram",
        "Latency of a single request attempt",
        ("method",),
        buckets=tuple(LATENCY_BUCKETS),
    ),
}


class MetricsCollector:
    """
    Thread-safe metrics store mirrored to Prometheus when available.

    Cardinality Protection:
        At most MAX_LABEL_COMBINATIONS unique label combinations are kept
        per metric; further combinations are dropped with a warning.

    Example:
        >>> collector = MetricsCollector(enable_prometheus=False)
        >>> collector.inc_counter('cfapi_retries_total', labels={'method': 'GET'})
        >>> collector.snapshot()["counters"]
        {'cfapi_retries_total': {'method=GET': 1}}
    """

    MAX_LABEL_COMBINATIONS: ClassVar[int] = 1000
    MAX_OBSERVATIONS: ClassVar[int] = 10000

    def __init__(
        self,
        enable_prometheus: bool = True,
        registry: Any | None = None,
    ) -> None:
        """
        Initialize the metrics collector.

        Args:
            enable_prometheus: Whether to mirror metrics to Prometheus (if installed)
            registry: Optional Prometheus CollectorRegistry, mainly for tests
        """
        self._enable_prometheus = enable_prometheus and PROMETHEUS_AVAILABLE
        self._registry = registry if registry is not None else REGISTRY

        self._counters: dict[str, dict[str, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        self._gauges: dict[str, dict[str, float]] = defaultdict(
            lambda: defaultdict(float)
        )
        self._histograms: dict[str, dict[str, list[float]]] = defaultdict(
            lambda: defaultdict(list)
        )
        self._label_combinations: dict[str, set[str]] = defaultdict(set)
        self._prom_metrics: dict[str, Any] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _labels_to_key(labels: dict[str, str] | None) -> str:
        if not labels:
            return ""
        return ",".join(f"{k}={v}" for k, v in sorted(labels.items()))

    def _check_cardinality(self, name: str, label_key: str) -> bool:
        known = self._label_combinations[name]
        if label_key in known:
            return True
        if len(known) >= self.MAX_LABEL_COMBINATIONS:
            logger.warning(
                f"Cardinality limit ({self.MAX_LABEL_COMBINATIONS}) reached "
                f"for metric {name}. Dropping label combination: {label_key}"
            )
            return False
        known.add(label_key)
        return True

    def _prom_metric(self, name: str, metric_type: str) -> Any | None:
        """Get or lazily register the Prometheus metric for ``name``."""
        if not self._enable_prometheus:
            return None

        with self._lock:
            if name in self._prom_metrics:
                return self._prom_metrics[name]

            defn = METRIC_DEFINITIONS.get(name) or MetricDefinition(
                name, metric_type, f"Dynamic {metric_type}: {name}"
            )
            kwargs: dict[str, Any] = {"registry": self._registry}
            if metric_type == "counter":
                factory: Any = Counter
            elif metric_type == "gauge":
                factory = Gauge
            else:
                factory = Histogram
                kwargs["buckets"] = defn.buckets or tuple(LATENCY_BUCKETS)

            try:
                metric = factory(name, defn.description, list(defn.label_names), **kwargs)
            except ValueError as e:
                # Already registered in this registry by another collector
                logger.warning(f"Failed to create Prometheus {metric_type} {name}: {e}")
                metric = None
            self._prom_metrics[name] = metric
            return metric

    def _mirror(
        self,
        name: str,
        metric_type: str,
        operation: str,
        value: float,
        labels: dict[str, str] | None,
    ) -> None:
        metric = self._prom_metric(name, metric_type)
        if metric is None:
            return
        try:
            target = metric.labels(**labels) if labels else metric
            getattr(target, operation)(value)
        except ValueError as e:
            logger.debug(f"Prometheus {operation} failed for {name}: {e}")

    # === Counter Operations ===

    def inc_counter(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None:
        """
        Increment a counter metric.

        Raises:
            ValueError: If value is negative
        """
        if value < 0:
            raise ValueError("Counter increment must be non-negative")

        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._counters[name][label_key] += value

        self._mirror(name, "counter", "inc", value, labels)

    # === Gauge Operations ===

    def set_gauge(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Set a gauge metric to a specific value."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            self._gauges[name][label_key] = value

        self._mirror(name, "gauge", "set", value, labels)

    # === Histogram Operations ===

    def observe_histogram(
        self,
        name: str,
        value: float,
        labels: dict[str, str] | None = None,
    ) -> None:
        """Record an observation in a histogram."""
        label_key = self._labels_to_key(labels)
        with self._lock:
            if not self._check_cardinality(name, label_key):
                return
            observations = self._histograms[name][label_key]
            observations.append(value)
            if len(observations) > self.MAX_OBSERVATIONS:
                del observations[: len(observations) - self.MAX_OBSERVATIONS // 2]

        self._mirror(name, "histogram", "observe", value, labels)

    # === Reads ===

    def counter_value(self, name: str, **labels: str) -> int:
        """Current value of one counter series (0 if never incremented)."""
        with self._lock:
            return self._counters.get(name, {}).get(self._labels_to_key(labels), 0)

    def gauge_value(self, name: str, **labels: str) -> float:
        """Current value of one gauge series (0.0 if never set)."""
        with self._lock:
            return self._gauges.get(name, {}).get(self._labels_to_key(labels), 0.0)

    def snapshot(self) -> dict[str, Any]:
        """
        Get a JSON-serializable snapshot of all metrics.

        Structure::

            {
                "counters": {"metric_name": {"label_key": value, ...}, ...},
                "gauges": {"metric_name": {"label_key": value, ...}, ...},
                "histograms": {"metric_name": {"label_key": {...}, ...}, ...}
            }
        """
        with self._lock:
            counters = {name: dict(series) for name, series in self._counters.items()}
            gauges = {name: dict(series) for name, series in self._gauges.items()}
            histograms: dict[str, dict[str, dict[str, Any]]] = {}
            for name, series in self._histograms.items():
                histograms[name] = {
                    label_key: {
                        "count": len(observations),
                        "sum": sum(observations),
                        "min": min(observations),
                        "max": max(observations),
                    }
                    for label_key, observations in series.items()
                    if observations
                }

        return {"counters": counters, "gauges": gauges, "histograms": histograms}

    def reset(self) -> None:
        """Reset all dict-based metrics to zero."""
        with self._lock:
            self._counters.clear()
            self._gauges.clear()
            self._histograms.clear()
            self._label_combinations.clear()

    @property
    def prometheus_enabled(self) -> bool:
        """Check if Prometheus mirroring is enabled."""
        return self._enable_prometheus


# =============================================================================
# Process-wide default
# =============================================================================

_global_collector: MetricsCollector | None = None
_collector_lock = threading.Lock()


def get_metrics_collector(enable_prometheus: bool = True) -> MetricsCollector:
    """
    Get or create the process-wide metrics collector.

    Args:
        enable_prometheus: Whether to enable Prometheus metrics
            (only used on first call)
    """
    global _global_collector

    if _global_collector is None:
        with _collector_lock:
            if _global_collector is None:
                _global_collector = MetricsCollector(
                    enable_prometheus=enable_prometheus
                )
    return _global_collector


def reset_metrics_collector() -> None:
    """Drop the process-wide collector (mainly for testing)."""
    global _global_collector
    with _collector_lock:
        if _global_collector:
            _global_collector.reset()
        _global_collector = None


__all__ = [
    "METRIC_DEFINITIONS",
    "PROMETHEUS_AVAILABLE",
    "MetricDefinition",
    "MetricsCollector",
    "get_metrics_collector",
    "reset_metrics_collector",
]
