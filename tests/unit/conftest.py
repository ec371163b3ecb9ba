# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for unit tests."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import httpx
import pytest

from cfapi.client.api_client import ApiClient
from cfapi.client.options import ClientOptions
from cfapi.observability.collector import MetricsCollector
from cfapi.ratelimit.config import RateLimitingOptions

Handler = Callable[[httpx.Request], Any]


def _envelope(
    result: Any = None,
    *,
    success: bool = True,
    errors: list[dict[str, Any]] | None = None,
    messages: list[Any] | None = None,
    result_info: dict[str, Any] | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "success": success,
        "errors": errors or [],
        "messages": messages or [],
        "result": result,
    }
    if result_info is not None:
        body["result_info"] = result_info
    return body


@pytest.fixture
def envelope() -> Callable[..., dict[str, Any]]:
    """Build a response envelope dict."""
    return _envelope


@pytest.fixture
def metrics() -> MetricsCollector:
    """A private collector with Prometheus mirroring off."""
    return MetricsCollector(enable_prometheus=False)


@pytest.fixture
def fast_retries() -> RateLimitingOptions:
    """Retry settings with no backoff delay."""
    return RateLimitingOptions(base_delay=0.0, jitter_factor=0.0)


@pytest.fixture
def make_client(
    metrics: MetricsCollector, fast_retries: RateLimitingOptions
) -> Callable[..., ApiClient]:
    """
    Build an ApiClient whose transport is an ``httpx.MockTransport``.

    Use the returned client with ``async with`` so it is closed.
    """

    def _make(handler: Handler, **overrides: Any) -> ApiClient:
        overrides.setdefault("api_token", "test-token")
        overrides.setdefault("rate_limiting", fast_retries)
        overrides.setdefault("total_timeout", None)
        return ApiClient(
            ClientOptions(**overrides),
            "test",
            transport=httpx.MockTransport(handler),
            metrics=metrics,
        )

    return _make
