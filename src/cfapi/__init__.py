# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""cfapi - Async client core for the Cloudflare v4 REST API.

This library provides one execution path for every API call: identifiers
are percent-encoded into path templates, filters become query strings, the
standard response envelope is decoded into typed results, and admission,
retry and pagination are handled in one place.

Key Features:
    - Named (shared) and dynamic (caller-owned) client handles
    - Local concurrency limiting with a bounded FIFO queue
    - Retry with exponential backoff and jitter for transient failures
    - Lazy page-by-page iteration with early stop
    - Structured errors carrying every server-reported error in order
    - Typed DNS, Turnstile, Roles and Accounts callers

Quick Start:
    >>> from cfapi import ClientFactory, ClientOptions
    >>>
    >>> factory = ClientFactory()
    >>> factory.register("default", ClientOptions(api_token=token))
    >>> client = factory.create_client("default")
    >>>
    >>> async for record in client.dns.list_all_records(zone_id):
    ...     print(record.name, record.type, record.content)

Main Exports:
    - ClientFactory, ApiClient, ClientOptions: Client creation and config
    - RateLimitingOptions: Admission and retry configuration
    - PageCursor, find_first, collect: Multi-page iteration
    - CloudflareError and subclasses: Error hierarchy

Note: Prometheus metrics require the 'full' extra. Install with:
    pip install cfapi[full]

Version: 1.0.0
"""

__version__ = "1.0.0"

from .client import (
    DEFAULT_API_BASE_URL,
    ApiClient,
    ClientFactory,
    ClientOptions,
)
from .exceptions import (
    ApiResponseError,
    ApplicationError,
    ClientDisposedError,
    CloudflareError,
    ConfigurationError,
    EnvelopeDecodeError,
    InvalidArgumentError,
    RateLimitRejectedError,
    TooManyFailedRequestsError,
    TransientTransportError,
)
from .observability import MetricsCollector, get_metrics_collector
from .pagination import PageCursor, collect, find_first
from .protocols import ClientProtocol
from .ratelimit import RateLimitingOptions
from .types import (
    UNSET,
    ApiError,
    ApiMessage,
    ExtensibleEnum,
    HttpMethod,
    PageInfo,
    PagePaginatedResult,
    QueryFilter,
    RequestDescriptor,
    ResponseEnvelope,
    SortDirection,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "UNSET",
    # Types
    "ApiError",
    "ApiMessage",
    # Client
    "ApiClient",
    "ApiResponseError",
    "ApplicationError",
    "ClientDisposedError",
    "ClientFactory",
    "ClientOptions",
    # Protocols
    "ClientProtocol",
    # Exceptions
    "CloudflareError",
    "ConfigurationError",
    "EnvelopeDecodeError",
    "ExtensibleEnum",
    "HttpMethod",
    "InvalidArgumentError",
    # Observability
    "MetricsCollector",
    # Pagination
    "PageCursor",
    "PageInfo",
    "PagePaginatedResult",
    "QueryFilter",
    "RateLimitRejectedError",
    # Rate limiting
    "RateLimitingOptions",
    "RequestDescriptor",
    "ResponseEnvelope",
    "SortDirection",
    "TooManyFailedRequestsError",
    "TransientTransportError",
    "collect",
    "find_first",
    "get_metrics_collector",
]
