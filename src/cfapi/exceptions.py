# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Exception classes for the cfapi client runtime.

This module defines the exception hierarchy used throughout the library.
All exceptions inherit from CloudflareError, making it easy to catch
every error raised by the client with a single except clause.

The concrete kinds tell the caller whether retrying is meaningful:

- InvalidArgumentError / ConfigurationError: fix the input, never retry.
- ApplicationError: the server made a definitive decision, never retried.
- RateLimitRejectedError: the local admission queue is full, retry later.
- TransientTransportError: network fault or throttling, already retried.
- ClientDisposedError: the handle was closed, create a new one.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types.models import ApiError, ApiMessage


class CloudflareError(Exception):
    """Base exception for all cfapi errors.

    Example:
        try:
            record = await client.dns.get_record(zone_id, record_id)
        except CloudflareError as e:
            logger.error(f"Cloudflare call failed: {e}")
    """

    pass


class InvalidArgumentError(CloudflareError, ValueError):
    """Raised when a required input is missing or malformed.

    Always raised before any network I/O takes place.

    Attributes:
        argument: Name of the offending argument, when known.
    """

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument


class ConfigurationError(CloudflareError, ValueError):
    """Raised when client options fail validation.

    Raised at client-creation (or registration) time, never lazily on the
    first request.

    Attributes:
        failures: Every individual validation failure message.
        client_name: Name of the client being configured, when known.

    Example:
        try:
            client = factory.create_dynamic_client(ClientOptions(api_token=""))
        except ConfigurationError as e:
            for failure in e.failures:
                print(failure)
    """

    def __init__(
        self,
        message: str,
        failures: Sequence[str] | None = None,
        client_name: str | None = None,
    ):
        super().__init__(message)
        self.failures: list[str] = list(failures) if failures else [message]
        self.client_name = client_name


class ApplicationError(CloudflareError):
    """Raised when the API answered with a failure the caller must handle.

    Carries the full ordered list of errors from the response envelope,
    never just the first one. Never retried automatically.

    Attributes:
        errors: Ordered ApiError entries from the response.
        messages: Ordered informational messages from the response.
        status_code: HTTP status code of the response, when available.
    """

    def __init__(
        self,
        message: str,
        errors: Sequence[ApiError] | None = None,
        messages: Sequence[ApiMessage] | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.errors: list[ApiError] = list(errors or [])
        self.messages: list[ApiMessage] = list(messages or [])
        self.status_code = status_code

    @property
    def codes(self) -> list[int]:
        """Error codes in response order."""
        return [error.code for error in self.errors]


class ApiResponseError(ApplicationError):
    """Raised when the envelope reports ``success: false``.

    Also raised for non-transient HTTP failures (e.g. 400, 403, 404), with
    the envelope's errors when the body carries any.

    Example:
        try:
            await client.dns.delete_record(zone_id, record_id)
        except ApiResponseError as e:
            if 81044 in e.codes:
                logger.info("Record already gone")
            else:
                raise
    """

    pass


class EnvelopeDecodeError(ApplicationError):
    """Raised when a response body cannot be decoded.

    Covers invalid JSON, a body that is not a response envelope, and a
    result that does not match the expected shape.

    Attributes:
        body: The raw response text.
    """

    def __init__(
        self,
        message: str,
        body: str | None = None,
        status_code: int | None = None,
    ):
        super().__init__(message, status_code=status_code)
        self.body = body


class RateLimitRejectedError(CloudflareError):
    """Raised when the local admission queue cannot accept another caller.

    This is a local backpressure signal, distinct from a server-side 429.
    The core never retries it; the caller may retry later.

    Attributes:
        permit_limit: Configured number of concurrent permits.
        queue_limit: Configured number of queued waiters.

    Example:
        try:
            await client.roles.get_role(account_id, role_id)
        except RateLimitRejectedError:
            # Shed load or retry after a pause
            await asyncio.sleep(1.0)
    """

    def __init__(
        self,
        message: str,
        permit_limit: int | None = None,
        queue_limit: int | None = None,
    ):
        super().__init__(message)
        self.permit_limit = permit_limit
        self.queue_limit = queue_limit


class TooManyFailedRequestsError(RateLimitRejectedError):
    """Raised when too many transient failures occurred within a time window.

    A local short-circuit that stops a client from hammering a failing API.
    New calls are rejected until the failure window elapses.

    Attributes:
        failure_count: The number of failures in the current window.
        window_seconds: The time window in seconds over which failures are tracked.
        threshold: The failure threshold that was reached.
    """

    def __init__(
        self,
        message: str = "Too many failed requests",
        failure_count: int | None = None,
        window_seconds: float | None = None,
        threshold: int | None = None,
    ):
        super().__init__(message)
        self.failure_count = failure_count
        self.window_seconds = window_seconds
        self.threshold = threshold


class TransientTransportError(CloudflareError):
    """Raised for network faults and server throttling / 5xx responses.

    Retried internally per the client's retry policy; once attempts are
    exhausted the last instance is re-raised unchanged. The underlying
    transport exception, if any, is available as ``__cause__``.

    Attributes:
        status_code: HTTP status (408, 429, 5xx), or None for network faults.
        retry_after_seconds: Server-provided Retry-After hint, if any.
        errors: Envelope errors from the response body, if it had any.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        retry_after_seconds: float | None = None,
        errors: Sequence[ApiError] | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.retry_after_seconds = retry_after_seconds
        self.errors: list[ApiError] = list(errors or [])

    @property
    def is_throttled(self) -> bool:
        """True when the server answered 429 Too Many Requests."""
        return self.status_code == 429


class ClientDisposedError(CloudflareError, RuntimeError):
    """Raised when an operation is attempted on a closed client handle.

    Attributes:
        client_name: Name of the closed client.
    """

    def __init__(self, client_name: str):
        super().__init__(f"Client '{client_name}' has been closed")
        self.client_name = client_name


__all__ = [
    "ApiResponseError",
    "ApplicationError",
    "ClientDisposedError",
    "CloudflareError",
    "ConfigurationError",
    "EnvelopeDecodeError",
    "InvalidArgumentError",
    "RateLimitRejectedError",
    "TooManyFailedRequestsError",
    "TransientTransportError",
]
