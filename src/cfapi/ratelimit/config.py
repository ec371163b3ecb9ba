# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Rate limiting and retry configuration.

One ``RateLimitingOptions`` instance governs one client: how many requests
may be in flight, how many callers may wait for a permit, how transient
failures are retried, and how early admission slows when the server
reports a low quota.
"""

from dataclasses import dataclass

from ..exceptions import ConfigurationError

BACKOFF_JITTER_FACTOR = 0.1
"""Default jitter as a fraction of the computed backoff delay."""


@dataclass
class RateLimitingOptions:
    """
    Configuration for request admission and retry.

    Example:
        >>> RateLimitingOptions(permit_limit=4, queue_limit=0, max_retries=0)
    """

    # === Admission ===

    enabled: bool = True
    """Enable concurrency admission. Retry still applies when disabled."""

    permit_limit: int = 10
    """Maximum number of requests in flight at once."""

    queue_limit: int = 100
    """Maximum number of callers waiting for a permit (FIFO)."""

    # === Retry ===

    max_retries: int = 2
    """Retry attempts after the first attempt. 0 disables retry."""

    base_delay: float = 1.0
    """Delay before the first retry, in seconds."""

    backoff_base: float = 2.0
    """Base for exponential backoff calculation."""

    max_backoff: float = 60.0
    """Maximum backoff time in seconds. Also caps server Retry-After hints."""

    jitter_factor: float = BACKOFF_JITTER_FACTOR
    """Uniform jitter added to each delay, as a fraction of the delay."""

    retry_non_idempotent: bool = False
    """Also retry POST and PATCH requests."""

    # === Failure Handling ===

    max_failures: int = 20
    """Transient failures within the window before new calls are rejected."""

    failure_window: float = 30.0
    """Time window for failure counting in seconds."""

    # === Proactive Throttling ===

    enable_proactive_throttling: bool = True
    """Slow admission when the server reports the quota is running low."""

    quota_low_threshold: float = 0.1
    """Remaining/limit fraction below which throttling begins (0.1 = 10%)."""

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        failures = self.validate()
        if failures:
            raise ConfigurationError(
                f"Invalid rate limiting options: {'; '.join(failures)}",
                failures=failures,
            )

    def validate(self) -> list[str]:
        """Return every validation failure, empty when the options are valid."""
        failures: list[str] = []
        if self.permit_limit < 1:
            failures.append("permit_limit must be at least 1")
        if self.queue_limit < 0:
            failures.append("queue_limit must not be negative")
        if self.max_retries < 0:
            failures.append("max_retries must not be negative")
        if self.base_delay < 0:
            failures.append("base_delay must not be negative")
        if self.backoff_base < 1.0:
            failures.append("backoff_base must be at least 1.0")
        if self.max_backoff < 0:
            failures.append("max_backoff must not be negative")
        if not 0 <= self.jitter_factor <= 1.0:
            failures.append("jitter_factor must be between 0 and 1.0")
        if self.max_failures < 1:
            failures.append("max_failures must be at least 1")
        if self.failure_window <= 0:
            failures.append("failure_window must be positive")
        if not 0 <= self.quota_low_threshold <= 1.0:
            failures.append("quota_low_threshold must be between 0 and 1.0")
        return failures


__all__ = ["BACKOFF_JITTER_FACTOR", "RateLimitingOptions"]
