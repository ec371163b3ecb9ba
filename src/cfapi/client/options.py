# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Client configuration and validation.

Options are plain dataclasses built by the caller; nothing here reads
files or environment variables. Validation collects every failure so a
misconfigured client reports all of its problems at once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from urllib.parse import urlsplit

from ..exceptions import ConfigurationError
from ..ratelimit.config import RateLimitingOptions

DEFAULT_API_BASE_URL = "https://api.cloudflare.com/client/v4/"
"""Base URL of the v4 REST API."""

DEFAULT_USER_AGENT = "cfapi-python"


@dataclass
class ClientOptions:
    """
    Options for one client handle.

    Attributes:
        api_token: Bearer token sent with every request. Required.
        api_base_url: Base URL every path template is resolved against.
        account_id: Default account id, for callers that want one.
        timeout: Per-attempt timeout in seconds.
        total_timeout: Upper bound for a whole call including retries and
            backoff, in seconds. None disables the bound.
        user_agent: ``User-Agent`` header value.
        rate_limiting: Admission and retry settings.

    Example:
        >>> options = ClientOptions(
        ...     api_token="...",
        ...     rate_limiting=RateLimitingOptions(permit_limit=4),
        ... )
    """

    api_token: str = ""
    api_base_url: str = DEFAULT_API_BASE_URL
    account_id: str | None = None
    timeout: float = 30.0
    total_timeout: float | None = 60.0
    user_agent: str = DEFAULT_USER_AGENT
    rate_limiting: RateLimitingOptions = field(default_factory=RateLimitingOptions)

    def __repr__(self) -> str:
        token = "***" if self.api_token else "''"
        return (
            f"ClientOptions(api_token={token}, api_base_url={self.api_base_url!r}, "
            f"account_id={self.account_id!r}, timeout={self.timeout!r}, "
            f"total_timeout={self.total_timeout!r})"
        )


def validate_options(name: str, options: ClientOptions) -> list[str]:
    """
    Collect every validation failure for a client's options.

    Args:
        name: Client name, used in the messages.
        options: The options to check.

    Returns:
        Failure messages; empty when the options are valid.
    """
    failures: list[str] = []

    if not isinstance(options.api_token, str) or not options.api_token.strip():
        failures.append(f"Client '{name}': ApiToken is required.")

    base_url = options.api_base_url
    if not isinstance(base_url, str) or not base_url.strip():
        failures.append(f"Client '{name}': ApiBaseUrl is required.")
    else:
        parts = urlsplit(base_url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            failures.append(
                f"Client '{name}': ApiBaseUrl must be an absolute http(s) URL, "
                f"got '{base_url}'."
            )

    if options.timeout <= 0:
        failures.append(f"Client '{name}': Timeout must be positive.")
    if options.total_timeout is not None and options.total_timeout <= 0:
        failures.append(f"Client '{name}': TotalTimeout must be positive or None.")

    if not isinstance(options.rate_limiting, RateLimitingOptions):
        failures.append(f"Client '{name}': RateLimiting must be RateLimitingOptions.")
    else:
        failures.extend(
            f"Client '{name}': {failure}" for failure in options.rate_limiting.validate()
        )

    return failures


def ensure_valid(name: str, options: ClientOptions) -> None:
    """
    Raise if a client's options are invalid.

    Raises:
        ConfigurationError: Listing every failure, naming the client.
    """
    failures = validate_options(name, options)
    if failures:
        raise ConfigurationError(
            f"Invalid options for client '{name}': {' '.join(failures)}",
            failures=failures,
            client_name=name,
        )


__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_USER_AGENT",
    "ClientOptions",
    "ensure_valid",
    "validate_options",
]
