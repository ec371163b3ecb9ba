# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Client handles, options and the client factory."""

from .api_client import DYNAMIC_CLIENT_NAME, ApiClient
from .factory import ClientFactory
from .options import (
    DEFAULT_API_BASE_URL,
    DEFAULT_USER_AGENT,
    ClientOptions,
    ensure_valid,
    validate_options,
)

__all__ = [
    "DEFAULT_API_BASE_URL",
    "DEFAULT_USER_AGENT",
    "DYNAMIC_CLIENT_NAME",
    "ApiClient",
    "ClientFactory",
    "ClientOptions",
    "ensure_valid",
    "validate_options",
]
