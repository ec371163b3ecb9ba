# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Path/query encoding and response envelope codec."""

from .envelope import (
    RateLimitInfo,
    classify_response,
    decode_envelope,
    decode_text,
    encode_body,
    is_transient_status,
    parse_envelope,
    parse_rate_limit_headers,
    parse_retry_after,
    to_wire,
)
from .paths import (
    build_path,
    build_query,
    encode_segment,
    format_query_value,
    require_identifier,
    with_page,
)

__all__ = [
    "RateLimitInfo",
    "build_path",
    "build_query",
    "classify_response",
    "decode_envelope",
    "decode_text",
    "encode_body",
    "encode_segment",
    "format_query_value",
    "is_transient_status",
    "parse_envelope",
    "parse_rate_limit_headers",
    "parse_retry_after",
    "require_identifier",
    "to_wire",
    "with_page",
]
