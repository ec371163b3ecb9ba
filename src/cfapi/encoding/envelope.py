# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request body encoding and response envelope decoding.

Encoding drops every field the caller did not supply: ``UNSET`` values on
dataclasses and mappings, and fields outside ``model_fields_set`` on
pydantic models. An explicit ``None`` is kept and sent as JSON ``null``.

Decoding turns a response body into a ``ResponseEnvelope`` and raises a
structured error for anything that is not a usable success:

- ``success: false``: ``ApiResponseError`` carrying every error, in order.
- 408, 429, 5xx: ``TransientTransportError`` (retried by the executor).
- Other non-2xx: ``ApiResponseError`` with the status code.
- Invalid JSON or a result of the wrong shape: ``EnvelopeDecodeError``.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from email.utils import parsedate_to_datetime
from enum import Enum
from functools import lru_cache
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import ApiResponseError, EnvelopeDecodeError, TransientTransportError
from ..types.models import ApiError, ResponseEnvelope
from ..types.unset import is_unset

logger = logging.getLogger(__name__)

MAX_BODY_IN_MESSAGE = 1024
"""Raw body characters quoted in decode error messages."""

TRANSIENT_STATUS_CODES = frozenset({408, 429})
"""Non-5xx statuses that are retried as transient."""

_DROP = object()


# ============================================================================
# Encoding
# ============================================================================


def _prune(value: Any) -> Any:
    """Convert a body value to plain JSON data, dropping unset fields."""
    if is_unset(value):
        return _DROP

    if isinstance(value, BaseModel):
        pruned: dict[str, Any] = {}
        fields_set = value.model_fields_set
        for name, field_info in type(value).model_fields.items():
            if name not in fields_set:
                continue
            item = _prune(getattr(value, name))
            if item is not _DROP:
                pruned[field_info.alias or name] = item
        return pruned

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        pruned = {}
        for dc_field in dataclasses.fields(value):
            item = _prune(getattr(value, dc_field.name))
            if item is not _DROP:
                pruned[dc_field.metadata.get("alias", dc_field.name)] = item
        return pruned

    if isinstance(value, Mapping):
        pruned = {}
        for key, raw in value.items():
            item = _prune(raw)
            if item is not _DROP:
                pruned[str(key)] = item
        return pruned

    if isinstance(value, (list, tuple, set, frozenset)):
        return [item for item in (_prune(v) for v in value) if item is not _DROP]

    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str):
        # ExtensibleEnum subclasses serialize as their plain string
        return str.__str__(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def to_wire(body: Any) -> Any:
    """
    Return the plain JSON data a body serializes to.

    Unset fields are removed recursively. A body that is itself ``UNSET``
    becomes None.
    """
    pruned = _prune(body)
    return None if pruned is _DROP else pruned


def encode_body(body: Any) -> bytes | None:
    """
    Serialize a request body to compact UTF-8 JSON.

    Args:
        body: A dataclass, pydantic model, mapping or list, or None for
            requests without a body.

    Returns:
        The encoded body, or None when there is nothing to send.
    """
    if body is None or is_unset(body):
        return None
    return json.dumps(to_wire(body), separators=(",", ":"), ensure_ascii=False).encode(
        "utf-8"
    )


# ============================================================================
# Decoding
# ============================================================================


@lru_cache(maxsize=256)
def _adapter(result_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(result_type)


def _body_text(payload: str | bytes | bytearray) -> str:
    if isinstance(payload, (bytes, bytearray)):
        return bytes(payload).decode("utf-8", errors="replace")
    return payload


def _truncate(text: str) -> str:
    if len(text) <= MAX_BODY_IN_MESSAGE:
        return text
    return text[:MAX_BODY_IN_MESSAGE] + "..."


def parse_envelope(
    payload: str | bytes | bytearray, status_code: int | None = None
) -> ResponseEnvelope[Any]:
    """
    Parse a body into an untyped envelope without judging ``success``.

    Raises:
        EnvelopeDecodeError: If the body is not JSON or not an envelope.
    """
    text = _body_text(payload)
    try:
        data = json.loads(text)
    except ValueError as e:
        logger.error(f"Response body is not valid JSON (status={status_code})")
        raise EnvelopeDecodeError(
            f"Response body is not valid JSON: {_truncate(text)!r}",
            body=text,
            status_code=status_code,
        ) from e

    if not isinstance(data, dict):
        logger.error(f"Response body is not an envelope object (status={status_code})")
        raise EnvelopeDecodeError(
            f"Response body is not an envelope object: {_truncate(text)!r}",
            body=text,
            status_code=status_code,
        )

    try:
        return ResponseEnvelope[Any].model_validate(data)
    except ValidationError as e:
        logger.error(f"Response envelope failed validation (status={status_code})")
        raise EnvelopeDecodeError(
            f"Response body is not a valid envelope: {e.error_count()} error(s)",
            body=text,
            status_code=status_code,
        ) from e


def decode_envelope(
    payload: str | bytes | bytearray,
    result_type: Any = None,
    *,
    status_code: int | None = None,
    require_result: bool = True,
) -> ResponseEnvelope[Any]:
    """
    Decode a response body into a typed envelope.

    Args:
        payload: Raw response body.
        result_type: Expected shape of ``result`` (a pydantic model, a
            ``list[...]`` of one, or any type pydantic can validate). None
            means the operation has no payload and ``result`` is ignored.
        status_code: HTTP status, attached to raised errors.
        require_result: If False a missing result is accepted as None.

    Returns:
        The envelope with ``result`` validated as ``result_type``.

    Raises:
        ApiResponseError: If the envelope reports ``success: false``.
        EnvelopeDecodeError: If the body or result cannot be decoded.
    """
    envelope = parse_envelope(payload, status_code)

    if not envelope.success:
        summary = envelope.error_summary() or "no error details"
        logger.warning(
            f"API reported failure with {len(envelope.errors)} error(s): {summary}"
        )
        raise ApiResponseError(
            f"API request failed: {summary}",
            errors=envelope.errors,
            messages=envelope.messages,
            status_code=status_code,
        )

    if result_type is None:
        return envelope.model_copy(update={"result": None})

    if envelope.result is None:
        if not require_result:
            return envelope
        logger.error(f"Successful envelope carried no result (status={status_code})")
        raise EnvelopeDecodeError(
            "Successful response carried no result",
            body=_body_text(payload),
            status_code=status_code,
        )

    try:
        typed = _adapter(result_type).validate_python(envelope.result)
    except ValidationError as e:
        logger.error(
            f"Response result does not match {getattr(result_type, '__name__', result_type)}"
        )
        raise EnvelopeDecodeError(
            f"Response result does not match the expected shape: {e.error_count()} error(s)",
            body=_body_text(payload),
            status_code=status_code,
        ) from e
    return envelope.model_copy(update={"result": typed})


def decode_text(payload: str | bytes | bytearray) -> str:
    """Return a raw-text body (e.g. a zone file export) unparsed."""
    return _body_text(payload)


# ============================================================================
# HTTP status classification
# ============================================================================


def parse_retry_after(value: str | None) -> float | None:
    """
    Parse a ``Retry-After`` header as seconds.

    Accepts delta-seconds or an HTTP date. Returns None for a missing or
    unparseable value.
    """
    if not value:
        return None
    value = value.strip()
    try:
        return max(0.0, float(value))
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError):
        return None
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


def is_transient_status(status_code: int) -> bool:
    """True for statuses that are retried: 408, 429 and every 5xx."""
    return status_code in TRANSIENT_STATUS_CODES or 500 <= status_code <= 599


def _envelope_errors(text: str) -> list[ApiError]:
    """Best-effort extraction of envelope errors from a failure body."""
    try:
        data = json.loads(text)
    except ValueError:
        return []
    if not isinstance(data, dict):
        return []
    try:
        return ResponseEnvelope[Any].model_validate(data).errors
    except ValidationError:
        return []


def _header(headers: Mapping[str, str], name: str) -> str | None:
    for key, value in headers.items():
        if key.lower() == name:
            return value
    return None


# ============================================================================
# Rate limit headers
# ============================================================================


@dataclasses.dataclass(frozen=True)
class RateLimitInfo:
    """Quota state reported by a response's rate limit headers."""

    remaining: int
    limit: int | None = None
    reset_seconds: float | None = None  # Until the window resets

    @property
    def remaining_fraction(self) -> float | None:
        """``remaining / limit``, or None when the limit is unknown."""
        if not self.limit:
            return None
        return self.remaining / self.limit


def _structured_params(value: str | None) -> dict[str, str]:
    """Parameters of the first item of a ``RateLimit`` style field."""
    if not value:
        return {}
    params: dict[str, str] = {}
    for part in value.split(",")[0].split(";")[1:]:
        key, _, param = part.partition("=")
        params[key.strip().lower()] = param.strip()
    return params


def _count(name: str, value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return max(0, int(value.strip()))
    except ValueError:
        logger.warning(f"Invalid {name} header: {value}")
        return None


def _seconds(name: str, value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return max(0.0, float(value.strip()))
    except ValueError:
        logger.warning(f"Invalid {name} header: {value}")
        return None


def parse_rate_limit_headers(headers: Mapping[str, str]) -> RateLimitInfo | None:
    """
    Parse the server's quota headers.

    The separate ``RateLimit-Limit``, ``RateLimit-Remaining`` and
    ``RateLimit-Reset`` (delta-seconds) fields win. Otherwise the structured
    form is read: ``RateLimit: "default";r=50;t=30`` for remaining and reset,
    with the quota from ``RateLimit-Policy: "default";q=1200;w=300``.

    Returns:
        The parsed state, or None when no remaining count is reported.
    """
    current = _structured_params(_header(headers, "ratelimit"))
    policy = _structured_params(_header(headers, "ratelimit-policy"))

    remaining = _count(
        "RateLimit-Remaining",
        _header(headers, "ratelimit-remaining") or current.get("r"),
    )
    if remaining is None:
        return None

    info = RateLimitInfo(
        remaining=remaining,
        limit=_count(
            "RateLimit-Limit", _header(headers, "ratelimit-limit") or policy.get("q")
        ),
        reset_seconds=_seconds(
            "RateLimit-Reset", _header(headers, "ratelimit-reset") or current.get("t")
        ),
    )
    logger.debug(f"Parsed rate limit info: {info}")
    return info


def _reason(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Status"


def classify_response(
    status_code: int,
    headers: Mapping[str, str],
    payload: str | bytes | bytearray,
    result_type: Any = None,
    *,
    require_result: bool = True,
) -> ResponseEnvelope[Any]:
    """
    Turn an HTTP response into a decoded envelope or a structured error.

    Raises:
        TransientTransportError: For 408, 429 and 5xx responses.
        ApiResponseError: For other non-2xx responses and ``success: false``.
        EnvelopeDecodeError: If a 2xx body cannot be decoded.
    """
    if 200 <= status_code <= 299:
        return decode_envelope(
            payload,
            result_type,
            status_code=status_code,
            require_result=require_result,
        )

    text = _body_text(payload)
    errors = _envelope_errors(text)
    reason = _reason(status_code)

    if is_transient_status(status_code):
        retry_after = parse_retry_after(_header(headers, "retry-after"))
        raise TransientTransportError(
            f"HTTP {status_code} {reason}",
            status_code=status_code,
            retry_after_seconds=retry_after,
            errors=errors,
        )

    if not errors:
        errors = [ApiError(code=status_code, message=reason)]
    summary = ", ".join(str(error) for error in errors)
    logger.warning(f"API request failed with HTTP {status_code}: {summary}")
    raise ApiResponseError(
        f"HTTP {status_code} {reason}: {summary}",
        errors=errors,
        status_code=status_code,
    )


__all__ = [
    "RateLimitInfo",
    "classify_response",
    "decode_envelope",
    "decode_text",
    "encode_body",
    "is_transient_status",
    "parse_envelope",
    "parse_rate_limit_headers",
    "parse_retry_after",
    "to_wire",
]
