# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Path and query-string construction.

Identifiers are percent-encoded as single opaque path segments: only the
RFC 3986 unreserved characters (``A-Z a-z 0-9 - . _ ~``) survive as-is, so
an identifier containing ``/`` can never be read back as two segments.

Query filters serialize only the fields the caller set, under their fixed
wire names, with booleans as ``true``/``false`` and enumerations as their
wire string.

Example:
    >>> build_path("zones/{}/dns_records/{}", ("zone 1", "a/b"))
    'zones/zone%201/dns_records/a%2Fb'
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from enum import Enum
from typing import Any, TypeVar
from urllib.parse import quote

from ..exceptions import InvalidArgumentError
from ..types.request import QueryFilter
from ..types.unset import is_unset

F = TypeVar("F", bound=QueryFilter)

_PLACEHOLDER = re.compile(r"\{([^{}]*)\}")

# Unreserved characters, so quoting leaves them as path navigation
_DOT_SEGMENTS = frozenset({".", ".."})

QueryParams = list[tuple[str, str]]


def require_identifier(name: str, value: Any) -> str:
    """
    Check that a required identifier is a non-blank string.

    Args:
        name: Argument name, used in the error message.
        value: The identifier to check.

    Returns:
        The identifier, unchanged.

    Raises:
        InvalidArgumentError: If the value is None, not a string, empty or
            whitespace only.
    """
    if value is None:
        raise InvalidArgumentError(f"{name} must not be None", argument=name)
    if not isinstance(value, str):
        raise InvalidArgumentError(
            f"{name} must be a string, got {type(value).__name__}", argument=name
        )
    if not value.strip():
        raise InvalidArgumentError(
            f"{name} must not be empty or whitespace", argument=name
        )
    return value


def encode_segment(value: str) -> str:
    """Percent-encode a value as one opaque path segment (UTF-8)."""
    return quote(value, safe="")


def build_path(template: str, params: Sequence[str] = ()) -> str:
    """
    Fill a path template with percent-encoded identifiers.

    Placeholders are ``{}`` or ``{name}`` and are filled strictly in order;
    the name is only used in error messages.

    Raises:
        InvalidArgumentError: If an identifier is blank, is ``.`` or ``..``,
            or the number of identifiers does not match the number of
            placeholders.
    """
    names = _PLACEHOLDER.findall(template)
    if len(names) != len(params):
        raise InvalidArgumentError(
            f"Path template '{template}' has {len(names)} placeholder(s) "
            f"but {len(params)} identifier(s) were given",
            argument="path_params",
        )

    values = iter(
        _segment(name or f"path_params[{index}]", value)
        for index, (name, value) in enumerate(zip(names, params))
    )
    return _PLACEHOLDER.sub(lambda _match: next(values), template)


def _segment(name: str, value: Any) -> str:
    value = require_identifier(name, value)
    if value in _DOT_SEGMENTS:
        raise InvalidArgumentError(
            f"{name} must not be a dot segment, got '{value}'", argument=name
        )
    return encode_segment(value)


def format_query_value(value: Any) -> str:
    """Render one query value in its wire form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    # ExtensibleEnum and plain strings
    if isinstance(value, str):
        return str.__str__(value)
    return str(value)


def _append(params: QueryParams, name: str, value: Any) -> None:
    if value is None or is_unset(value):
        return
    if isinstance(value, (list, tuple, set, frozenset)):
        for item in value:
            _append(params, name, item)
        return
    params.append((name, format_query_value(value)))


def build_query(query: QueryFilter | Mapping[str, Any] | None) -> QueryParams:
    """
    Serialize a filter into ordered ``(name, value)`` query pairs.

    Fields that are ``None`` or ``UNSET`` are left out entirely. Filter
    models use their field aliases as wire names and keep declaration
    order; mappings keep insertion order.
    """
    params: QueryParams = []
    if query is None:
        return params

    if isinstance(query, QueryFilter):
        for field_name, field_info in type(query).model_fields.items():
            wire_name = field_info.alias or field_name
            _append(params, wire_name, getattr(query, field_name))
        return params

    if isinstance(query, Mapping):
        for name, value in query.items():
            _append(params, str(name), value)
        return params

    raise InvalidArgumentError(
        f"Unsupported query type: {type(query).__name__}", argument="query"
    )


def with_page(
    query: F | Mapping[str, Any] | None,
    page: int,
    per_page: int | None = None,
) -> F | QueryFilter | dict[str, Any]:
    """
    Return a copy of a filter with the pagination fields replaced.

    Every other field is held constant. ``per_page`` is only replaced when
    given.
    """
    if page < 1:
        raise InvalidArgumentError("page must be >= 1", argument="page")

    if query is None:
        return QueryFilter(page=page, per_page=per_page)

    if isinstance(query, QueryFilter):
        update: dict[str, Any] = {"page": page}
        if per_page is not None:
            update["per_page"] = per_page
        return query.model_copy(update=update)

    copied = dict(query)
    copied["page"] = page
    if per_page is not None:
        copied["per_page"] = per_page
    return copied


__all__ = [
    "QueryParams",
    "build_path",
    "build_query",
    "encode_segment",
    "format_query_value",
    "require_identifier",
    "with_page",
]
