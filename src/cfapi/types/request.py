# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Request descriptor and query-filter types.

A ``RequestDescriptor`` is what every typed operation hands to the core:
the HTTP method, a path template with its ordered identifiers, an optional
query filter and an optional body. It is immutable and owned by the single
call that builds it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class HttpMethod(str, Enum):
    """HTTP methods used by the API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @property
    def is_idempotent(self) -> bool:
        """True for methods that may be repeated without extra side effects."""
        return self in _IDEMPOTENT_METHODS


_IDEMPOTENT_METHODS = frozenset(
    {
        HttpMethod.GET,
        HttpMethod.HEAD,
        HttpMethod.OPTIONS,
        HttpMethod.PUT,
        HttpMethod.DELETE,
    }
)


class QueryFilter(BaseModel):
    """
    Base class for list filters.

    Field aliases are the fixed wire names of the query parameters. Fields
    left at ``None`` are omitted from the query string entirely.

    Example:
        >>> class ListThingsFilter(QueryFilter):
        ...     name: str | None = None
        >>> ListThingsFilter(name="a", per_page=50)
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    page: int | None = Field(default=None, ge=1, alias="page")
    per_page: int | None = Field(default=None, ge=1, alias="per_page")


@dataclass(frozen=True)
class RequestDescriptor:
    """
    Everything the core needs to issue one API call.

    Attributes:
        method: HTTP method.
        path_template: Path relative to the API base URL, with ``{}`` or
            ``{name}`` placeholders, e.g. ``"zones/{}/dns_records/{}"``.
        path_params: Identifiers for the placeholders, in order. Each is
            percent-encoded as one opaque path segment.
        query: Optional filter model or mapping serialized as the query string.
        body: Optional request body (dataclass, pydantic model or mapping).
        raw_text: True for endpoints returning plain text with no envelope.
    """

    method: HttpMethod
    path_template: str
    path_params: tuple[str, ...] = ()
    query: QueryFilter | dict[str, Any] | None = None
    body: Any = None
    raw_text: bool = False
    headers: tuple[tuple[str, str], ...] = field(default=())

    def with_query(
        self, query: QueryFilter | dict[str, Any] | None
    ) -> RequestDescriptor:
        """Return a copy with a different query filter."""
        return RequestDescriptor(
            method=self.method,
            path_template=self.path_template,
            path_params=self.path_params,
            query=query,
            body=self.body,
            raw_text=self.raw_text,
            headers=self.headers,
        )

    @property
    def label(self) -> str:
        """Short ``METHOD template`` label for logs and metrics."""
        return f"{self.method.value} {self.path_template}"


__all__ = ["HttpMethod", "QueryFilter", "RequestDescriptor"]
