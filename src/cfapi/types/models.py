# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Wire models for the standard response envelope.

Every JSON response from the API is nested inside the same envelope::

    {
        "success": true,
        "errors": [],
        "messages": [],
        "result": {...} | [...] | null,
        "result_info": {"page": 1, "per_page": 20, ...}   # list endpoints only
    }

These models are pydantic v2 models so the envelope, its errors and its
pagination metadata are validated on the way in.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

T = TypeVar("T")


class ApiError(BaseModel):
    """A single error entry from a response envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: int = 0
    message: str = ""
    documentation_url: str | None = None

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class ApiMessage(BaseModel):
    """A single informational message from a response envelope.

    Some endpoints send bare strings instead of ``{code, message}``
    objects; both forms are accepted.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    code: int = 0
    message: str = ""

    @model_validator(mode="before")
    @classmethod
    def _accept_bare_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"code": 0, "message": data}
        return data

    def __str__(self) -> str:
        return self.message


class PageInfo(BaseModel):
    """
    Pagination metadata (``result_info``) from a list response.

    Attributes:
        page: Page number of this response (1-based).
        per_page: Requested page size.
        count: Number of items on this page.
        total_count: Number of items across all pages.
        total_pages: Number of pages. Some endpoints send 0 when they
            do not compute totals.
        cursor: Opaque continuation token sent by cursor-style endpoints.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: int = Field(default=1, ge=0)
    per_page: int = Field(default=0, ge=0)
    count: int = Field(default=0, ge=0)
    total_count: int = Field(default=0, ge=0)
    total_pages: int = Field(default=0, ge=0)
    cursor: str | None = None

    @property
    def expected_total_pages(self) -> int:
        """``ceil(total_count / per_page)``, or 0 when per_page is 0."""
        if self.per_page <= 0:
            return 0
        return math.ceil(self.total_count / self.per_page)

    def is_terminal(self, item_count: int) -> bool:
        """
        Decide whether the page that carried this metadata is the last one.

        A page is terminal when it is empty or when ``page >= total_pages``.
        When the endpoint reports ``total_pages == 0`` but still returned
        items, the only signal left is a short page: a full page means
        there may be more.

        Args:
            item_count: Number of items actually returned on the page.
        """
        if item_count == 0:
            return True
        if self.total_pages > 0:
            return self.page >= self.total_pages
        return self.per_page <= 0 or item_count < self.per_page


class ResponseEnvelope(BaseModel, Generic[T]):
    """
    The standard wrapper every JSON response is nested inside.

    Invariant: ``success`` is True iff ``errors`` is empty; a successful
    envelope carries a result except for payload-less operations such as
    deletes.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    success: bool
    errors: list[ApiError] = Field(default_factory=list)
    messages: list[ApiMessage] = Field(default_factory=list)
    result: T | None = None
    result_info: PageInfo | None = None

    @property
    def pagination(self) -> PageInfo | None:
        """Alias for ``result_info``."""
        return self.result_info

    def error_summary(self) -> str:
        """Render every error as ``[code] message``, comma separated."""
        return ", ".join(str(error) for error in self.errors)


@dataclass(frozen=True)
class PagePaginatedResult(Generic[T]):
    """
    One page of a page-number paginated list.

    Attributes:
        items: Items on this page, in response order.
        page_info: Pagination metadata, or None if the endpoint sent none.
    """

    items: list[T] = field(default_factory=list)
    page_info: PageInfo | None = None

    @property
    def is_terminal(self) -> bool:
        """True if no page follows this one."""
        if self.page_info is None:
            return True
        return self.page_info.is_terminal(len(self.items))


__all__ = [
    "ApiError",
    "ApiMessage",
    "PageInfo",
    "PagePaginatedResult",
    "ResponseEnvelope",
]
