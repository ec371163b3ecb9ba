# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Lazy page-by-page iteration over list endpoints.

``PageCursor`` turns a page-fetch function into a single forward-only
sequence of items. Pages are fetched strictly one at a time: page N+1 is
requested only after every item of page N has been consumed, and only if
page N was not terminal. Stopping early (``break``, ``aclose()`` or leaving
an ``async with`` block) means no further page is ever requested.

Usage:
    async with client.dns.list_all_records(zone_id) as records:
        async for record in records:
            if record.name == "www.example.com":
                break
"""

from __future__ import annotations

import asyncio
import logging
from collections import deque
from collections.abc import AsyncIterator, Awaitable, Callable, Mapping
from typing import Any, Generic, TypeVar

from ..encoding.paths import with_page
from ..observability.collector import MetricsCollector
from ..observability.constants import PAGES_FETCHED_TOTAL
from ..types.models import PagePaginatedResult
from ..types.request import QueryFilter

logger = logging.getLogger(__name__)

T = TypeVar("T")

PageQuery = QueryFilter | Mapping[str, Any] | None
PageFetcher = Callable[[Any], Awaitable[PagePaginatedResult[T]]]


class PageCursor(AsyncIterator[T], Generic[T]):
    """
    Forward-only async iterator over the items of a paginated listing.

    The cursor always starts at page 1; a ``page`` set on the filter is
    replaced. Every other filter field, including ``per_page``, is held
    constant across pages. It is single-pass: once exhausted, closed or
    failed, it yields nothing more. Create a new cursor to iterate again.

    Attributes:
        pages_fetched: Number of page requests issued so far.
    """

    __slots__ = (
        "__weakref__",
        "_buffer",
        "_closed",
        "_exhausted",
        "_fetch",
        "_metrics",
        "_next_page",
        "_pages_fetched",
        "_query",
    )

    def __init__(
        self,
        fetch: PageFetcher[T],
        query: PageQuery = None,
        metrics: MetricsCollector | None = None,
    ) -> None:
        """
        Initialize the cursor. No request is made until iteration starts.

        Args:
            fetch: Fetches one page for a filter whose ``page`` is set.
            query: The caller's filter, or None for endpoint defaults.
            metrics: Optional collector counting fetched pages.
        """
        self._fetch = fetch
        self._query = query
        self._metrics = metrics
        self._next_page = 1
        self._buffer: deque[T] = deque()
        self._pages_fetched = 0
        self._exhausted = False
        self._closed = False

    @property
    def pages_fetched(self) -> int:
        return self._pages_fetched

    @property
    def closed(self) -> bool:
        return self._closed

    async def __anext__(self) -> T:
        while not self._buffer:
            if self._closed or self._exhausted:
                raise StopAsyncIteration
            await self._fetch_next_page()
        return self._buffer.popleft()

    async def _fetch_next_page(self) -> None:
        page_number = self._next_page
        try:
            page = await self._fetch(with_page(self._query, page_number))
        except (Exception, asyncio.CancelledError):
            # A failed cursor is finished; the error goes to the caller
            self._exhausted = True
            raise

        self._pages_fetched += 1
        if self._metrics is not None:
            self._metrics.inc_counter(PAGES_FETCHED_TOTAL)

        self._buffer.extend(page.items)
        if page.is_terminal:
            self._exhausted = True
            logger.debug(
                f"Fetched final page {page_number} ({len(page.items)} items, "
                f"{self._pages_fetched} page(s) total)"
            )
        else:
            self._next_page = page_number + 1
            logger.debug(f"Fetched page {page_number} ({len(page.items)} items)")

    async def aclose(self) -> None:
        """
        Stop the cursor. Idempotent; no further pages are fetched.
        """
        if self._closed:
            return
        self._closed = True
        self._buffer.clear()

    async def __aenter__(self) -> PageCursor[T]:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __aiter__(self) -> PageCursor[T]:
        """Return self as the async iterator."""
        return self


async def find_first(
    cursor: PageCursor[T], predicate: Callable[[T], bool]
) -> T | None:
    """
    Return the first item matching ``predicate``, or None.

    The cursor is closed as soon as a match is found, so pages after the
    one holding the match are never requested.
    """
    async with cursor:
        async for item in cursor:
            if predicate(item):
                return item
    return None


async def collect(cursor: PageCursor[T], limit: int | None = None) -> list[T]:
    """
    Drain a cursor into a list.

    Args:
        cursor: The cursor to consume.
        limit: Stop after this many items (and fetch no further pages).
    """
    items: list[T] = []
    if limit is not None and limit <= 0:
        await cursor.aclose()
        return items

    async with cursor:
        async for item in cursor:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
    return items


__all__ = ["PageCursor", "PageFetcher", "collect", "find_first"]
