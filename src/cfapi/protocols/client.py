# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Protocol between typed resource callers and the client core."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from ..pagination.cursor import PageCursor
    from ..types.models import PagePaginatedResult
    from ..types.request import RequestDescriptor

T = TypeVar("T")


@runtime_checkable
class ClientProtocol(Protocol):
    """
    What a typed resource API needs from a client handle.

    Resource callers only build a ``RequestDescriptor`` and name the
    expected result type; admission, retry, encoding and decoding all stay
    in the client.
    """

    @property
    def name(self) -> str:
        """Client name (for logging/debugging)."""
        ...

    @property
    def base_url(self) -> str:
        """Base URL of the API (for logging/debugging)."""
        ...

    @property
    def timeout(self) -> float:
        """Per-attempt request timeout in seconds."""
        ...

    @property
    def account_id(self) -> str | None:
        """Default account id from the client options, if any."""
        ...

    def get_headers(self) -> dict[str, str]:
        """Default headers with the credential redacted (for debugging context)."""
        ...

    async def send(self, descriptor: RequestDescriptor, result_type: Any = None) -> Any:
        """Execute a request and return its decoded result."""
        ...

    async def send_text(self, descriptor: RequestDescriptor) -> str:
        """Execute a raw-text request and return the body unparsed."""
        ...

    async def get_page(
        self, descriptor: RequestDescriptor, item_type: Any
    ) -> PagePaginatedResult[Any]:
        """Fetch one page of a list endpoint."""
        ...

    def paginate(self, descriptor: RequestDescriptor, item_type: Any) -> PageCursor[Any]:
        """Return a lazy cursor over every item of a list endpoint."""
        ...
