# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Base class for the typed resource APIs.

A resource API only knows endpoints and shapes. Each operation names a
method, a path template, its identifiers, an optional filter or body and
the result type, and hands them to the client; everything else happens in
the client core.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from ..encoding.paths import build_path, require_identifier
from ..exceptions import InvalidArgumentError
from ..pagination.cursor import PageCursor
from ..protocols.client import ClientProtocol
from ..types.models import PagePaginatedResult
from ..types.request import HttpMethod, QueryFilter, RequestDescriptor

T = TypeVar("T")

Query = QueryFilter | Mapping[str, Any] | None


class ResourceApi:
    """
    Shared plumbing for typed resource APIs.

    Args:
        client: The handle requests are sent through.
    """

    def __init__(self, client: ClientProtocol):
        self._client = client

    @property
    def client(self) -> ClientProtocol:
        return self._client

    def _account(self, account_id: str | None) -> str:
        """Resolve an explicit account id or fall back to the client default."""
        if account_id is None:
            account_id = self._client.account_id
        return require_identifier("account_id", account_id)

    @staticmethod
    def _require_body(name: str, body: Any) -> Any:
        if body is None:
            raise InvalidArgumentError(f"{name} must not be None", argument=name)
        return body

    @staticmethod
    def _descriptor(
        method: HttpMethod,
        template: str,
        ids: tuple[str, ...],
        *,
        query: Query = None,
        body: Any = None,
        raw_text: bool = False,
    ) -> RequestDescriptor:
        # Validates identifiers before any I/O
        build_path(template, ids)
        return RequestDescriptor(
            method=method,
            path_template=template,
            path_params=ids,
            query=query,
            body=body,
            raw_text=raw_text,
        )

    async def _get(self, template: str, *ids: str, result_type: Any) -> Any:
        return await self._client.send(
            self._descriptor(HttpMethod.GET, template, ids), result_type
        )

    async def _get_text(self, template: str, *ids: str) -> str:
        return await self._client.send_text(
            self._descriptor(HttpMethod.GET, template, ids, raw_text=True)
        )

    async def _post(
        self, template: str, *ids: str, body: Any = None, result_type: Any = None
    ) -> Any:
        return await self._client.send(
            self._descriptor(HttpMethod.POST, template, ids, body=body), result_type
        )

    async def _put(self, template: str, *ids: str, body: Any, result_type: Any) -> Any:
        return await self._client.send(
            self._descriptor(HttpMethod.PUT, template, ids, body=body), result_type
        )

    async def _patch(self, template: str, *ids: str, body: Any, result_type: Any) -> Any:
        return await self._client.send(
            self._descriptor(HttpMethod.PATCH, template, ids, body=body), result_type
        )

    async def _delete(self, template: str, *ids: str, result_type: Any = None) -> Any:
        return await self._client.send(
            self._descriptor(HttpMethod.DELETE, template, ids), result_type
        )

    async def _get_page(
        self, template: str, *ids: str, item_type: type[T], query: Query = None
    ) -> PagePaginatedResult[T]:
        return await self._client.get_page(
            self._descriptor(HttpMethod.GET, template, ids, query=query), item_type
        )

    def _paginate(
        self, template: str, *ids: str, item_type: type[T], query: Query = None
    ) -> PageCursor[T]:
        return self._client.paginate(
            self._descriptor(HttpMethod.GET, template, ids, query=query), item_type
        )


__all__ = ["ResourceApi"]
