# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
The client handle.

``ApiClient`` owns one ``httpx.AsyncClient``, one concurrency limiter and
one request executor. Every typed operation ends up in ``send``,
``send_text`` or ``get_page``, which:

1. build the path, query string and body (invalid input fails here,
   before any I/O),
2. hand one attempt at a time to the executor for admission and retry,
3. decode the response envelope into the typed result or raise a
   structured error.

After ``aclose()`` every operation raises ``ClientDisposedError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, cast

import httpx

from ..encoding.envelope import (
    classify_response,
    decode_text,
    encode_body,
    parse_rate_limit_headers,
)
from ..encoding.paths import build_path, build_query
from ..exceptions import ClientDisposedError, TransientTransportError
from ..observability.collector import MetricsCollector, get_metrics_collector
from ..pagination.cursor import PageCursor
from ..ratelimit.executor import RequestExecutor
from ..ratelimit.limiter import ConcurrencyLimiter
from ..ratelimit.retry import RetryPolicy
from ..ratelimit.throttle import QuotaThrottle
from ..resources.accounts import AccountsApi
from ..resources.dns import DnsApi
from ..resources.roles import RolesApi
from ..resources.turnstile import TurnstileApi
from ..types.models import PagePaginatedResult, ResponseEnvelope
from ..types.request import HttpMethod, QueryFilter, RequestDescriptor
from .options import ClientOptions, ensure_valid

logger = logging.getLogger(__name__)

DYNAMIC_CLIENT_NAME = "dynamic"


class ApiClient:
    """
    One configured connection to the API.

    Use it as an async context manager so the transport is always released:

    Example:
        >>> async with ApiClient(ClientOptions(api_token=token)) as client:
        ...     record = await client.dns.get_record(zone_id, record_id)

    Args:
        options: Validated client options.
        name: Client name for logs and errors.
        transport: Optional httpx transport (e.g. ``httpx.MockTransport``).
        metrics: Metrics collector; defaults to the process-wide one.
    """

    def __init__(
        self,
        options: ClientOptions,
        name: str = DYNAMIC_CLIENT_NAME,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: MetricsCollector | None = None,
    ):
        ensure_valid(name, options)

        self._name = name
        self._options = options
        self._metrics = metrics or get_metrics_collector()

        limits = options.rate_limiting
        self._limiter = ConcurrencyLimiter(
            permit_limit=limits.permit_limit,
            queue_limit=limits.queue_limit,
            enabled=limits.enabled,
            metrics=self._metrics,
            name=name,
        )
        self._throttle = QuotaThrottle.from_options(limits)
        self._executor = RequestExecutor(
            self._limiter,
            RetryPolicy(limits),
            total_timeout=options.total_timeout,
            metrics=self._metrics,
            throttle=self._throttle,
        )
        self._http = httpx.AsyncClient(
            base_url=options.api_base_url,
            headers={
                "Authorization": f"Bearer {options.api_token}",
                "Accept": "application/json",
                "User-Agent": options.user_agent,
            },
            timeout=httpx.Timeout(options.timeout),
            transport=transport,
        )
        self._closed = False
        self._resources: dict[str, Any] = {}

        logger.debug(f"Created client '{name}' for {options.api_base_url}")

    # === Identity ===

    @property
    def name(self) -> str:
        return self._name

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def base_url(self) -> str:
        return self._options.api_base_url

    @property
    def timeout(self) -> float:
        return self._options.timeout

    @property
    def account_id(self) -> str | None:
        return self._options.account_id

    @property
    def options(self) -> ClientOptions:
        self._ensure_open()
        return self._options

    @property
    def limiter(self) -> ConcurrencyLimiter:
        self._ensure_open()
        return self._limiter

    @property
    def throttle(self) -> QuotaThrottle:
        self._ensure_open()
        return self._throttle

    def get_headers(self) -> dict[str, str]:
        """Default headers with the credential redacted."""
        self._ensure_open()
        headers = dict(self._http.headers)
        if "authorization" in headers:
            headers["authorization"] = "Bearer ***"
        return headers

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientDisposedError(self._name)

    # === Resource APIs ===

    def _resource(self, key: str, factory: type[Any]) -> Any:
        self._ensure_open()
        resource = self._resources.get(key)
        if resource is None:
            resource = factory(self)
            self._resources[key] = resource
        return resource

    @property
    def dns(self) -> DnsApi:
        return self._resource("dns", DnsApi)  # type: ignore[no-any-return]

    @property
    def roles(self) -> RolesApi:
        return self._resource("roles", RolesApi)  # type: ignore[no-any-return]

    @property
    def turnstile(self) -> TurnstileApi:
        return self._resource("turnstile", TurnstileApi)  # type: ignore[no-any-return]

    @property
    def accounts(self) -> AccountsApi:
        return self._resource("accounts", AccountsApi)  # type: ignore[no-any-return]

    # === Core operations ===

    async def send(self, descriptor: RequestDescriptor, result_type: Any = None) -> Any:
        """
        Execute a request and return the decoded ``result``.

        Args:
            descriptor: What to send.
            result_type: Expected shape of the result, or None for
                operations without a payload (the call then returns None).

        Raises:
            ClientDisposedError: If the client has been closed.
            InvalidArgumentError: If an identifier is missing or blank.
            ApplicationError: If the API reports a failure.
            RateLimitRejectedError: If local admission rejects the call.
            TransientTransportError: After retries are exhausted.
        """
        envelope = await self._execute(descriptor, result_type, require_result=True)
        return envelope.result

    async def send_text(self, descriptor: RequestDescriptor) -> str:
        """Execute a raw-text request (no envelope) and return the body."""
        if not descriptor.raw_text:
            descriptor = replace(descriptor, raw_text=True)
        return cast(str, await self._execute(descriptor, None, require_result=False))

    async def get_page(
        self, descriptor: RequestDescriptor, item_type: Any
    ) -> PagePaginatedResult[Any]:
        """
        Fetch one page of a list endpoint.

        Args:
            descriptor: The list request, with the page in its query.
            item_type: Type of one item; the result is validated as a list of it.
        """
        envelope = await self._execute(
            descriptor, list[item_type], require_result=False  # type: ignore[valid-type]
        )
        return PagePaginatedResult(
            items=list(envelope.result or []),
            page_info=envelope.result_info,
        )

    def paginate(self, descriptor: RequestDescriptor, item_type: Any) -> PageCursor[Any]:
        """
        Return a lazy cursor over every item of a list endpoint.

        The path is validated now; the first page is fetched on first
        iteration.
        """
        self._ensure_open()
        build_path(descriptor.path_template, descriptor.path_params)

        async def fetch(query: Any) -> PagePaginatedResult[Any]:
            return await self.get_page(descriptor.with_query(query), item_type)

        return PageCursor(fetch, descriptor.query, metrics=self._metrics)

    # === Convenience verbs ===

    async def get(
        self,
        path_template: str,
        *path_params: str,
        query: QueryFilter | Mapping[str, Any] | None = None,
        result_type: Any = None,
    ) -> Any:
        return await self.send(
            RequestDescriptor(HttpMethod.GET, path_template, path_params, query=query),
            result_type,
        )

    async def get_text(
        self,
        path_template: str,
        *path_params: str,
        query: QueryFilter | Mapping[str, Any] | None = None,
    ) -> str:
        return await self.send_text(
            RequestDescriptor(
                HttpMethod.GET, path_template, path_params, query=query, raw_text=True
            )
        )

    async def post(
        self,
        path_template: str,
        *path_params: str,
        body: Any = None,
        result_type: Any = None,
    ) -> Any:
        return await self.send(
            RequestDescriptor(HttpMethod.POST, path_template, path_params, body=body),
            result_type,
        )

    async def put(
        self,
        path_template: str,
        *path_params: str,
        body: Any = None,
        result_type: Any = None,
    ) -> Any:
        return await self.send(
            RequestDescriptor(HttpMethod.PUT, path_template, path_params, body=body),
            result_type,
        )

    async def patch(
        self,
        path_template: str,
        *path_params: str,
        body: Any = None,
        result_type: Any = None,
    ) -> Any:
        return await self.send(
            RequestDescriptor(HttpMethod.PATCH, path_template, path_params, body=body),
            result_type,
        )

    async def delete(
        self,
        path_template: str,
        *path_params: str,
        result_type: Any = None,
    ) -> Any:
        return await self.send(
            RequestDescriptor(HttpMethod.DELETE, path_template, path_params),
            result_type,
        )

    # === Internals ===

    async def _execute(
        self,
        descriptor: RequestDescriptor,
        result_type: Any,
        *,
        require_result: bool,
    ) -> Any:
        """Run a request through the executor; returns an envelope or raw text."""
        self._ensure_open()

        path = build_path(descriptor.path_template, descriptor.path_params)
        params = build_query(descriptor.query)
        content = encode_body(descriptor.body)
        headers = dict(descriptor.headers)
        if content is not None:
            headers.setdefault("Content-Type", "application/json")

        async def attempt() -> ResponseEnvelope[Any] | str:
            self._ensure_open()
            request = self._http.build_request(
                descriptor.method.value,
                path,
                params=params,
                content=content,
                headers=headers,
            )
            logger.debug(f"{self._name}: {descriptor.method.value} {request.url.path}")
            try:
                response = await self._http.send(request)
            except httpx.RequestError as e:
                raise TransientTransportError(
                    f"{type(e).__name__} during {descriptor.label}: {e}"
                ) from e
            logger.debug(
                f"{self._name}: {descriptor.method.value} {request.url.path} "
                f"-> {response.status_code}"
            )
            self._throttle.observe(parse_rate_limit_headers(response.headers))

            if descriptor.raw_text and response.is_success:
                return decode_text(response.content)
            return classify_response(
                response.status_code,
                response.headers,
                response.content,
                result_type,
                require_result=require_result,
            )

        return await self._executor.execute(descriptor, attempt)

    # === Lifecycle ===

    async def aclose(self) -> None:
        """
        Release the transport. Idempotent.

        Any operation attempted afterwards raises ``ClientDisposedError``.
        """
        if self._closed:
            return
        self._closed = True
        self._resources.clear()
        await self._http.aclose()
        logger.debug(f"Closed client '{self._name}'")

    async def __aenter__(self) -> ApiClient:
        self._ensure_open()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"ApiClient(name={self._name!r}, base_url={self.base_url!r}, {state})"


__all__ = ["DYNAMIC_CLIENT_NAME", "ApiClient"]
