# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for ApiClient.

Requests go through ``httpx.MockTransport`` so the full path is exercised:
path and query encoding, headers, envelope decoding, retry, admission,
pagination and disposal.
"""

from __future__ import annotations

import asyncio
import json
from unittest.mock import AsyncMock, patch

import httpx
import pytest
from pydantic import BaseModel

from cfapi.client.api_client import ApiClient
from cfapi.encoding.envelope import RateLimitInfo
from cfapi.exceptions import (
    ApiResponseError,
    ClientDisposedError,
    EnvelopeDecodeError,
    InvalidArgumentError,
    RateLimitRejectedError,
    TransientTransportError,
)
from cfapi.observability.constants import OUTCOME_SUCCESS, QUEUE_DEPTH, REQUESTS_TOTAL
from cfapi.protocols.client import ClientProtocol
from cfapi.ratelimit.config import RateLimitingOptions
from cfapi.types.request import HttpMethod, QueryFilter, RequestDescriptor


class Item(BaseModel):
    id: str


class TestApiClientConstruction:
    def test_satisfies_client_protocol(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200))
        assert isinstance(client, ClientProtocol)

    def test_identity(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200), account_id="acct")
        assert client.name == "test"
        assert client.base_url == "https://api.cloudflare.com/client/v4/"
        assert client.timeout == 30.0
        assert client.account_id == "acct"
        assert not client.closed

    def test_headers_redact_token(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200))
        headers = client.get_headers()
        assert headers["authorization"] == "Bearer ***"
        assert "test-token" not in repr(client)

    def test_limiter_follows_options(self, make_client) -> None:
        client = make_client(
            lambda request: httpx.Response(200),
            rate_limiting=RateLimitingOptions(permit_limit=3, queue_limit=7),
        )
        assert client.limiter.permit_limit == 3
        assert client.limiter.queue_limit == 7


class TestApiClientRequests:
    @pytest.mark.asyncio
    async def test_get_sends_encoded_path_and_headers(self, make_client, envelope) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=envelope({"id": "r1"}))

        async with make_client(handler) as client:
            item = await client.get(
                "zones/{zone_id}/things/{thing_id}", "zone 1", "a/b", result_type=Item
            )

        assert item == Item(id="r1")
        request = captured[0]
        assert request.method == "GET"
        assert request.url.raw_path == b"/client/v4/zones/zone%201/things/a%2Fb"
        assert request.headers["authorization"] == "Bearer test-token"
        assert request.headers["accept"] == "application/json"
        assert request.headers["user-agent"] == "cfapi-python"
        assert request.content == b""

    @pytest.mark.asyncio
    async def test_query_only_set_fields(self, make_client, envelope) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=envelope([]))

        async with make_client(handler) as client:
            await client.get_page(
                RequestDescriptor(
                    HttpMethod.GET, "things", query={"name": "x", "proxied": False, "content": None}
                ),
                Item,
            )

        assert list(captured[0].url.params.multi_items()) == [
            ("name", "x"),
            ("proxied", "false"),
        ]

    @pytest.mark.asyncio
    async def test_post_body_is_json(self, make_client, envelope) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(200, json=envelope({"id": "new"}))

        async with make_client(handler) as client:
            await client.post("things", body={"name": "n"}, result_type=Item)

        assert json.loads(captured[0].content) == {"name": "n"}
        assert captured[0].headers["content-type"] == "application/json"

    @pytest.mark.asyncio
    async def test_delete_without_result(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=envelope({"id": "gone"}))

        async with make_client(handler) as client:
            assert await client.delete("things/{id}", "t1") is None

    @pytest.mark.asyncio
    async def test_get_text_returns_raw_body(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="example.com. 3600 IN SOA ...\n")

        async with make_client(handler) as client:
            text = await client.get_text("zones/{zone_id}/export", "z1")

        assert text == "example.com. 3600 IN SOA ...\n"

    @pytest.mark.asyncio
    async def test_blank_identifier_fails_before_io(self, make_client) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(200)

        async with make_client(handler) as client:
            with pytest.raises(InvalidArgumentError):
                await client.get("zones/{zone_id}", "  ", result_type=Item)

        assert calls == 0

    @pytest.mark.asyncio
    async def test_success_counted(self, make_client, envelope, metrics) -> None:
        async with make_client(
            lambda request: httpx.Response(200, json=envelope({"id": "1"}))
        ) as client:
            await client.get("things/{id}", "1", result_type=Item)

        assert metrics.counter_value(REQUESTS_TOTAL, method="GET", outcome=OUTCOME_SUCCESS) == 1


class TestApiClientErrors:
    @pytest.mark.asyncio
    async def test_application_errors_in_order(self, make_client, envelope) -> None:
        errors = [{"code": 9103, "message": "bad auth"}, {"code": 6003, "message": "bad headers"}]

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(403, json=envelope(None, success=False, errors=errors))

        async with make_client(handler) as client:
            with pytest.raises(ApiResponseError) as exc_info:
                await client.get("things/{id}", "1", result_type=Item)

        assert exc_info.value.codes == [9103, 6003]
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_success_false_with_200(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=envelope(None, success=False, errors=[{"code": 1, "message": "a"}]),
            )

        async with make_client(handler) as client:
            with pytest.raises(ApiResponseError):
                await client.get("things/{id}", "1", result_type=Item)

    @pytest.mark.asyncio
    async def test_malformed_body(self, make_client) -> None:
        async with make_client(lambda request: httpx.Response(200, text="<html>")) as client:
            with pytest.raises(EnvelopeDecodeError):
                await client.get("things/{id}", "1", result_type=Item)

    @pytest.mark.asyncio
    async def test_transient_status_retried(self, make_client, envelope) -> None:
        responses = [
            httpx.Response(503),
            httpx.Response(429, headers={"Retry-After": "0"}),
            httpx.Response(200, json=envelope({"id": "1"})),
        ]
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return responses.pop(0)

        async with make_client(handler) as client:
            assert await client.get("things/{id}", "1", result_type=Item) == Item(id="1")

        assert calls == 3

    @pytest.mark.asyncio
    async def test_retries_exhausted(self, make_client) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(502)

        async with make_client(handler) as client:
            with pytest.raises(TransientTransportError) as exc_info:
                await client.get("things/{id}", "1", result_type=Item)

        assert exc_info.value.status_code == 502
        assert calls == 3

    @pytest.mark.asyncio
    async def test_network_error_wrapped(self, make_client) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(
            handler, rate_limiting=RateLimitingOptions(max_retries=0)
        ) as client:
            with pytest.raises(TransientTransportError) as exc_info:
                await client.get("things/{id}", "1", result_type=Item)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_post_not_retried(self, make_client) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(503)

        async with make_client(handler) as client:
            with pytest.raises(TransientTransportError):
                await client.post("things", body={"name": "n"}, result_type=Item)

        assert calls == 1


class TestApiClientAdmission:
    @pytest.mark.asyncio
    async def test_rejects_beyond_permits_and_queue(
        self, make_client, envelope, metrics
    ) -> None:
        release = asyncio.Event()
        entered = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            entered.set()
            await release.wait()
            return httpx.Response(200, json=envelope({"id": "1"}))

        async with make_client(
            handler,
            rate_limiting=RateLimitingOptions(permit_limit=1, queue_limit=1, base_delay=0.0),
        ) as client:
            first = asyncio.create_task(client.get("things/{id}", "1", result_type=Item))
            await entered.wait()
            second = asyncio.create_task(client.get("things/{id}", "2", result_type=Item))
            for _ in range(100):
                if client.limiter.queue_depth == 1:
                    break
                await asyncio.sleep(0)
            assert client.limiter.queue_depth == 1
            assert metrics.gauge_value(QUEUE_DEPTH, client="test") == 1

            with pytest.raises(RateLimitRejectedError):
                await client.get("things/{id}", "3", result_type=Item)

            release.set()
            results = await asyncio.gather(first, second)

        assert results == [Item(id="1"), Item(id="1")]

    @pytest.mark.asyncio
    async def test_low_quota_headers_delay_next_request(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=envelope({"id": "1"}),
                headers={
                    "Ratelimit": '"default";r=2;t=30',
                    "Ratelimit-Policy": '"default";q=1200;w=300',
                },
            )

        async with make_client(handler) as client:
            with patch("cfapi.ratelimit.executor.asyncio.sleep", new_callable=AsyncMock) as sleep:
                await client.get("things/{id}", "1", result_type=Item)
                sleep.assert_not_awaited()
                assert client.throttle.last_observed == RateLimitInfo(
                    remaining=2, limit=1200, reset_seconds=30.0
                )

                await client.get("things/{id}", "1", result_type=Item)

        sleep.assert_awaited_once()
        assert sleep.await_args.args[0] == pytest.approx(10.0, abs=0.5)

    @pytest.mark.asyncio
    async def test_healthy_quota_never_delays(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=envelope({"id": "1"}),
                headers={"RateLimit-Limit": "1200", "RateLimit-Remaining": "1100"},
            )

        async with make_client(handler) as client:
            with patch("cfapi.ratelimit.executor.asyncio.sleep", new_callable=AsyncMock) as sleep:
                for _ in range(3):
                    await client.get("things/{id}", "1", result_type=Item)

        sleep.assert_not_awaited()


class TestApiClientPagination:
    @pytest.mark.asyncio
    async def test_three_pages_three_requests(self, make_client, envelope) -> None:
        requested: list[str | None] = []

        def handler(request: httpx.Request) -> httpx.Response:
            page = request.url.params.get("page")
            requested.append(page)
            return httpx.Response(
                200,
                json=envelope(
                    [{"id": f"item-{page}"}],
                    result_info={
                        "page": int(page or 1),
                        "per_page": 1,
                        "count": 1,
                        "total_count": 3,
                        "total_pages": 3,
                    },
                ),
            )

        async with make_client(handler) as client:
            cursor = client.paginate(
                RequestDescriptor(HttpMethod.GET, "things", query=QueryFilter(per_page=1)),
                Item,
            )
            items = [item.id async for item in cursor]

        assert items == ["item-1", "item-2", "item-3"]
        assert requested == ["1", "2", "3"]

    @pytest.mark.asyncio
    async def test_get_page_without_result_info(self, make_client, envelope) -> None:
        async with make_client(
            lambda request: httpx.Response(200, json=envelope([{"id": "1"}]))
        ) as client:
            page = await client.get_page(RequestDescriptor(HttpMethod.GET, "things"), Item)

        assert page.items == [Item(id="1")]
        assert page.page_info is None
        assert page.is_terminal

    @pytest.mark.asyncio
    async def test_paginate_validates_path_eagerly(self, make_client) -> None:
        async with make_client(lambda request: httpx.Response(200)) as client:
            with pytest.raises(InvalidArgumentError):
                client.paginate(
                    RequestDescriptor(HttpMethod.GET, "zones/{zone_id}/things", ("",)), Item
                )


class TestApiClientDisposal:
    @pytest.mark.asyncio
    async def test_calls_after_close_fail(self, make_client, envelope) -> None:
        client: ApiClient = make_client(
            lambda request: httpx.Response(200, json=envelope({"id": "1"}))
        )
        await client.aclose()

        assert client.closed
        with pytest.raises(ClientDisposedError) as exc_info:
            await client.get("things/{id}", "1", result_type=Item)
        assert exc_info.value.client_name == "test"

        with pytest.raises(ClientDisposedError):
            _ = client.dns
        with pytest.raises(ClientDisposedError):
            client.paginate(RequestDescriptor(HttpMethod.GET, "things"), Item)

    @pytest.mark.asyncio
    async def test_get_headers_after_close_fails(self, make_client) -> None:
        client: ApiClient = make_client(lambda request: httpx.Response(200))
        assert client.get_headers()["authorization"] == "Bearer ***"
        await client.aclose()

        with pytest.raises(ClientDisposedError):
            client.get_headers()

    @pytest.mark.asyncio
    async def test_close_idempotent(self, make_client) -> None:
        client = make_client(lambda request: httpx.Response(200))
        await client.aclose()
        await client.aclose()
        assert client.closed

    @pytest.mark.asyncio
    async def test_cursor_fails_after_close(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200,
                json=envelope(
                    [{"id": "1"}], result_info={"page": 1, "per_page": 1, "total_pages": 2}
                ),
            )

        client = make_client(handler)
        cursor = client.paginate(RequestDescriptor(HttpMethod.GET, "things"), Item)
        assert (await cursor.__anext__()).id == "1"
        await client.aclose()

        with pytest.raises(ClientDisposedError):
            await cursor.__anext__()

    @pytest.mark.asyncio
    async def test_other_client_unaffected(self, make_client, envelope) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json=envelope({"id": "1"}))

        first = make_client(handler)
        second = make_client(handler)
        await first.aclose()

        async with second:
            assert await second.get("things/{id}", "1", result_type=Item) == Item(id="1")


class TestApiClientResources:
    @pytest.mark.asyncio
    async def test_resource_apis_cached(self, make_client) -> None:
        async with make_client(lambda request: httpx.Response(200)) as client:
            assert client.dns is client.dns
            assert client.roles is client.roles
            assert client.turnstile is client.turnstile
            assert client.accounts is client.accounts
            assert client.dns.client is client


