# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for the accounts API."""

from __future__ import annotations

import httpx
import pytest

from cfapi.exceptions import InvalidArgumentError
from cfapi.resources.accounts import AccountType, ListAccountsFilter
from cfapi.types.enums import SortDirection

ACCOUNT = {
    "id": "01a7362d577a6c3019a474fd6f485823",
    "name": "Demo Account",
    "type": "enterprise",
    "created_on": "2014-03-01T12:21:02Z",
    "settings": {"enforce_twofactor": True},
}


class TestAccountsApi:
    @pytest.mark.asyncio
    async def test_list_accounts(self, make_client, make_recorder, envelope) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200, json=envelope([ACCOUNT])))
        filters = ListAccountsFilter(name="Demo", direction=SortDirection.DESC)
        async with make_client(recorder) as client:
            page = await client.accounts.list_accounts(filters)

        assert recorder.last.url.path == "/client/v4/accounts"
        assert dict(recorder.last.url.params) == {"name": "Demo", "direction": "desc"}
        account = page.items[0]
        assert account.type == AccountType.ENTERPRISE
        assert account.settings is not None
        assert account.settings.enforce_twofactor

    @pytest.mark.asyncio
    async def test_list_all_accounts(self, make_client, make_recorder, envelope) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            page = int(request.url.params["page"])
            items = [dict(ACCOUNT, id=f"a{page}-{i}") for i in range(2)] if page < 3 else []
            return httpx.Response(
                200,
                json=envelope(items, result_info={"page": page, "per_page": 2}),
            )

        recorder = make_recorder(respond)
        async with make_client(recorder) as client:
            ids = [a.id async for a in client.accounts.list_all_accounts()]

        assert ids == ["a1-0", "a1-1", "a2-0", "a2-1"]
        assert len(recorder.requests) == 3

    @pytest.mark.asyncio
    async def test_get_account(self, make_client, make_recorder, envelope) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200, json=envelope(ACCOUNT)))
        async with make_client(recorder) as client:
            account = await client.accounts.get_account(ACCOUNT["id"])

        assert recorder.last.url.path == f"/client/v4/accounts/{ACCOUNT['id']}"
        assert account.name == "Demo Account"

    @pytest.mark.asyncio
    async def test_get_account_ignores_client_default(
        self, make_client, make_recorder
    ) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200))
        async with make_client(recorder, account_id=ACCOUNT["id"]) as client:
            with pytest.raises(InvalidArgumentError):
                await client.accounts.get_account(None)  # type: ignore[arg-type]

        assert recorder.requests == []
