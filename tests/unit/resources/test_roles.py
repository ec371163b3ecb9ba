# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for the account roles API."""

from __future__ import annotations

import httpx
import pytest

from cfapi.exceptions import ApiResponseError, InvalidArgumentError
from cfapi.resources.roles import AccountRole, ListRolesFilter

ACCOUNT = "01a7362d577a6c3019a474fd6f485823"

ROLE = {
    "id": "3536bcfad5faccb999b47003c79917fb",
    "name": "Account Administrator",
    "description": "Administrative access to the entire Account",
    "permissions": {
        "dns_records": {"read": True, "write": True},
        "billing": {"read": True, "write": False},
        "some_future_area": {"read": True},
    },
}


class TestAccountRoleModel:
    def test_unknown_permission_areas_ignored(self) -> None:
        role = AccountRole.model_validate(ROLE)
        assert role.permissions.dns_records is not None
        assert role.permissions.dns_records.write
        assert role.permissions.billing is not None
        assert not role.permissions.billing.write
        assert role.permissions.zones is None

    def test_permissions_default(self) -> None:
        role = AccountRole.model_validate({"id": "r", "name": "n"})
        assert role.description == ""
        assert role.permissions.dns is None


class TestRolesApi:
    @pytest.mark.asyncio
    async def test_list_roles(self, make_client, make_recorder, envelope) -> None:
        recorder = make_recorder(
            lambda r: httpx.Response(
                200,
                json=envelope(
                    [ROLE], result_info={"page": 1, "per_page": 20, "total_pages": 1}
                ),
            )
        )
        async with make_client(recorder) as client:
            page = await client.roles.list_roles(ACCOUNT, ListRolesFilter(per_page=20))

        assert recorder.last.url.path == f"/client/v4/accounts/{ACCOUNT}/roles"
        assert recorder.last.url.params["per_page"] == "20"
        assert page.items[0].name == "Account Administrator"
        assert page.is_terminal

    @pytest.mark.asyncio
    async def test_list_all_roles_uses_client_account(
        self, make_client, make_recorder, envelope
    ) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200, json=envelope([ROLE])))
        async with make_client(recorder, account_id=ACCOUNT) as client:
            roles = [role async for role in client.roles.list_all_roles()]

        assert len(roles) == 1
        assert recorder.last.url.path == f"/client/v4/accounts/{ACCOUNT}/roles"

    @pytest.mark.asyncio
    async def test_get_role(self, make_client, make_recorder, envelope) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200, json=envelope(ROLE)))
        async with make_client(recorder) as client:
            role = await client.roles.get_role(ROLE["id"], ACCOUNT)

        assert recorder.last.url.path == f"/client/v4/accounts/{ACCOUNT}/roles/{ROLE['id']}"
        assert role.id == ROLE["id"]

    @pytest.mark.asyncio
    async def test_get_role_not_found(self, make_client, make_recorder, envelope) -> None:
        recorder = make_recorder(
            lambda r: httpx.Response(
                404,
                json=envelope(
                    success=False, errors=[{"code": 1003, "message": "Role not found"}]
                ),
            )
        )
        async with make_client(recorder) as client:
            with pytest.raises(ApiResponseError) as exc_info:
                await client.roles.get_role("missing", ACCOUNT)

        assert exc_info.value.status_code == 404
        assert exc_info.value.codes == [1003]
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_blank_role_id(self, make_client, make_recorder) -> None:
        recorder = make_recorder(lambda r: httpx.Response(200))
        async with make_client(recorder) as client:
            with pytest.raises(InvalidArgumentError):
                await client.roles.get_role("  ", ACCOUNT)

        assert recorder.requests == []
