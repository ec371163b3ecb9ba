# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Account roles (read-only)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..pagination.cursor import PageCursor
from ..types.models import PagePaginatedResult
from ..types.request import QueryFilter
from .base import ResourceApi

ROLES = "accounts/{account_id}/roles"
ROLE = "accounts/{account_id}/roles/{role_id}"


class PermissionGrant(BaseModel):
    model_config = ConfigDict(extra="ignore")

    read: bool = False
    write: bool = False


class RolePermissions(BaseModel):
    """Grants per permission area. Areas the API adds later are ignored."""

    model_config = ConfigDict(extra="ignore")

    analytics: PermissionGrant | None = None
    billing: PermissionGrant | None = None
    cache_purge: PermissionGrant | None = None
    dns: PermissionGrant | None = None
    dns_records: PermissionGrant | None = None
    lb: PermissionGrant | None = None
    logs: PermissionGrant | None = None
    organization: PermissionGrant | None = None
    ssl: PermissionGrant | None = None
    waf: PermissionGrant | None = None
    zone_settings: PermissionGrant | None = None
    zones: PermissionGrant | None = None


class AccountRole(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    description: str = ""
    permissions: RolePermissions = Field(default_factory=RolePermissions)


class ListRolesFilter(QueryFilter):
    """Only page and per_page."""


class RolesApi(ResourceApi):
    async def list_roles(
        self,
        account_id: str | None = None,
        filters: ListRolesFilter | None = None,
    ) -> PagePaginatedResult[AccountRole]:
        return await self._get_page(
            ROLES, self._account(account_id), item_type=AccountRole, query=filters
        )

    def list_all_roles(
        self,
        account_id: str | None = None,
        filters: ListRolesFilter | None = None,
    ) -> PageCursor[AccountRole]:
        return self._paginate(
            ROLES, self._account(account_id), item_type=AccountRole, query=filters
        )

    async def get_role(self, role_id: str, account_id: str | None = None) -> AccountRole:
        return await self._get(
            ROLE, self._account(account_id), role_id, result_type=AccountRole
        )


__all__ = [
    "AccountRole",
    "ListRolesFilter",
    "PermissionGrant",
    "RolePermissions",
    "RolesApi",
]
