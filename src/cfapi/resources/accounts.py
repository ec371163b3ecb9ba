# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Accounts visible to the token."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from ..pagination.cursor import PageCursor
from ..types.enums import ExtensibleEnum, SortDirection
from ..types.models import PagePaginatedResult
from ..types.request import QueryFilter
from .base import ResourceApi

ACCOUNTS = "accounts"
ACCOUNT = "accounts/{account_id}"


class AccountType(ExtensibleEnum):
    STANDARD = "standard"
    ENTERPRISE = "enterprise"


class AccountManagedBy(BaseModel):
    """Parent organization of a managed account."""

    model_config = ConfigDict(extra="ignore")

    parent_org_id: str | None = None
    parent_org_name: str | None = None


class AccountSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    abuse_contact_email: str | None = None
    enforce_twofactor: bool = False


class Account(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: AccountType | None = None
    created_on: datetime | None = None
    managed_by: AccountManagedBy | None = None
    settings: AccountSettings | None = None


class ListAccountsFilter(QueryFilter):
    name: str | None = None
    direction: SortDirection | None = None


class AccountsApi(ResourceApi):
    async def list_accounts(
        self, filters: ListAccountsFilter | None = None
    ) -> PagePaginatedResult[Account]:
        return await self._get_page(ACCOUNTS, item_type=Account, query=filters)

    def list_all_accounts(
        self, filters: ListAccountsFilter | None = None
    ) -> PageCursor[Account]:
        return self._paginate(ACCOUNTS, item_type=Account, query=filters)

    async def get_account(self, account_id: str) -> Account:
        """Fetch one account. The id is required; no client default applies."""
        return await self._get(ACCOUNT, account_id, result_type=Account)


__all__ = [
    "Account",
    "AccountManagedBy",
    "AccountSettings",
    "AccountType",
    "AccountsApi",
    "ListAccountsFilter",
]
