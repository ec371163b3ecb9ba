# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Typed resource APIs built on the client core."""

from .accounts import (
    Account,
    AccountManagedBy,
    AccountsApi,
    AccountSettings,
    AccountType,
    ListAccountsFilter,
)
from .base import ResourceApi
from .dns import (
    BatchDeleteOperation,
    BatchDnsRecordsRequest,
    BatchDnsRecordsResult,
    BatchPatchOperation,
    BatchPutOperation,
    CreateDnsRecordRequest,
    DnsApi,
    DnsRecord,
    DnsRecordMeta,
    DnsRecordSettings,
    DnsRecordType,
    ListDnsRecordsFilter,
    PatchDnsRecordRequest,
    UpdateDnsRecordRequest,
)
from .roles import AccountRole, ListRolesFilter, PermissionGrant, RolePermissions, RolesApi
from .turnstile import (
    ClearanceLevel,
    CreateWidgetRequest,
    ListWidgetsFilter,
    RotateWidgetSecretRequest,
    RotateWidgetSecretResult,
    TurnstileApi,
    TurnstileOrderField,
    TurnstileWidget,
    UpdateWidgetRequest,
    WidgetMode,
)

__all__ = [
    "Account",
    "AccountManagedBy",
    "AccountRole",
    "AccountSettings",
    "AccountType",
    "AccountsApi",
    "BatchDeleteOperation",
    "BatchDnsRecordsRequest",
    "BatchDnsRecordsResult",
    "BatchPatchOperation",
    "BatchPutOperation",
    "ClearanceLevel",
    "CreateDnsRecordRequest",
    "CreateWidgetRequest",
    "DnsApi",
    "DnsRecord",
    "DnsRecordMeta",
    "DnsRecordSettings",
    "DnsRecordType",
    "ListAccountsFilter",
    "ListDnsRecordsFilter",
    "ListRolesFilter",
    "ListWidgetsFilter",
    "PatchDnsRecordRequest",
    "PermissionGrant",
    "ResourceApi",
    "RolePermissions",
    "RolesApi",
    "RotateWidgetSecretRequest",
    "RotateWidgetSecretResult",
    "TurnstileApi",
    "TurnstileOrderField",
    "TurnstileWidget",
    "UpdateDnsRecordRequest",
    "UpdateWidgetRequest",
    "WidgetMode",
]
