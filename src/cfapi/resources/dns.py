# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
DNS records of a zone.

Endpoints live under ``zones/{zone_id}/dns_records``. Responses are pydantic
models; request bodies are dataclasses whose optional fields default to
``UNSET`` so that a partial update sends only the fields the caller set.

Example:
    >>> record = await client.dns.find_record_by_name(zone_id, "www.example.com")
    >>> await client.dns.patch_record(
    ...     zone_id, record.id, PatchDnsRecordRequest(content="203.0.113.7")
    ... )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..encoding.paths import require_identifier
from ..pagination.cursor import PageCursor, find_first
from ..types.enums import ExtensibleEnum, SortDirection
from ..types.models import PagePaginatedResult
from ..types.request import QueryFilter
from ..types.unset import UNSET, Maybe
from .base import ResourceApi

logger = logging.getLogger(__name__)

RECORDS = "zones/{zone_id}/dns_records"
RECORD = "zones/{zone_id}/dns_records/{record_id}"
BATCH = "zones/{zone_id}/dns_records/batch"
EXPORT = "zones/{zone_id}/dns_records/export"
SCAN_TRIGGER = "zones/{zone_id}/dns_records/scan/trigger"


class DnsRecordType(ExtensibleEnum):
    """DNS record types. Types the API adds later are still accepted."""

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    MX = "MX"
    TXT = "TXT"
    NS = "NS"
    SOA = "SOA"
    PTR = "PTR"
    SRV = "SRV"
    HTTPS = "HTTPS"
    SVCB = "SVCB"
    URI = "URI"
    NAPTR = "NAPTR"
    CAA = "CAA"
    DS = "DS"
    DNSKEY = "DNSKEY"
    TLSA = "TLSA"
    SSHFP = "SSHFP"
    CERT = "CERT"
    SMIMEA = "SMIMEA"


# === Response models ===


class DnsRecordMeta(BaseModel):
    model_config = ConfigDict(extra="ignore")

    auto_added: bool | None = None
    source: str | None = None


class DnsRecordSettings(BaseModel):
    """Per-record settings. Only the fields you set are sent."""

    model_config = ConfigDict(extra="ignore")

    ipv4_only: bool | None = None
    ipv6_only: bool | None = None


class DnsRecord(BaseModel):
    """A DNS record as returned by the API."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    type: DnsRecordType
    content: str = ""
    proxied: bool = False
    proxiable: bool = False
    ttl: int = 1
    created_on: datetime | None = None
    modified_on: datetime | None = None
    comment: str | None = None
    tags: list[str] = Field(default_factory=list)
    priority: int | None = None
    meta: DnsRecordMeta | None = None
    settings: DnsRecordSettings | None = None


class BatchDnsRecordsResult(BaseModel):
    """Records touched by a batch call, grouped by operation."""

    model_config = ConfigDict(extra="ignore")

    deletes: list[DnsRecord] = Field(default_factory=list)
    patches: list[DnsRecord] = Field(default_factory=list)
    puts: list[DnsRecord] = Field(default_factory=list)
    posts: list[DnsRecord] = Field(default_factory=list)


# === Request bodies ===


@dataclass
class CreateDnsRecordRequest:
    """Body for creating a record. TTL 1 means automatic."""

    type: DnsRecordType | str
    name: str
    content: str
    ttl: int = 1
    proxied: Maybe[bool] = UNSET
    comment: Maybe[str | None] = UNSET
    tags: Maybe[list[str]] = UNSET
    priority: Maybe[int] = UNSET
    settings: Maybe[DnsRecordSettings] = UNSET


@dataclass
class UpdateDnsRecordRequest:
    """Body for a full replacement (PUT) of a record."""

    type: DnsRecordType | str
    name: str
    content: str
    ttl: int = 1
    proxied: Maybe[bool] = UNSET
    comment: Maybe[str | None] = UNSET
    tags: Maybe[list[str]] = UNSET
    priority: Maybe[int] = UNSET
    settings: Maybe[DnsRecordSettings] = UNSET


@dataclass
class PatchDnsRecordRequest:
    """
    Body for a partial update (PATCH).

    Only fields that are not ``UNSET`` are sent. Passing ``None`` sends an
    explicit null, which clears the field on the server (e.g. ``comment``).
    """

    type: Maybe[DnsRecordType | str] = UNSET
    name: Maybe[str] = UNSET
    content: Maybe[str] = UNSET
    ttl: Maybe[int] = UNSET
    proxied: Maybe[bool] = UNSET
    comment: Maybe[str | None] = UNSET
    tags: Maybe[list[str]] = UNSET
    priority: Maybe[int] = UNSET
    settings: Maybe[DnsRecordSettings] = UNSET


@dataclass
class BatchDeleteOperation:
    id: str


@dataclass
class BatchPatchOperation:
    id: str
    type: Maybe[DnsRecordType | str] = UNSET
    name: Maybe[str] = UNSET
    content: Maybe[str] = UNSET
    ttl: Maybe[int] = UNSET
    proxied: Maybe[bool] = UNSET
    comment: Maybe[str | None] = UNSET
    tags: Maybe[list[str]] = UNSET


@dataclass
class BatchPutOperation:
    id: str
    type: DnsRecordType | str
    name: str
    content: str
    ttl: int = 1
    proxied: Maybe[bool] = UNSET
    comment: Maybe[str | None] = UNSET


@dataclass
class BatchDnsRecordsRequest:
    """
    Several record changes applied in one call.

    The server applies deletes, then patches, then puts, then posts. Each
    list is optional and omitted from the body when left unset.
    """

    deletes: Maybe[list[BatchDeleteOperation]] = UNSET
    patches: Maybe[list[BatchPatchOperation]] = UNSET
    puts: Maybe[list[BatchPutOperation]] = UNSET
    posts: Maybe[list[CreateDnsRecordRequest]] = UNSET


# === Filters ===


class ListDnsRecordsFilter(QueryFilter):
    """Filter for listing records. ``record_type`` is sent as ``type``."""

    record_type: DnsRecordType | None = Field(default=None, alias="type")
    name: str | None = None
    content: str | None = None
    proxied: bool | None = None
    order: str | None = None
    direction: SortDirection | None = None


class DnsApi(ResourceApi):
    """DNS record operations."""

    async def list_records(
        self, zone_id: str, filters: ListDnsRecordsFilter | None = None
    ) -> PagePaginatedResult[DnsRecord]:
        """Fetch one page of records."""
        return await self._get_page(
            RECORDS, zone_id, item_type=DnsRecord, query=filters
        )

    def list_all_records(
        self, zone_id: str, filters: ListDnsRecordsFilter | None = None
    ) -> PageCursor[DnsRecord]:
        """Iterate every record matching the filter, fetching pages lazily."""
        return self._paginate(RECORDS, zone_id, item_type=DnsRecord, query=filters)

    async def get_record(self, zone_id: str, record_id: str) -> DnsRecord:
        return await self._get(RECORD, zone_id, record_id, result_type=DnsRecord)

    async def find_record_by_name(
        self,
        zone_id: str,
        hostname: str,
        record_type: DnsRecordType | str | None = None,
    ) -> DnsRecord | None:
        """
        Return the first record named ``hostname``, or None.

        The name (and type, if given) narrow the server-side listing, so
        usually only one page is fetched. Matching is case-insensitive.
        """
        require_identifier("hostname", hostname)
        if record_type is not None:
            record_type = DnsRecordType(record_type)
        query = ListDnsRecordsFilter(name=hostname, record_type=record_type)
        wanted = hostname.rstrip(".").casefold()

        def matches(record: DnsRecord) -> bool:
            if record.name.rstrip(".").casefold() != wanted:
                return False
            return record_type is None or record.type == record_type

        return await find_first(self.list_all_records(zone_id, query), matches)

    async def create_record(
        self, zone_id: str, request: CreateDnsRecordRequest
    ) -> DnsRecord:
        self._require_body("request", request)
        return await self._post(RECORDS, zone_id, body=request, result_type=DnsRecord)

    async def create_cname_record(
        self,
        zone_id: str,
        name: str,
        target: str,
        *,
        proxied: bool = False,
        ttl: int = 1,
    ) -> DnsRecord:
        """Create a CNAME record pointing ``name`` at ``target``."""
        require_identifier("name", name)
        require_identifier("target", target)
        request = CreateDnsRecordRequest(
            type=DnsRecordType.CNAME,
            name=name,
            content=target,
            ttl=ttl,
            proxied=proxied,
        )
        return await self.create_record(zone_id, request)

    async def update_record(
        self, zone_id: str, record_id: str, request: UpdateDnsRecordRequest
    ) -> DnsRecord:
        """Replace a record (PUT); every field of the record is overwritten."""
        self._require_body("request", request)
        return await self._put(
            RECORD, zone_id, record_id, body=request, result_type=DnsRecord
        )

    async def patch_record(
        self, zone_id: str, record_id: str, request: PatchDnsRecordRequest
    ) -> DnsRecord:
        """Change only the fields set on ``request`` (PATCH)."""
        self._require_body("request", request)
        return await self._patch(
            RECORD, zone_id, record_id, body=request, result_type=DnsRecord
        )

    async def delete_record(self, zone_id: str, record_id: str) -> None:
        await self._delete(RECORD, zone_id, record_id)

    async def batch_records(
        self, zone_id: str, request: BatchDnsRecordsRequest
    ) -> BatchDnsRecordsResult:
        self._require_body("request", request)
        return await self._post(
            BATCH, zone_id, body=request, result_type=BatchDnsRecordsResult
        )

    async def export_records(self, zone_id: str) -> str:
        """Export the zone's records as a BIND zone file (plain text)."""
        return await self._get_text(EXPORT, zone_id)

    async def trigger_record_scan(self, zone_id: str) -> None:
        """Ask the API to scan the zone for records to import."""
        await self._post(SCAN_TRIGGER, zone_id)
        logger.debug(f"Triggered DNS record scan for zone {zone_id}")


__all__ = [
    "BatchDeleteOperation",
    "BatchDnsRecordsRequest",
    "BatchDnsRecordsResult",
    "BatchPatchOperation",
    "BatchPutOperation",
    "CreateDnsRecordRequest",
    "DnsApi",
    "DnsRecord",
    "DnsRecordMeta",
    "DnsRecordSettings",
    "DnsRecordType",
    "ListDnsRecordsFilter",
    "PatchDnsRecordRequest",
    "UpdateDnsRecordRequest",
]
