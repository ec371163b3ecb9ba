# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Turnstile widgets of an account.

Endpoints live under ``accounts/{account_id}/challenges/widgets``. When an
operation is called without an account id, the client's default
``account_id`` is used.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from ..pagination.cursor import PageCursor
from ..types.enums import ExtensibleEnum, SortDirection
from ..types.models import PagePaginatedResult
from ..types.request import QueryFilter
from ..types.unset import UNSET, Maybe
from .base import ResourceApi

WIDGETS = "accounts/{account_id}/challenges/widgets"
WIDGET = "accounts/{account_id}/challenges/widgets/{sitekey}"
ROTATE_SECRET = "accounts/{account_id}/challenges/widgets/{sitekey}/rotate_secret"


class WidgetMode(ExtensibleEnum):
    INVISIBLE = "invisible"
    MANAGED = "managed"
    NON_INTERACTIVE = "non-interactive"


class ClearanceLevel(ExtensibleEnum):
    """Clearance cookie level issued when a challenge is solved."""

    NO_CLEARANCE = "no_clearance"
    JSCHALLENGE = "jschallenge"
    MANAGED = "managed"
    INTERACTIVE = "interactive"


class TurnstileOrderField(ExtensibleEnum):
    ID = "id"
    SITEKEY = "sitekey"
    NAME = "name"
    CREATED_ON = "created_on"
    MODIFIED_ON = "modified_on"


class TurnstileWidget(BaseModel):
    """
    A Turnstile widget.

    ``secret`` is only populated on create, get and secret rotation.
    """

    model_config = ConfigDict(extra="ignore")

    sitekey: str
    name: str
    mode: WidgetMode
    domains: list[str] = Field(default_factory=list)
    created_on: datetime | None = None
    modified_on: datetime | None = None
    bot_fight_mode: bool = False
    clearance_level: ClearanceLevel | None = None
    ephemeral_id: bool = False
    offlabel: bool = False
    region: str | None = None
    secret: str | None = None


class RotateWidgetSecretResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    secret: str


@dataclass
class CreateWidgetRequest:
    name: str
    domains: list[str]
    mode: WidgetMode | str
    bot_fight_mode: Maybe[bool] = UNSET
    clearance_level: Maybe[ClearanceLevel | str] = UNSET
    ephemeral_id: Maybe[bool] = UNSET
    offlabel: Maybe[bool] = UNSET
    region: Maybe[str] = UNSET


@dataclass
class UpdateWidgetRequest:
    """Full replacement of a widget's configuration."""

    name: str
    domains: list[str]
    mode: WidgetMode | str
    bot_fight_mode: Maybe[bool] = UNSET
    clearance_level: Maybe[ClearanceLevel | str] = UNSET


@dataclass
class RotateWidgetSecretRequest:
    """
    Attributes:
        invalidate_immediately: If False the previous secret stays valid
            for a grace period.
    """

    invalidate_immediately: bool = False


class ListWidgetsFilter(QueryFilter):
    order: TurnstileOrderField | None = None
    direction: SortDirection | None = None


class TurnstileApi(ResourceApi):
    """Turnstile widget operations."""

    async def list_widgets(
        self,
        account_id: str | None = None,
        filters: ListWidgetsFilter | None = None,
    ) -> PagePaginatedResult[TurnstileWidget]:
        return await self._get_page(
            WIDGETS,
            self._account(account_id),
            item_type=TurnstileWidget,
            query=filters,
        )

    def list_all_widgets(
        self,
        account_id: str | None = None,
        filters: ListWidgetsFilter | None = None,
    ) -> PageCursor[TurnstileWidget]:
        return self._paginate(
            WIDGETS,
            self._account(account_id),
            item_type=TurnstileWidget,
            query=filters,
        )

    async def get_widget(
        self, sitekey: str, account_id: str | None = None
    ) -> TurnstileWidget:
        return await self._get(
            WIDGET, self._account(account_id), sitekey, result_type=TurnstileWidget
        )

    async def create_widget(
        self, request: CreateWidgetRequest, account_id: str | None = None
    ) -> TurnstileWidget:
        self._require_body("request", request)
        return await self._post(
            WIDGETS,
            self._account(account_id),
            body=request,
            result_type=TurnstileWidget,
        )

    async def update_widget(
        self,
        sitekey: str,
        request: UpdateWidgetRequest,
        account_id: str | None = None,
    ) -> TurnstileWidget:
        self._require_body("request", request)
        return await self._put(
            WIDGET,
            self._account(account_id),
            sitekey,
            body=request,
            result_type=TurnstileWidget,
        )

    async def delete_widget(self, sitekey: str, account_id: str | None = None) -> None:
        await self._delete(WIDGET, self._account(account_id), sitekey)

    async def rotate_secret(
        self,
        sitekey: str,
        request: RotateWidgetSecretRequest | None = None,
        account_id: str | None = None,
    ) -> RotateWidgetSecretResult:
        """
        Issue a new secret for a widget.

        Not retried on transient failures (POST): a retried rotation could
        silently invalidate the secret returned by the first attempt.
        """
        return await self._post(
            ROTATE_SECRET,
            self._account(account_id),
            sitekey,
            body=request or RotateWidgetSecretRequest(),
            result_type=RotateWidgetSecretResult,
        )


__all__ = [
    "ClearanceLevel",
    "CreateWidgetRequest",
    "ListWidgetsFilter",
    "RotateWidgetSecretRequest",
    "RotateWidgetSecretResult",
    "TurnstileApi",
    "TurnstileOrderField",
    "TurnstileWidget",
    "UpdateWidgetRequest",
    "WidgetMode",
]
