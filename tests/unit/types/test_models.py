# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Unit tests for envelope, pagination and request types."""

from __future__ import annotations

import copy

import pytest
from pydantic import ValidationError

from cfapi.types.models import (
    ApiError,
    ApiMessage,
    PageInfo,
    PagePaginatedResult,
    ResponseEnvelope,
)
from cfapi.types.request import HttpMethod, QueryFilter, RequestDescriptor
from cfapi.types.unset import UNSET, is_unset


class TestPageInfoTerminal:
    def test_empty_page_is_terminal(self) -> None:
        info = PageInfo(page=1, per_page=20, total_pages=5)
        assert info.is_terminal(0)

    def test_last_page_is_terminal(self) -> None:
        info = PageInfo(page=3, per_page=1, total_pages=3)
        assert info.is_terminal(1)

    def test_middle_page_is_not_terminal(self) -> None:
        info = PageInfo(page=2, per_page=1, total_pages=3)
        assert not info.is_terminal(1)

    def test_page_beyond_total_is_terminal(self) -> None:
        info = PageInfo(page=4, per_page=1, total_pages=3)
        assert info.is_terminal(1)

    def test_unknown_totals_full_page_is_not_terminal(self) -> None:
        info = PageInfo(page=1, per_page=2, total_pages=0)
        assert not info.is_terminal(2)

    def test_unknown_totals_short_page_is_terminal(self) -> None:
        info = PageInfo(page=1, per_page=2, total_pages=0)
        assert info.is_terminal(1)

    def test_expected_total_pages(self) -> None:
        assert PageInfo(per_page=20, total_count=41).expected_total_pages == 3
        assert PageInfo(per_page=0, total_count=41).expected_total_pages == 0


class TestPagePaginatedResult:
    def test_without_page_info_is_terminal(self) -> None:
        assert PagePaginatedResult(items=[1, 2]).is_terminal

    def test_delegates_to_page_info(self) -> None:
        page = PagePaginatedResult(
            items=["a"], page_info=PageInfo(page=1, per_page=1, total_pages=2)
        )
        assert not page.is_terminal


class TestResponseEnvelope:
    def test_error_summary_keeps_order(self) -> None:
        envelope = ResponseEnvelope[int].model_validate(
            {
                "success": False,
                "errors": [
                    {"code": 1003, "message": "first"},
                    {"code": 1004, "message": "second"},
                ],
            }
        )
        assert envelope.error_summary() == "[1003] first, [1004] second"

    def test_defaults(self) -> None:
        envelope = ResponseEnvelope[int].model_validate({"success": True})
        assert envelope.errors == []
        assert envelope.messages == []
        assert envelope.result is None
        assert envelope.pagination is None

    def test_pagination_alias(self) -> None:
        envelope = ResponseEnvelope[list[int]].model_validate(
            {"success": True, "result": [1], "result_info": {"page": 1, "per_page": 1}}
        )
        assert envelope.pagination is envelope.result_info

    def test_success_is_required(self) -> None:
        with pytest.raises(ValidationError):
            ResponseEnvelope[int].model_validate({"result": 1})

    def test_message_accepts_bare_string(self) -> None:
        assert ApiMessage.model_validate("note").message == "note"

    def test_error_str(self) -> None:
        assert str(ApiError(code=7003, message="bad route")) == "[7003] bad route"


class TestUnset:
    def test_unset_is_falsy_and_distinct_from_none(self) -> None:
        assert not UNSET
        assert is_unset(UNSET)
        assert not is_unset(None)

    def test_unset_survives_copy(self) -> None:
        assert copy.deepcopy(UNSET) is UNSET


class TestHttpMethod:
    @pytest.mark.parametrize("method", ["GET", "HEAD", "OPTIONS", "PUT", "DELETE"])
    def test_idempotent(self, method: str) -> None:
        assert HttpMethod(method).is_idempotent

    @pytest.mark.parametrize("method", ["POST", "PATCH"])
    def test_not_idempotent(self, method: str) -> None:
        assert not HttpMethod(method).is_idempotent


class TestQueryFilter:
    def test_page_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            QueryFilter(page=0)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ValidationError):
            QueryFilter(pages=2)  # type: ignore[call-arg]

    def test_frozen(self) -> None:
        query = QueryFilter(page=1)
        with pytest.raises(ValidationError):
            query.page = 2  # type: ignore[misc]


class TestRequestDescriptor:
    def test_with_query_keeps_everything_else(self) -> None:
        descriptor = RequestDescriptor(
            HttpMethod.GET, "zones/{zone_id}/dns_records", ("z1",), raw_text=True
        )
        updated = descriptor.with_query(QueryFilter(page=2))
        assert updated.query == QueryFilter(page=2)
        assert updated.path_params == ("z1",)
        assert updated.raw_text
        assert descriptor.query is None

    def test_label(self) -> None:
        descriptor = RequestDescriptor(HttpMethod.DELETE, "accounts/{account_id}")
        assert descriptor.label == "DELETE accounts/{account_id}"
