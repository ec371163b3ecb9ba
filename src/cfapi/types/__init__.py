# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Data model types for requests, responses and enumerations."""

from .enums import ExtensibleEnum, SortDirection
from .models import ApiError, ApiMessage, PageInfo, PagePaginatedResult, ResponseEnvelope
from .request import HttpMethod, QueryFilter, RequestDescriptor
from .unset import UNSET, Maybe, UnsetType, is_unset

__all__ = [
    "UNSET",
    "ApiError",
    "ApiMessage",
    "ExtensibleEnum",
    "HttpMethod",
    "Maybe",
    "PageInfo",
    "PagePaginatedResult",
    "QueryFilter",
    "RequestDescriptor",
    "ResponseEnvelope",
    "SortDirection",
    "UnsetType",
    "is_unset",
]
