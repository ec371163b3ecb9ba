# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""Lazy multi-page iteration."""

from .cursor import PageCursor, PageFetcher, collect, find_first

__all__ = ["PageCursor", "PageFetcher", "collect", "find_first"]
