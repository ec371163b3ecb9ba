# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Protocol definitions for cfapi components.

Available protocols:
- ClientProtocol: Interface typed resource APIs use to reach the client core
"""

from .client import ClientProtocol

__all__ = ["ClientProtocol"]
