# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Explicit "not supplied" marker for partial-update payloads.

``None`` means "set this field to null"; ``UNSET`` means "the caller did
not mention this field" and the field is left out of the request body.

Example:
    >>> from cfapi.types.unset import UNSET, is_unset
    >>> is_unset(UNSET)
    True
    >>> is_unset(None)
    False
"""

from __future__ import annotations

from enum import Enum
from typing import Final, Literal, TypeVar, Union

T = TypeVar("T")


class _UnsetType(Enum):
    """Single-member enum so the sentinel survives copy and pickle."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _UnsetType.UNSET
"""The singleton marking a field the caller did not supply."""

UnsetType = Literal[_UnsetType.UNSET]

Maybe = Union[T, UnsetType]
"""Field annotation for optional body fields: ``content: Maybe[str] = UNSET``."""


def is_unset(value: object) -> bool:
    """Return True if ``value`` is the UNSET sentinel."""
    return value is UNSET


__all__ = ["UNSET", "Maybe", "UnsetType", "is_unset"]
