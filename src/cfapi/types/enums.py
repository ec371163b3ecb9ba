# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Enumerations shared by request filters and models.

Closed sets (sort direction) are plain ``Enum`` classes. Open-ended wire
values that the API may extend at any time (record types, widget modes)
derive from ``ExtensibleEnum``: a ``str`` subclass with named constants for
the known values that still accepts any other string.

Example:
    >>> class Color(ExtensibleEnum):
    ...     RED = "red"
    >>> Color("RED") == Color.RED
    True
    >>> Color.RED in {"red"}
    True
    >>> Color("ultraviolet").is_known
    False
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

E = TypeVar("E", bound="ExtensibleEnum")


class ExtensibleEnum(str):
    """
    Forward-compatible string enumeration.

    Subclasses declare known values as upper-case string class attributes;
    these are converted to instances of the subclass when the class is
    created. A value matching a declared constant in any case is stored in
    the declared spelling, so equality and hashing are plain ``str`` ones
    and agree with each other. Unknown values keep the spelling they were
    constructed with.
    """

    __slots__ = ()

    _canonical: ClassVar[dict[str, str]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        declared = {
            name: value
            for name, value in vars(cls).items()
            if name.isupper() and not name.startswith("_") and isinstance(value, str)
        }
        # Built before conversion so the constants themselves go through it
        cls._canonical = {
            **cls._canonical,
            **{str(value).casefold(): str(value) for value in declared.values()},
        }
        for name, value in declared.items():
            setattr(cls, name, cls(value))

    def __new__(cls: type[E], value: str) -> E:
        if not isinstance(value, str):
            raise TypeError(
                f"{cls.__name__} value must be a string, got {type(value).__name__}"
            )
        return super().__new__(cls, cls._canonical.get(value.casefold(), value))

    @property
    def value(self) -> str:
        """The wire string."""
        return str.__str__(self)

    @property
    def is_known(self) -> bool:
        """True if this value matches one of the declared constants."""
        return self in type(self).known_values()

    @classmethod
    def known_values(cls: type[E]) -> tuple[E, ...]:
        """Declared constants, in declaration order."""
        return tuple(
            value
            for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, cls)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value!r})"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_after_validator_function(
            cls,
            core_schema.str_schema(),
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="always"
            ),
        )


class SortDirection(Enum):
    """Sort direction for list endpoints."""

    ASC = "asc"
    DESC = "desc"


__all__ = ["ExtensibleEnum", "SortDirection"]
