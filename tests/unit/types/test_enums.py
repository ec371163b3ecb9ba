# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Unit tests for ExtensibleEnum.

Tests cover:
- Known constants converted to instances
- Known values canonicalized regardless of input case
- Unknown values accepted and round-tripped
- Pydantic validation and serialization
"""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from cfapi.types.enums import ExtensibleEnum, SortDirection


class Color(ExtensibleEnum):
    RED = "red"
    DARK_BLUE = "dark-blue"


class Paint(BaseModel):
    color: Color


class TestExtensibleEnumConstants:
    def test_constants_are_instances(self) -> None:
        assert isinstance(Color.RED, Color)
        assert isinstance(Color.RED, str)

    def test_value_is_wire_string(self) -> None:
        assert Color.DARK_BLUE.value == "dark-blue"
        assert str(Color.DARK_BLUE) == "dark-blue"

    def test_known_values_in_declaration_order(self) -> None:
        assert Color.known_values() == (Color.RED, Color.DARK_BLUE)

    def test_repr(self) -> None:
        assert repr(Color.RED) == "Color('red')"


class TestExtensibleEnumComparison:
    def test_known_value_canonicalized(self) -> None:
        assert Color("RED") == Color.RED
        assert Color("RED").value == "red"
        assert Color("Red") == "red"

    def test_equal_values_hash_equal(self) -> None:
        assert hash(Color("RED")) == hash(Color.RED) == hash("red")
        assert Color("rEd") in {Color.RED}
        assert Color.RED in {"red"}
        assert "red" in {Color.RED}

    def test_plain_string_comparison_is_exact(self) -> None:
        """Plain strings compare like str, so eq and hash stay consistent."""
        assert Color.RED == "red"
        assert Color.RED != "Red"

    def test_not_equal(self) -> None:
        assert Color.RED != Color.DARK_BLUE
        assert Color.RED != "blue"

    def test_non_string_comparison_is_false(self) -> None:
        assert Color.RED != 1


class TestExtensibleEnumUnknownValues:
    def test_unknown_value_accepted(self) -> None:
        color = Color("ultraviolet")
        assert color.value == "ultraviolet"
        assert not color.is_known

    def test_known_value_recognized_case_insensitively(self) -> None:
        assert Color("DARK-BLUE").is_known

    def test_unknown_spelling_preserved(self) -> None:
        assert Color("Ultra-Violet").value == "Ultra-Violet"
        assert Color("Ultra-Violet") != Color("ultra-violet")

    def test_non_string_rejected(self) -> None:
        with pytest.raises(TypeError):
            Color(42)  # type: ignore[arg-type]


class TestExtensibleEnumPydantic:
    def test_validates_known_value(self) -> None:
        paint = Paint.model_validate({"color": "red"})
        assert paint.color == Color.RED
        assert isinstance(paint.color, Color)

    def test_validates_known_value_any_case(self) -> None:
        assert Paint.model_validate({"color": "RED"}).model_dump() == {"color": "red"}

    def test_validates_unknown_value(self) -> None:
        paint = Paint.model_validate({"color": "infrared"})
        assert paint.color.value == "infrared"
        assert not paint.color.is_known

    def test_serializes_as_plain_string(self) -> None:
        assert Paint(color=Color("Teal")).model_dump() == {"color": "Teal"}


class TestSortDirection:
    def test_values(self) -> None:
        assert SortDirection.ASC.value == "asc"
        assert SortDirection("desc") is SortDirection.DESC
