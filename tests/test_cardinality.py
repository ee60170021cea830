"""Tests for cardinality resolution."""

from __future__ import annotations

import pytest

from xsd_typegen.schema.cardinality import (
    DefaultPolicy,
    FieldShape,
    is_repeated,
    parse_max_occurs,
    parse_min_occurs,
    resolve_attribute_cardinality,
    resolve_cardinality,
)
from xsd_typegen.schema.model import UNBOUNDED


class TestResolveCardinality:
    """Tests for element field shapes."""

    def test_defaults_are_required(self) -> None:
        cardinality = resolve_cardinality()
        assert cardinality.shape is FieldShape.REQUIRED
        assert cardinality.default is DefaultPolicy.NONE
        assert not cardinality.has_default

    def test_min_zero_is_optional(self) -> None:
        cardinality = resolve_cardinality(min_occurs=0)
        assert cardinality.shape is FieldShape.OPTIONAL
        assert cardinality.default is DefaultPolicy.NULL

    def test_nillable_is_optional(self) -> None:
        cardinality = resolve_cardinality(nillable=True)
        assert cardinality.shape is FieldShape.OPTIONAL
        assert cardinality.default is DefaultPolicy.NULL

    def test_unbounded_optional_defaults_to_empty(self) -> None:
        cardinality = resolve_cardinality(min_occurs=0, max_occurs=UNBOUNDED)
        assert cardinality.shape is FieldShape.REPEATED
        assert cardinality.default is DefaultPolicy.EMPTY_SEQUENCE

    def test_bounded_repetition(self) -> None:
        """Test maxOccurs above one is repeated, with no default when required."""
        cardinality = resolve_cardinality(min_occurs=1, max_occurs=10)
        assert cardinality.shape is FieldShape.REPEATED
        assert cardinality.default is DefaultPolicy.NONE

    def test_repetition_dominates_nillable(self) -> None:
        """Test a repeated nillable element is never an optional sequence."""
        cardinality = resolve_cardinality(min_occurs=0, max_occurs=UNBOUNDED, nillable=True)
        assert cardinality.shape is FieldShape.REPEATED
        assert cardinality.default is DefaultPolicy.EMPTY_SEQUENCE

    def test_max_one_is_not_repeated(self) -> None:
        assert resolve_cardinality(min_occurs=1, max_occurs=1).shape is FieldShape.REQUIRED

    def test_max_zero_is_not_repeated(self) -> None:
        assert resolve_cardinality(min_occurs=0, max_occurs=0).shape is FieldShape.OPTIONAL


class TestAttributeCardinality:
    """Tests for attribute field shapes."""

    def test_required(self) -> None:
        assert resolve_attribute_cardinality("required").shape is FieldShape.REQUIRED

    @pytest.mark.parametrize("use", ["optional", "prohibited", None])
    def test_anything_else_is_optional(self, use: str | None) -> None:
        cardinality = resolve_attribute_cardinality(use)
        assert cardinality.shape is FieldShape.OPTIONAL
        assert cardinality.default is DefaultPolicy.NULL


class TestOccursParsing:
    """Tests for minOccurs/maxOccurs attribute values."""

    def test_absent_values_default_to_one(self) -> None:
        assert parse_min_occurs(None) == 1
        assert parse_max_occurs(None) == 1

    def test_unbounded(self) -> None:
        assert parse_max_occurs("unbounded") is UNBOUNDED

    def test_whitespace_is_stripped(self) -> None:
        assert parse_max_occurs(" 5 ") == 5
        assert parse_min_occurs(" 0") == 0

    @pytest.mark.parametrize("value", ["-1", "many", ""])
    def test_invalid_max_occurs(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_max_occurs(value)

    @pytest.mark.parametrize("value", ["-2", "unbounded"])
    def test_invalid_min_occurs(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_min_occurs(value)

    def test_is_repeated(self) -> None:
        assert is_repeated(UNBOUNDED)
        assert is_repeated(2)
        assert not is_repeated(1)
