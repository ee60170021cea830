"""Intermediate representation of generated types.

The builder produces three kinds of type nodes, consumed by the writers in
``xsd_typegen.emit``:
- RecordType: a record with named fields
- EnumType: an enumeration of literals
- ConstrainedScalarType: a wrapper around a canonical type with constraints

The constraint vocabulary (Pattern, Size, Range, Digits) is defined in
``xsd_typegen.schema.constraints`` and re-exported here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from xsd_typegen.schema.cardinality import DefaultPolicy, FieldShape
from xsd_typegen.schema.constraints import (
    Bound,
    Constraint,
    DigitsConstraint,
    PatternConstraint,
    RangeConstraint,
    SizeConstraint,
)
from xsd_typegen.schema.types import CanonicalType

__all__ = [
    "Bound",
    "Constraint",
    "ConstrainedScalarType",
    "DigitsConstraint",
    "EnumMember",
    "EnumType",
    "FieldSpec",
    "IRType",
    "PatternConstraint",
    "RangeConstraint",
    "RecordType",
    "SizeConstraint",
]


@dataclass(frozen=True)
class FieldSpec:
    """A field of a record type."""

    name: str
    type: CanonicalType
    shape: FieldShape = FieldShape.REQUIRED
    default: DefaultPolicy = DefaultPolicy.NONE
    source: str = "element"  # element|attribute

    @property
    def is_required(self) -> bool:
        return self.shape is FieldShape.REQUIRED

    @property
    def is_optional(self) -> bool:
        return self.shape is FieldShape.OPTIONAL

    @property
    def is_repeated(self) -> bool:
        return self.shape is FieldShape.REPEATED


@dataclass(frozen=True)
class RecordType:
    """A record generated from a complex type."""

    name: str
    fields: tuple[FieldSpec, ...] = ()

    def get_field(self, name: str) -> FieldSpec | None:
        for spec in self.fields:
            if spec.name == name:
                return spec
        return None

    @property
    def field_names(self) -> list[str]:
        return [spec.name for spec in self.fields]


@dataclass(frozen=True)
class EnumMember:
    """An enumeration constant and the literal it stands for."""

    identifier: str
    literal: str


@dataclass(frozen=True)
class EnumType:
    """An enumeration generated from enumeration facets."""

    name: str
    members: tuple[EnumMember, ...] = ()

    @property
    def identifiers(self) -> list[str]:
        return [member.identifier for member in self.members]

    @property
    def literals(self) -> list[str]:
        return [member.literal for member in self.members]


@dataclass(frozen=True)
class ConstrainedScalarType:
    """A wrapper type generated from a restriction with constraining facets."""

    name: str
    underlying: CanonicalType
    constraints: tuple[Constraint, ...] = ()

    def constraints_of(self, constraint_type: type) -> list[Constraint]:
        """Get the constraints of a given class, in detection order."""
        return [c for c in self.constraints if isinstance(c, constraint_type)]


IRType = Union[RecordType, EnumType, ConstrainedScalarType]
