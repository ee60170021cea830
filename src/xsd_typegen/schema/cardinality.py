"""Resolution of occurrence constraints into field shapes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from xsd_typegen.schema.model import UNBOUNDED, MaxOccurs


class FieldShape(Enum):
    """Cardinality classification of a generated field."""

    REQUIRED = "required"
    OPTIONAL = "optional"
    REPEATED = "repeated"


class DefaultPolicy(Enum):
    """Implicit default value of a generated field."""

    NONE = "none"  # No default, the value must be supplied
    NULL = "null"  # Absent value
    EMPTY_SEQUENCE = "empty_sequence"


@dataclass(frozen=True)
class Cardinality:
    """Resolved shape and default policy of a field."""

    shape: FieldShape
    default: DefaultPolicy = DefaultPolicy.NONE

    @property
    def has_default(self) -> bool:
        return self.default is not DefaultPolicy.NONE


REQUIRED = Cardinality(FieldShape.REQUIRED)
OPTIONAL = Cardinality(FieldShape.OPTIONAL, DefaultPolicy.NULL)


def parse_max_occurs(value: str | None) -> MaxOccurs:
    """Parse a maxOccurs attribute value.

    Raises:
        ValueError: If the value is neither "unbounded" nor a non-negative integer.
    """
    if value is None:
        return 1
    value = value.strip()
    if value == UNBOUNDED.value:
        return UNBOUNDED
    occurs = int(value)
    if occurs < 0:
        raise ValueError(f"maxOccurs must not be negative: {value}")
    return occurs


def parse_min_occurs(value: str | None) -> int:
    """Parse a minOccurs attribute value.

    Raises:
        ValueError: If the value is not a non-negative integer.
    """
    if value is None:
        return 1
    occurs = int(value.strip())
    if occurs < 0:
        raise ValueError(f"minOccurs must not be negative: {value}")
    return occurs


def is_repeated(max_occurs: MaxOccurs) -> bool:
    """Check whether maxOccurs allows more than one occurrence."""
    return max_occurs is UNBOUNDED or max_occurs > 1


def resolve_cardinality(
    min_occurs: int = 1,
    max_occurs: MaxOccurs = 1,
    nillable: bool = False,
) -> Cardinality:
    """Decide the shape of a local element field.

    Repetition dominates nullability: a repeated, nillable element is
    REPEATED, never an optional sequence. A repeated element only defaults
    to an empty sequence when minOccurs is 0.

    Args:
        min_occurs: The element's minOccurs.
        max_occurs: The element's maxOccurs, or UNBOUNDED.
        nillable: The element's nillable flag.

    Returns:
        The resolved Cardinality.
    """
    if is_repeated(max_occurs):
        if min_occurs == 0:
            return Cardinality(FieldShape.REPEATED, DefaultPolicy.EMPTY_SEQUENCE)
        return Cardinality(FieldShape.REPEATED)

    if min_occurs == 0 or nillable:
        return OPTIONAL

    return REQUIRED


def resolve_attribute_cardinality(use: str | None) -> Cardinality:
    """Decide the shape of an attribute field; only use="required" is required."""
    if use == "required":
        return REQUIRED
    return OPTIONAL
