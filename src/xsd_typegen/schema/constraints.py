"""Validation constraints derived from restriction facets.

Defines the constraint vocabulary exposed to code writers:
- PatternConstraint(regex)
- SizeConstraint(min?, max?)
- RangeConstraint(lower?, upper?) with inclusive/exclusive bounds
- DigitsConstraint(integer_digits, fraction_digits)

and the rules deciding which facets apply to which base types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Iterable, Union

from xsd_typegen.errors import DiagnosticKind
from xsd_typegen.schema.model import Facet, FacetKind, QName
from xsd_typegen.schema.types import local_type_name

if TYPE_CHECKING:
    from xsd_typegen.context import GenerationContext


@dataclass(frozen=True)
class PatternConstraint:
    """Value must match a regular expression."""

    regex: str


@dataclass(frozen=True)
class SizeConstraint:
    """Length of the value must lie within [min, max]."""

    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class Bound:
    """One end of a range."""

    value: Decimal
    inclusive: bool = True


@dataclass(frozen=True)
class RangeConstraint:
    """Value must lie between the lower and upper bounds."""

    lower: Bound | None = None
    upper: Bound | None = None


@dataclass(frozen=True)
class DigitsConstraint:
    """Maximum digit counts before and after the decimal point."""

    integer_digits: int
    fraction_digits: int


Constraint = Union[PatternConstraint, SizeConstraint, RangeConstraint, DigitsConstraint]

# Base types that get a constrained scalar
ELIGIBLE_BASE_TYPES = frozenset({"string", "decimal", "dateTime"})

# Facets that make a constrained scalar worth generating
CONSTRAINING_FACETS = frozenset({
    FacetKind.PATTERN,
    FacetKind.MIN_LENGTH,
    FacetKind.MAX_LENGTH,
    FacetKind.LENGTH,
    FacetKind.MIN_INCLUSIVE,
    FacetKind.MAX_INCLUSIVE,
    FacetKind.MIN_EXCLUSIVE,
    FacetKind.MAX_EXCLUSIVE,
    FacetKind.TOTAL_DIGITS,
    FacetKind.FRACTION_DIGITS,
})

RANGE_FACETS = (
    FacetKind.MIN_INCLUSIVE,
    FacetKind.MAX_INCLUSIVE,
    FacetKind.MIN_EXCLUSIVE,
    FacetKind.MAX_EXCLUSIVE,
)

# Integer digit count used when only fractionDigits is given
UNBOUNDED_INTEGER_DIGITS = 999


@dataclass(frozen=True)
class ConstraintDerivation:
    """Outcome of deriving constraints for one restriction."""

    eligible: bool
    constraints: tuple[Constraint, ...] = field(default_factory=tuple)
    enumeration_shaped: bool = False


def is_enumeration_shaped(facets: Iterable[Facet]) -> bool:
    """Check whether a facet list is handled as an enumeration."""
    return any(facet.kind is FacetKind.ENUMERATION for facet in facets)


def has_constraining_facets(facets: Iterable[Facet]) -> bool:
    """Check whether any facet besides enumeration is present."""
    return any(facet.kind in CONSTRAINING_FACETS for facet in facets)


def is_eligible_base(base_type: str | QName) -> bool:
    """Check whether a base type gets a constrained scalar."""
    return local_type_name(base_type) in ELIGIBLE_BASE_TYPES


def derive_constraints(
    base_type: str | QName,
    facets: Iterable[Facet],
    context: GenerationContext | None = None,
) -> ConstraintDerivation:
    """Derive validation constraints for a restriction.

    Enumeration facets route the restriction to enum handling, so no
    constraints are derived for them. Otherwise a constrained scalar is
    eligible only for string, decimal and dateTime bases with at least one
    constraining facet.

    Args:
        base_type: The restriction's base type.
        facets: The restriction's facets, in document order.
        context: Optional diagnostics sink.

    Returns:
        ConstraintDerivation with the eligibility decision and constraints.
    """
    facets = list(facets)
    if is_enumeration_shaped(facets):
        return ConstraintDerivation(eligible=False, enumeration_shaped=True)

    if not has_constraining_facets(facets) or not is_eligible_base(base_type):
        return ConstraintDerivation(eligible=False)

    base_name = local_type_name(base_type)
    builder = _ConstraintBuilder(facets, context)

    constraints: list[Constraint] = []
    pattern = builder.pattern()
    if pattern is not None:
        constraints.append(pattern)

    size = builder.size()
    if size is not None:
        constraints.append(size)

    if base_name == "decimal":
        value_range = builder.range()
        if value_range is not None:
            constraints.append(value_range)

        digits = builder.digits()
        if digits is not None:
            constraints.append(digits)
    elif base_name == "dateTime":
        # Range facets on temporal types are not modeled as constraints
        for kind in RANGE_FACETS:
            for value in builder.values(kind):
                if context is not None:
                    context.info(
                        DiagnosticKind.CONSTRAINT,
                        f"{kind.value[0].upper()}{kind.value[1:]} constraint on {base_name}: {value}",
                        node=kind.value,
                    )

    return ConstraintDerivation(eligible=True, constraints=tuple(constraints))


class _ConstraintBuilder:
    """Reads facet values and turns them into constraints."""

    def __init__(self, facets: list[Facet], context: GenerationContext | None):
        self._facets = facets
        self._context = context

    def values(self, kind: FacetKind) -> list[str]:
        return [facet.value for facet in self._facets if facet.kind is kind]

    def pattern(self) -> PatternConstraint | None:
        patterns = self.values(FacetKind.PATTERN)
        if not patterns:
            return None
        if len(patterns) == 1:
            return PatternConstraint(patterns[0])
        # Pattern facets in one restriction are alternatives
        return PatternConstraint("|".join(f"(?:{p})" for p in patterns))

    def size(self) -> SizeConstraint | None:
        length = self._int_facet(FacetKind.LENGTH)
        if length is not None:
            return SizeConstraint(min=length, max=length)

        min_length = self._int_facet(FacetKind.MIN_LENGTH)
        max_length = self._int_facet(FacetKind.MAX_LENGTH)
        if min_length is None and max_length is None:
            return None
        return SizeConstraint(min=min_length, max=max_length)

    def range(self) -> RangeConstraint | None:
        lower = _tighter(
            self._bound(FacetKind.MIN_INCLUSIVE, inclusive=True),
            self._bound(FacetKind.MIN_EXCLUSIVE, inclusive=False),
            prefer_larger=True,
        )
        upper = _tighter(
            self._bound(FacetKind.MAX_INCLUSIVE, inclusive=True),
            self._bound(FacetKind.MAX_EXCLUSIVE, inclusive=False),
            prefer_larger=False,
        )
        if lower is None and upper is None:
            return None
        return RangeConstraint(lower=lower, upper=upper)

    def digits(self) -> DigitsConstraint | None:
        total_digits = self._int_facet(FacetKind.TOTAL_DIGITS)
        fraction_digits = self._int_facet(FacetKind.FRACTION_DIGITS)

        if total_digits is not None and fraction_digits is not None:
            return DigitsConstraint(total_digits - fraction_digits, fraction_digits)
        if total_digits is not None:
            return DigitsConstraint(total_digits, 0)
        if fraction_digits is not None:
            return DigitsConstraint(UNBOUNDED_INTEGER_DIGITS, fraction_digits)
        return None

    def _last_value(self, kind: FacetKind) -> str | None:
        values = self.values(kind)
        return values[-1] if values else None

    def _int_facet(self, kind: FacetKind) -> int | None:
        value = self._last_value(kind)
        if value is None:
            return None
        try:
            return int(value.strip())
        except ValueError:
            self._warn_invalid(kind, value)
            return None

    def _bound(self, kind: FacetKind, inclusive: bool) -> Bound | None:
        value = self._last_value(kind)
        if value is None:
            return None
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            number = None
        if number is None or not number.is_finite():
            self._warn_invalid(kind, value)
            return None
        return Bound(number, inclusive=inclusive)

    def _warn_invalid(self, kind: FacetKind, value: str) -> None:
        if self._context is not None:
            self._context.warn(
                DiagnosticKind.CONSTRAINT,
                f"Ignoring {kind.value} facet with invalid value '{value}'",
                node=kind.value,
            )


def _tighter(inclusive: Bound | None, exclusive: Bound | None, prefer_larger: bool) -> Bound | None:
    """Pick the more restrictive of two bounds on the same side of a range."""
    if inclusive is None or exclusive is None:
        return inclusive or exclusive
    if inclusive.value == exclusive.value:
        return exclusive
    if (inclusive.value > exclusive.value) == prefer_larger:
        return inclusive
    return exclusive
