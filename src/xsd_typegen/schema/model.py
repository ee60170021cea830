"""Schema object model for the supported XML Schema subset.

The model covers:
- Top-level complex types, elements and simple types
- Attributes and local elements with occurrence constraints
- Sequence and choice particle groups
- Single-level restrictions with facets
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Final, Union

from xsd_typegen.namespaces import XSD


class Unbounded(Enum):
    """Sentinel for maxOccurs="unbounded"."""

    UNBOUNDED = "unbounded"

    def __repr__(self) -> str:
        return "UNBOUNDED"


UNBOUNDED: Final = Unbounded.UNBOUNDED

MaxOccurs = Union[int, Unbounded]


@dataclass(frozen=True)
class QName:
    """A namespace-qualified name."""

    namespace: str | None
    local_name: str

    @classmethod
    def xsd(cls, local_name: str) -> QName:
        """Create a name in the XML Schema namespace."""
        return cls(XSD, local_name)

    @classmethod
    def parse(cls, value: str) -> QName:
        """Parse Clark notation ("{ns}name"), or keep a prefixed name's local part."""
        if value.startswith("{"):
            namespace, local_name = value[1:].split("}", 1)
            return cls(namespace or None, local_name)
        if ":" in value:
            return cls(None, value.split(":", 1)[1])
        return cls(None, value)

    @property
    def clark(self) -> str:
        """Get the Clark notation name."""
        if self.namespace:
            return f"{{{self.namespace}}}{self.local_name}"
        return self.local_name

    def __str__(self) -> str:
        return self.clark


XS_STRING = QName.xsd("string")


class FacetKind(Enum):
    """Restriction facets understood by the generator."""

    ENUMERATION = "enumeration"
    PATTERN = "pattern"
    MIN_LENGTH = "minLength"
    MAX_LENGTH = "maxLength"
    LENGTH = "length"
    MIN_INCLUSIVE = "minInclusive"
    MAX_INCLUSIVE = "maxInclusive"
    MIN_EXCLUSIVE = "minExclusive"
    MAX_EXCLUSIVE = "maxExclusive"
    TOTAL_DIGITS = "totalDigits"
    FRACTION_DIGITS = "fractionDigits"


@dataclass(frozen=True)
class Facet:
    """A single restriction facet and its literal value."""

    kind: FacetKind
    value: str


@dataclass(frozen=True)
class Restriction:
    """Restriction of a base type by an ordered list of facets."""

    base: QName
    facets: tuple[Facet, ...] = ()

    def values_of(self, kind: FacetKind) -> list[str]:
        """Get the literal values of every facet of the given kind."""
        return [facet.value for facet in self.facets if facet.kind is kind]

    def has_facet(self, kind: FacetKind) -> bool:
        return any(facet.kind is kind for facet in self.facets)


@dataclass(frozen=True)
class ElementDecl:
    """A local element declared inside a particle group."""

    name: str
    type_name: QName = XS_STRING
    min_occurs: int = 1
    max_occurs: MaxOccurs = 1
    nillable: bool = False

    @property
    def is_optional(self) -> bool:
        return self.min_occurs == 0

    @property
    def is_unbounded(self) -> bool:
        return self.max_occurs is UNBOUNDED


@dataclass(frozen=True)
class AttributeDecl:
    """An attribute declared on a complex type."""

    name: str
    type_name: QName = XS_STRING
    use: str = "optional"  # optional|required

    @property
    def required(self) -> bool:
        return self.use == "required"


@dataclass(frozen=True)
class SequenceGroup:
    """Sequence particle - children appear in order."""

    elements: tuple[ElementDecl, ...] = ()


@dataclass(frozen=True)
class ChoiceGroup:
    """Choice particle - one of the children appears."""

    elements: tuple[ElementDecl, ...] = ()


ParticleGroup = Union[SequenceGroup, ChoiceGroup]


@dataclass(frozen=True)
class ComplexTypeDecl:
    """A complex type; ``name`` is None for an anonymous inline type."""

    name: str | None
    attributes: tuple[AttributeDecl, ...] = ()
    particle: ParticleGroup | None = None

    @property
    def elements(self) -> tuple[ElementDecl, ...]:
        """Get the local elements of the particle group, if any."""
        if self.particle is None:
            return ()
        return self.particle.elements


@dataclass(frozen=True)
class TopLevelElementDecl:
    """A global element, optionally owning an inline complex type."""

    name: str
    complex_type: ComplexTypeDecl | None = None
    type_name: QName | None = None


@dataclass(frozen=True)
class SimpleTypeDecl:
    """A named simple type, optionally restricting a base type."""

    name: str
    restriction: Restriction | None = None


Declaration = Union[ComplexTypeDecl, TopLevelElementDecl, SimpleTypeDecl]


@dataclass(frozen=True)
class Schema:
    """An XML Schema document as an ordered list of top-level declarations."""

    declarations: tuple[Declaration, ...] = field(default_factory=tuple)
    target_namespace: str | None = None

    def __iter__(self):
        return iter(self.declarations)

    def __len__(self) -> int:
        return len(self.declarations)
