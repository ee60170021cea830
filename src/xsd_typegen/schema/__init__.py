"""XML Schema object model, type mapping, cardinality and facet handling."""

from xsd_typegen.schema.cardinality import (
    Cardinality,
    DefaultPolicy,
    FieldShape,
    parse_max_occurs,
    parse_min_occurs,
    resolve_attribute_cardinality,
    resolve_cardinality,
)
from xsd_typegen.schema.constraints import (
    Bound,
    ConstraintDerivation,
    DigitsConstraint,
    PatternConstraint,
    RangeConstraint,
    SizeConstraint,
    derive_constraints,
    has_constraining_facets,
    is_eligible_base,
    is_enumeration_shaped,
)
from xsd_typegen.schema.model import (
    UNBOUNDED,
    AttributeDecl,
    ChoiceGroup,
    ComplexTypeDecl,
    ElementDecl,
    Facet,
    FacetKind,
    QName,
    Restriction,
    Schema,
    SequenceGroup,
    SimpleTypeDecl,
    TopLevelElementDecl,
)
from xsd_typegen.schema.reader import SchemaReader, read_schema
from xsd_typegen.schema.types import (
    CanonicalType,
    XsdBuiltinType,
    get_builtin_type,
    map_builtin_type,
)

__all__ = [
    # Model
    "UNBOUNDED",
    "AttributeDecl",
    "ChoiceGroup",
    "ComplexTypeDecl",
    "ElementDecl",
    "Facet",
    "FacetKind",
    "QName",
    "Restriction",
    "Schema",
    "SequenceGroup",
    "SimpleTypeDecl",
    "TopLevelElementDecl",
    # Reader
    "SchemaReader",
    "read_schema",
    # Types
    "CanonicalType",
    "XsdBuiltinType",
    "get_builtin_type",
    "map_builtin_type",
    # Cardinality
    "Cardinality",
    "DefaultPolicy",
    "FieldShape",
    "parse_max_occurs",
    "parse_min_occurs",
    "resolve_attribute_cardinality",
    "resolve_cardinality",
    # Constraints
    "Bound",
    "ConstraintDerivation",
    "DigitsConstraint",
    "PatternConstraint",
    "RangeConstraint",
    "SizeConstraint",
    "derive_constraints",
    "has_constraining_facets",
    "is_eligible_base",
    "is_enumeration_shaped",
]
