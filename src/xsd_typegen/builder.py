"""Type-model builder - turns schema declarations into IR type nodes."""

from __future__ import annotations

from dataclasses import dataclass, field

from xsd_typegen.context import DeclarationContext, GenerationContext
from xsd_typegen.errors import Diagnostic, DiagnosticKind, DiagnosticSeverity, SchemaLoadError
from xsd_typegen.ir import (
    ConstrainedScalarType,
    EnumMember,
    EnumType,
    FieldSpec,
    IRType,
    RecordType,
)
from xsd_typegen.naming import normalize_identifier
from xsd_typegen.schema.cardinality import resolve_attribute_cardinality, resolve_cardinality
from xsd_typegen.schema.constraints import derive_constraints
from xsd_typegen.schema.model import (
    AttributeDecl,
    ComplexTypeDecl,
    ElementDecl,
    FacetKind,
    Schema,
    SimpleTypeDecl,
    TopLevelElementDecl,
)
from xsd_typegen.schema.reader import read_schema
from xsd_typegen.schema.types import local_type_name, map_builtin_type


@dataclass
class GenerationResult:
    """Types and diagnostics produced from one schema."""

    types: list[IRType] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)
    schema: str = ""

    @property
    def is_successful(self) -> bool:
        return self.error_count == 0

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING)

    def get_type(self, name: str) -> IRType | None:
        for ir_type in self.types:
            if ir_type.name == name:
                return ir_type
        return None


class TypeModelBuilder:
    """Builds IR type nodes from a schema, one declaration at a time.

    The builder keeps no state between calls; every diagnostic goes to the
    context passed in.

    Example:
        context = GenerationContext(schema="note.xsd")
        types = TypeModelBuilder().build(read_schema(text), context)
    """

    def build(self, schema: Schema, context: GenerationContext) -> list[IRType]:
        """Build IR type nodes for every top-level declaration in document order.

        Args:
            schema: The schema object tree.
            context: The diagnostics sink.

        Returns:
            List of IR type nodes; declarations without a counterpart are skipped.
        """
        types: list[IRType] = []
        for declaration in schema:
            ir_type = self.build_declaration(declaration, context)
            if ir_type is not None:
                types.append(ir_type)
        return types

    def build_declaration(
        self,
        declaration: ComplexTypeDecl | TopLevelElementDecl | SimpleTypeDecl,
        context: GenerationContext,
    ) -> IRType | None:
        """Build the IR node for a single top-level declaration, if it has one."""
        match declaration:
            case ComplexTypeDecl(name=None):
                context.info(DiagnosticKind.MODEL, "Skipping anonymous top-level complex type")
                return None
            case ComplexTypeDecl(name=name):
                with DeclarationContext(context, name):
                    if not _has_fields(declaration):
                        context.info(
                            DiagnosticKind.MODEL,
                            f"Skipping complex type without attributes or elements: {name}",
                        )
                        return None
                    context.info(DiagnosticKind.MODEL, f"Generating record for complex type: {name}")
                    return self.build_record(declaration, name, context)
            case TopLevelElementDecl(name=name, complex_type=None):
                with DeclarationContext(context, name):
                    context.info(
                        DiagnosticKind.MODEL,
                        f"Skipping element without inline complex type: {name}",
                    )
                return None
            case TopLevelElementDecl(name=name, complex_type=complex_type):
                with DeclarationContext(context, name):
                    if not _has_fields(complex_type):
                        context.info(
                            DiagnosticKind.MODEL,
                            f"Skipping element whose complex type has no attributes or elements: {name}",
                        )
                        return None
                    context.info(DiagnosticKind.MODEL, f"Generating record for element: {name}")
                    return self.build_record(complex_type, name, context)
            case SimpleTypeDecl():
                with DeclarationContext(context, declaration.name):
                    return self.build_simple_type(declaration, context)
        raise TypeError(f"Unsupported declaration: {declaration!r}")

    def build_record(
        self,
        complex_type: ComplexTypeDecl,
        name: str,
        context: GenerationContext,
    ) -> RecordType:
        """Build a record: attributes first, then particle-group elements."""
        fields: list[FieldSpec] = []
        seen: set[str] = set()

        candidates: list[AttributeDecl | ElementDecl] = [
            *complex_type.attributes,
            *complex_type.elements,
        ]
        for decl in candidates:
            with DeclarationContext(context, decl.name):
                if decl.name in seen:
                    context.warn(
                        DiagnosticKind.MODEL,
                        f"Duplicate field '{decl.name}' in {name}; keeping the first declaration",
                        node=decl.name,
                    )
                    continue
                seen.add(decl.name)
                if isinstance(decl, AttributeDecl):
                    fields.append(self._attribute_field(decl, context))
                else:
                    fields.append(self._element_field(decl, context))

        return RecordType(name=name, fields=tuple(fields))

    def build_simple_type(
        self,
        simple_type: SimpleTypeDecl,
        context: GenerationContext,
    ) -> EnumType | ConstrainedScalarType | None:
        """Build an enum or constrained scalar from a simple type restriction."""
        name = simple_type.name
        context.info(DiagnosticKind.MODEL, f"Processing simple type: {name}")

        restriction = simple_type.restriction
        if restriction is None:
            context.info(DiagnosticKind.MODEL, f"Skipping simple type without restriction: {name}")
            return None

        derivation = derive_constraints(restriction.base, restriction.facets, context)
        if derivation.enumeration_shaped:
            literals = restriction.values_of(FacetKind.ENUMERATION)
            context.info(
                DiagnosticKind.MODEL,
                f"Generating enum for simple type: {name} with {len(literals)} values",
            )
            return self.build_enum(name, literals)

        if not derivation.eligible:
            context.info(
                DiagnosticKind.CONSTRAINT,
                f"Skipping simple type {name}: no supported facets for base "
                f"'{local_type_name(restriction.base)}'",
                node=name,
            )
            return None

        context.info(
            DiagnosticKind.MODEL,
            f"Generating constrained scalar for simple type: {name} with restrictions",
        )
        return ConstrainedScalarType(
            name=name,
            underlying=map_builtin_type(restriction.base, context),
            constraints=derivation.constraints,
        )

    def build_enum(self, name: str, literals: list[str]) -> EnumType:
        """Build an enumeration, keeping literals in source order."""
        return EnumType(
            name=name,
            members=tuple(EnumMember(normalize_identifier(literal), literal) for literal in literals),
        )

    def _attribute_field(self, attribute: AttributeDecl, context: GenerationContext) -> FieldSpec:
        cardinality = resolve_attribute_cardinality(attribute.use)
        return FieldSpec(
            name=attribute.name,
            type=map_builtin_type(attribute.type_name, context),
            shape=cardinality.shape,
            default=cardinality.default,
            source="attribute",
        )

    def _element_field(self, element: ElementDecl, context: GenerationContext) -> FieldSpec:
        cardinality = resolve_cardinality(element.min_occurs, element.max_occurs, element.nillable)
        return FieldSpec(
            name=element.name,
            type=map_builtin_type(element.type_name, context),
            shape=cardinality.shape,
            default=cardinality.default,
            source="element",
        )


def _has_fields(complex_type: ComplexTypeDecl) -> bool:
    # Content models such as complexContent extensions are not read
    return bool(complex_type.attributes or complex_type.elements)


def build(schema: Schema, context: GenerationContext | None = None) -> list[IRType]:
    """Build IR type nodes for a schema object tree."""
    return TypeModelBuilder().build(schema, context or GenerationContext())


def generate(schema_text: str | bytes, schema: str = "") -> GenerationResult:
    """Generate IR type nodes from XSD text.

    A document that cannot be read as a schema yields an error diagnostic
    and no types.

    Args:
        schema_text: The XSD document.
        schema: Label for the schema in diagnostics, e.g. its path.

    Returns:
        GenerationResult with the types and every diagnostic raised.

    Example:
        result = generate(open("note.xsd").read())
        for ir_type in result.types:
            print(ir_type.name)
    """
    context = GenerationContext(schema=schema)

    try:
        parsed = read_schema(schema_text)
    except SchemaLoadError as exc:
        if exc.diagnostics:
            context.extend(exc.diagnostics)
        else:
            context.error(DiagnosticKind.SCHEMA, str(exc))
        return GenerationResult(diagnostics=context.diagnostics, schema=schema)

    types = TypeModelBuilder().build(parsed, context)
    return GenerationResult(types=types, diagnostics=context.diagnostics, schema=schema)
