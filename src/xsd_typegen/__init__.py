"""xsd-typegen - generate typed declarations from XML Schema documents.

Turns XSD complex types, elements and simple types into records,
enumerations and constrained scalar types.

Example:
    from xsd_typegen import generate

    result = generate(schema_text)
    for ir_type in result.types:
        print(ir_type.name)

    for diagnostic in result.diagnostics:
        print(diagnostic)

    # Batch processing with file output
    from pathlib import Path
    from xsd_typegen import GeneratorConfig, SchemaProcessor

    processor = SchemaProcessor(
        GeneratorConfig(root=Path("schemas"), output_dir=Path("generated")),
    )
    results = processor.process(["note.xsd", "advanced-schema.xsd"])
"""

from xsd_typegen.builder import GenerationResult, TypeModelBuilder, build, generate
from xsd_typegen.config import GeneratorConfig
from xsd_typegen.context import GenerationContext
from xsd_typegen.errors import (
    ConfigurationError,
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    SchemaLoadError,
    XsdTypegenError,
)
from xsd_typegen.ir import (
    Bound,
    ConstrainedScalarType,
    DigitsConstraint,
    EnumMember,
    EnumType,
    FieldSpec,
    PatternConstraint,
    RangeConstraint,
    RecordType,
    SizeConstraint,
)
from xsd_typegen.naming import normalize_identifier
from xsd_typegen.processor import SchemaProcessor, SchemaResult
from xsd_typegen.schema import (
    CanonicalType,
    DefaultPolicy,
    FieldShape,
    derive_constraints,
    map_builtin_type,
    read_schema,
    resolve_cardinality,
)

__version__ = "0.1.0"

__all__ = [
    # Main API
    "generate",
    "build",
    "TypeModelBuilder",
    "GenerationResult",
    "GenerationContext",
    # Batch processing
    "GeneratorConfig",
    "SchemaProcessor",
    "SchemaResult",
    # Diagnostics and errors
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSeverity",
    "XsdTypegenError",
    "ConfigurationError",
    "SchemaLoadError",
    # IR
    "RecordType",
    "FieldSpec",
    "EnumType",
    "EnumMember",
    "ConstrainedScalarType",
    "PatternConstraint",
    "SizeConstraint",
    "RangeConstraint",
    "Bound",
    "DigitsConstraint",
    # Core operations
    "CanonicalType",
    "FieldShape",
    "DefaultPolicy",
    "map_builtin_type",
    "normalize_identifier",
    "resolve_cardinality",
    "derive_constraints",
    "read_schema",
]
