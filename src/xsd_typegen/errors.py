"""Diagnostic records and exception types."""

from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(Enum):
    """Categories of diagnostics raised during generation."""

    CONFIGURATION = "configuration"  # Processor options
    RESOURCE = "resource"  # Schema file lookup
    SCHEMA = "schema"  # Schema document structure
    TYPE = "type"  # Builtin type mapping
    CONSTRAINT = "constraint"  # Restriction facets
    MODEL = "model"  # Type-model construction


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics."""

    ERROR = "error"  # Generation for the schema is abandoned
    WARNING = "warning"  # Generation continues with a degraded result
    INFO = "info"  # Informational


@dataclass
class Diagnostic:
    """A single message reported while generating types from a schema."""

    kind: DiagnosticKind
    message: str
    severity: DiagnosticSeverity = DiagnosticSeverity.INFO
    schema: str = ""  # e.g., "schemas/note.xsd"
    path: str = ""  # Declaration path, e.g. "/Note/to"
    node: str | None = None  # Type, facet or attribute name

    def __str__(self) -> str:
        location = self.schema
        if self.path:
            location = f"{location}:{self.path}"
        return f"[{self.kind.value}] {location}: {self.message}"


class XsdTypegenError(Exception):
    """Base class for xsd-typegen exceptions."""


class ConfigurationError(XsdTypegenError):
    """Raised when processor options are missing or invalid."""


class SchemaLoadError(XsdTypegenError):
    """Exception raised when schema text cannot be read as an XSD document."""

    def __init__(self, message: str, diagnostics: list[Diagnostic] | None = None):
        super().__init__(message)
        self.diagnostics = diagnostics or []
