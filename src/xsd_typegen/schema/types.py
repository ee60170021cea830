"""Mapping of XSD built-in types to canonical semantic types."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from xsd_typegen.errors import DiagnosticKind
from xsd_typegen.schema.model import QName

if TYPE_CHECKING:
    from xsd_typegen.context import GenerationContext


class CanonicalType(Enum):
    """Target-language-neutral value domains."""

    STRING = "String"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    BIG_INTEGER = "ArbitraryPrecisionInteger"
    BIG_DECIMAL = "ArbitraryPrecisionDecimal"
    BOOLEAN = "Boolean"
    FLOAT32 = "Float32"
    FLOAT64 = "Float64"
    LOCAL_DATE_TIME = "LocalDateTime"
    LOCAL_DATE = "LocalDate"
    LOCAL_TIME = "LocalTime"
    DURATION = "Duration"
    BYTES = "ByteSequence"
    URI = "Uri"


class XsdBuiltinType(Enum):
    """XSD built-in types."""

    STRING = "string"
    NORMALIZED_STRING = "normalizedString"
    TOKEN = "token"
    LANGUAGE = "language"
    NAME = "Name"
    NCNAME = "NCName"
    ID = "ID"
    IDREF = "IDREF"
    ENTITY = "ENTITY"
    NMTOKEN = "NMTOKEN"
    QNAME = "QName"
    NOTATION = "NOTATION"
    INT = "int"
    INTEGER = "integer"
    LONG = "long"
    SHORT = "short"
    BYTE = "byte"
    UNSIGNED_INT = "unsignedInt"
    UNSIGNED_SHORT = "unsignedShort"
    UNSIGNED_BYTE = "unsignedByte"
    UNSIGNED_LONG = "unsignedLong"
    POSITIVE_INTEGER = "positiveInteger"
    NEGATIVE_INTEGER = "negativeInteger"
    NON_POSITIVE_INTEGER = "nonPositiveInteger"
    NON_NEGATIVE_INTEGER = "nonNegativeInteger"
    DECIMAL = "decimal"
    BOOLEAN = "boolean"
    FLOAT = "float"
    DOUBLE = "double"
    DATETIME = "dateTime"
    DATE = "date"
    TIME = "time"
    DURATION = "duration"
    HEX_BINARY = "hexBinary"
    BASE64_BINARY = "base64Binary"
    ANY_URI = "anyURI"


BUILTIN_TYPE_MAP: dict[XsdBuiltinType, CanonicalType] = {
    XsdBuiltinType.STRING: CanonicalType.STRING,
    XsdBuiltinType.NORMALIZED_STRING: CanonicalType.STRING,
    XsdBuiltinType.TOKEN: CanonicalType.STRING,
    XsdBuiltinType.LANGUAGE: CanonicalType.STRING,
    XsdBuiltinType.NAME: CanonicalType.STRING,
    XsdBuiltinType.NCNAME: CanonicalType.STRING,
    XsdBuiltinType.ID: CanonicalType.STRING,
    XsdBuiltinType.IDREF: CanonicalType.STRING,
    XsdBuiltinType.ENTITY: CanonicalType.STRING,
    XsdBuiltinType.NMTOKEN: CanonicalType.STRING,
    XsdBuiltinType.QNAME: CanonicalType.STRING,
    XsdBuiltinType.NOTATION: CanonicalType.STRING,
    XsdBuiltinType.INT: CanonicalType.INT32,
    XsdBuiltinType.INTEGER: CanonicalType.INT32,
    XsdBuiltinType.LONG: CanonicalType.INT64,
    XsdBuiltinType.SHORT: CanonicalType.INT16,
    XsdBuiltinType.BYTE: CanonicalType.INT8,
    # Unsigned types widen to the next signed size
    XsdBuiltinType.UNSIGNED_INT: CanonicalType.INT64,
    XsdBuiltinType.UNSIGNED_SHORT: CanonicalType.INT32,
    XsdBuiltinType.UNSIGNED_BYTE: CanonicalType.INT16,
    XsdBuiltinType.UNSIGNED_LONG: CanonicalType.BIG_INTEGER,
    XsdBuiltinType.POSITIVE_INTEGER: CanonicalType.BIG_INTEGER,
    XsdBuiltinType.NEGATIVE_INTEGER: CanonicalType.BIG_INTEGER,
    XsdBuiltinType.NON_POSITIVE_INTEGER: CanonicalType.BIG_INTEGER,
    XsdBuiltinType.NON_NEGATIVE_INTEGER: CanonicalType.BIG_INTEGER,
    XsdBuiltinType.DECIMAL: CanonicalType.BIG_DECIMAL,
    XsdBuiltinType.BOOLEAN: CanonicalType.BOOLEAN,
    XsdBuiltinType.FLOAT: CanonicalType.FLOAT32,
    XsdBuiltinType.DOUBLE: CanonicalType.FLOAT64,
    XsdBuiltinType.DATETIME: CanonicalType.LOCAL_DATE_TIME,
    XsdBuiltinType.DATE: CanonicalType.LOCAL_DATE,
    XsdBuiltinType.TIME: CanonicalType.LOCAL_TIME,
    XsdBuiltinType.DURATION: CanonicalType.DURATION,
    XsdBuiltinType.HEX_BINARY: CanonicalType.BYTES,
    XsdBuiltinType.BASE64_BINARY: CanonicalType.BYTES,
    XsdBuiltinType.ANY_URI: CanonicalType.URI,
}


def local_type_name(type_name: str | QName) -> str:
    """Get the local part of a qualified type name.

    Accepts a QName, Clark notation ("{ns}int"), a prefixed name ("xs:int")
    or a bare local name.
    """
    if isinstance(type_name, QName):
        return type_name.local_name
    return QName.parse(type_name).local_name


def get_builtin_type(type_name: str | QName) -> XsdBuiltinType | None:
    """Get the built-in type for a qualified name, or None if not built in."""
    try:
        return XsdBuiltinType(local_type_name(type_name))
    except ValueError:
        return None


def map_builtin_type(
    type_name: str | QName,
    context: GenerationContext | None = None,
) -> CanonicalType:
    """Map an XSD type name to its canonical type.

    Never fails: unrecognized names map to STRING, with a warning recorded
    in the context when one is given.

    Args:
        type_name: The qualified type name.
        context: Optional diagnostics sink.

    Returns:
        The canonical type.
    """
    builtin = get_builtin_type(type_name)
    if builtin is not None:
        return BUILTIN_TYPE_MAP[builtin]

    if context is not None:
        local_name = local_type_name(type_name)
        context.warn(
            DiagnosticKind.TYPE,
            f"Unsupported type '{local_name}', defaulting to String",
            node=local_name,
        )
    return CanonicalType.STRING
