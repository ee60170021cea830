"""Render IR type nodes as Python source modules.

- RecordType -> keyword-only dataclass
- EnumType -> ``str`` Enum
- ConstrainedScalarType -> pydantic ``RootModel`` over an ``Annotated`` type
"""

from __future__ import annotations

import keyword
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from xsd_typegen.errors import DiagnosticKind
from xsd_typegen.ir import (
    ConstrainedScalarType,
    DigitsConstraint,
    EnumMember,
    EnumType,
    FieldSpec,
    IRType,
    PatternConstraint,
    RangeConstraint,
    RecordType,
    SizeConstraint,
)
from xsd_typegen.schema.cardinality import DefaultPolicy, FieldShape
from xsd_typegen.schema.constraints import UNBOUNDED_INTEGER_DIGITS
from xsd_typegen.schema.types import CanonicalType

if TYPE_CHECKING:
    from xsd_typegen.context import GenerationContext

_INVALID_IDENTIFIER_CHARS = re.compile(r"\W")


@dataclass(frozen=True)
class PythonType:
    """A Python annotation and the import it needs."""

    annotation: str
    module: str | None = None

    @property
    def import_line(self) -> str | None:
        if self.module is None:
            return None
        return f"from {self.module} import {self.annotation}"


PYTHON_TYPES: dict[CanonicalType, PythonType] = {
    CanonicalType.STRING: PythonType("str"),
    CanonicalType.INT8: PythonType("int"),
    CanonicalType.INT16: PythonType("int"),
    CanonicalType.INT32: PythonType("int"),
    CanonicalType.INT64: PythonType("int"),
    CanonicalType.BIG_INTEGER: PythonType("int"),
    CanonicalType.BIG_DECIMAL: PythonType("Decimal", "decimal"),
    CanonicalType.BOOLEAN: PythonType("bool"),
    CanonicalType.FLOAT32: PythonType("float"),
    CanonicalType.FLOAT64: PythonType("float"),
    CanonicalType.LOCAL_DATE_TIME: PythonType("datetime", "datetime"),
    CanonicalType.LOCAL_DATE: PythonType("date", "datetime"),
    CanonicalType.LOCAL_TIME: PythonType("time", "datetime"),
    CanonicalType.DURATION: PythonType("timedelta", "datetime"),
    CanonicalType.BYTES: PythonType("bytes"),
    CanonicalType.URI: PythonType("str"),
}


def python_identifier(name: str) -> str:
    """Turn an XML name into a usable Python identifier.

    Characters that are not valid in identifiers become "_", a leading digit
    gets a "_" prefix and keywords get a "_" suffix.
    """
    identifier = _INVALID_IDENTIFIER_CHARS.sub("_", name) or "_"
    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    if keyword.iskeyword(identifier):
        identifier = f"{identifier}_"
    return identifier


@dataclass
class _Module:
    """Accumulates import lines and body text of one module."""

    header: str
    imports: set[str] = field(default_factory=set)
    body: list[str] = field(default_factory=list)

    def require(self, python_type: PythonType) -> str:
        line = python_type.import_line
        if line is not None:
            self.imports.add(line)
        return python_type.annotation

    def render(self) -> str:
        lines = [f'"""{self.header}"""', "", "from __future__ import annotations", ""]
        stdlib = sorted(line for line in self.imports if not line.startswith("from pydantic"))
        third_party = sorted(line for line in self.imports if line.startswith("from pydantic"))
        if stdlib:
            lines.extend(stdlib)
            lines.append("")
        if third_party:
            lines.extend(third_party)
            lines.append("")
        lines.append("")
        lines.extend(self.body)
        return "\n".join(lines).rstrip() + "\n"


class PythonTypeWriter:
    """Renders one Python module per IR type node.

    Example:
        writer = PythonTypeWriter(schema="note.xsd")
        source = writer.render(record)
    """

    def __init__(self, schema: str = ""):
        self._schema = schema

    def render(self, ir_type: IRType, context: GenerationContext | None = None) -> str:
        """Render a type node as the source of a Python module."""
        match ir_type:
            case RecordType():
                return self.render_record(ir_type)
            case EnumType():
                return self.render_enum(ir_type, context)
            case ConstrainedScalarType():
                return self.render_constrained_scalar(ir_type, context)
        raise TypeError(f"Unsupported type node: {ir_type!r}")

    def _module(self, name: str) -> _Module:
        source = f" from {self._schema}" if self._schema else ""
        return _Module(header=f"Type ``{name}`` generated by xsd-typegen{source}. Do not edit.")

    def render_record(self, record: RecordType) -> str:
        module = self._module(record.name)
        if any(spec.default is DefaultPolicy.EMPTY_SEQUENCE for spec in record.fields):
            module.imports.add("from dataclasses import dataclass, field")
        else:
            module.imports.add("from dataclasses import dataclass")

        lines = ["@dataclass(kw_only=True)", f"class {python_identifier(record.name)}:"]
        if not record.fields:
            lines.append("    pass")
        for spec in record.fields:
            lines.append(f"    {self._field_line(spec, module)}")

        module.body = lines
        return module.render()

    def _field_line(self, spec: FieldSpec, module: _Module) -> str:
        name = python_identifier(spec.name)
        annotation = module.require(PYTHON_TYPES[spec.type])

        if spec.shape is FieldShape.REPEATED:
            annotation = f"list[{annotation}]"
        elif spec.shape is FieldShape.OPTIONAL:
            annotation = f"{annotation} | None"

        if spec.default is DefaultPolicy.EMPTY_SEQUENCE:
            return f"{name}: {annotation} = field(default_factory=list)"
        if spec.default is DefaultPolicy.NULL:
            return f"{name}: {annotation} = None"
        return f"{name}: {annotation}"

    def render_enum(self, enum_type: EnumType, context: GenerationContext | None = None) -> str:
        module = self._module(enum_type.name)
        module.imports.add("from enum import Enum")

        lines = [f"class {python_identifier(enum_type.name)}(str, Enum):"]
        seen: set[str] = set()
        for member in enum_type.members:
            identifier = self._enum_member_name(enum_type, member, context)
            if identifier in seen:
                if context is not None:
                    context.warn(
                        DiagnosticKind.MODEL,
                        f"Enum {enum_type.name}: literal '{member.literal}' duplicates "
                        f"identifier {identifier}; member left out",
                        node=member.literal,
                    )
                continue
            seen.add(identifier)
            lines.append(f"    {identifier} = {member.literal!r}")
        if not seen:
            lines.append("    pass")

        module.body = lines
        return module.render()

    def render_constrained_scalar(
        self,
        scalar: ConstrainedScalarType,
        context: GenerationContext | None = None,
    ) -> str:
        module = self._module(scalar.name)
        annotation = module.require(PYTHON_TYPES[scalar.underlying])
        arguments = self._field_arguments(scalar, module, context)
        if arguments:
            module.imports.add("from typing import Annotated")
            module.imports.add("from pydantic import Field, RootModel")
            annotation = f"Annotated[{annotation}, Field({', '.join(arguments)})]"
        else:
            module.imports.add("from pydantic import RootModel")

        module.body = [
            f"class {python_identifier(scalar.name)}(RootModel[{annotation}]):",
            "    pass",
        ]
        return module.render()

    def _field_arguments(
        self,
        scalar: ConstrainedScalarType,
        module: _Module,
        context: GenerationContext | None,
    ) -> list[str]:
        textual = PYTHON_TYPES[scalar.underlying].annotation == "str"
        arguments: list[str] = []
        for constraint in scalar.constraints:
            match constraint:
                case PatternConstraint() | SizeConstraint() if not textual:
                    # pydantic only checks patterns and lengths on str values
                    if context is not None:
                        context.warn(
                            DiagnosticKind.CONSTRAINT,
                            f"{type(constraint).__name__} on {scalar.name} cannot be applied to "
                            f"{PYTHON_TYPES[scalar.underlying].annotation}; constraint left out",
                            node=scalar.name,
                        )
                case PatternConstraint(regex=regex):
                    # XSD patterns match the whole value
                    arguments.append(f"pattern={f'^(?:{regex})$'!r}")
                case SizeConstraint(min=min_length, max=max_length):
                    if min_length is not None:
                        arguments.append(f"min_length={min_length}")
                    if max_length is not None:
                        arguments.append(f"max_length={max_length}")
                case RangeConstraint(lower=lower, upper=upper):
                    module.require(PYTHON_TYPES[CanonicalType.BIG_DECIMAL])
                    if lower is not None:
                        keyword_name = "ge" if lower.inclusive else "gt"
                        arguments.append(f"{keyword_name}=Decimal({str(lower.value)!r})")
                    if upper is not None:
                        keyword_name = "le" if upper.inclusive else "lt"
                        arguments.append(f"{keyword_name}=Decimal({str(upper.value)!r})")
                case DigitsConstraint(integer_digits=integer_digits, fraction_digits=fraction_digits):
                    if integer_digits != UNBOUNDED_INTEGER_DIGITS:
                        arguments.append(f"max_digits={integer_digits + fraction_digits}")
                    arguments.append(f"decimal_places={fraction_digits}")
        return arguments

    def _enum_member_name(
        self,
        enum_type: EnumType,
        member: EnumMember,
        context: GenerationContext | None,
    ) -> str:
        """Get a member name Enum accepts.

        Names such as ``_1_``, ``_`` or ``__X`` are reserved or mangled inside
        an Enum body, so they get a ``VALUE`` prefix.
        """
        identifier = python_identifier(member.identifier)
        if identifier.startswith("_") and (identifier.endswith("_") or identifier[1:2] == "_"):
            renamed = f"VALUE{identifier}"
            if context is not None:
                context.warn(
                    DiagnosticKind.MODEL,
                    f"Enum {enum_type.name}: identifier {identifier} for literal "
                    f"'{member.literal}' is reserved; emitted as {renamed}",
                    node=member.literal,
                )
            return renamed
        return identifier
