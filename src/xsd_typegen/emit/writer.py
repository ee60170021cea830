"""Write rendered type modules to disk."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from xsd_typegen.context import GenerationContext
from xsd_typegen.emit.python import PythonTypeWriter, python_identifier
from xsd_typegen.errors import DiagnosticKind
from xsd_typegen.ir import IRType
from xsd_typegen.naming import module_name


def write_types(
    types: Iterable[IRType],
    output_dir: str | Path,
    context: GenerationContext,
    writer: PythonTypeWriter | None = None,
) -> list[Path]:
    """Write one module per type into the output directory.

    Args:
        types: The IR type nodes to write.
        output_dir: Target directory, created if missing.
        context: Diagnostics sink; every written file is recorded at info level.
        writer: Renderer to use; defaults to a PythonTypeWriter labelled with
            the context's schema.

    Returns:
        Paths of the written modules, in type order.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    writer = writer or PythonTypeWriter(schema=context.schema)

    written: list[Path] = []
    for ir_type in types:
        path = output_dir / f"{module_name(ir_type.name)}.py"
        if path in written:
            context.warn(
                DiagnosticKind.MODEL,
                f"Type {ir_type.name} overwrites module {path.name}",
                node=ir_type.name,
            )
        path.write_text(writer.render(ir_type, context), encoding="utf-8")
        context.info(DiagnosticKind.MODEL, f"Wrote {ir_type.name} to {path}", node=ir_type.name)
        written.append(path)
    return written


def write_package_init(types: Iterable[IRType], output_dir: str | Path) -> Path:
    """Write an ``__init__.py`` re-exporting every generated type."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    imports: dict[str, str] = {}
    for ir_type in types:
        imports[python_identifier(ir_type.name)] = module_name(ir_type.name)

    lines = ['"""Types generated by xsd-typegen. Do not edit."""', ""]
    for class_name, module in sorted(imports.items(), key=lambda item: item[1]):
        lines.append(f"from .{module} import {class_name}")
    lines.extend(["", "__all__ = ["])
    lines.extend(f'    "{class_name}",' for class_name in sorted(imports))
    lines.append("]")

    path = output_dir / "__init__.py"
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
