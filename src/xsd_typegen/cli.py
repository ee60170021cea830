"""Command-line interface for xsd-typegen."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from xsd_typegen.config import GeneratorConfig
from xsd_typegen.errors import ConfigurationError, DiagnosticSeverity
from xsd_typegen.ir import ConstrainedScalarType, EnumType, IRType, RecordType
from xsd_typegen.processor import SchemaProcessor, SchemaResult

console = Console()
error_console = Console(stderr=True)

SEVERITY_STYLES = {
    DiagnosticSeverity.ERROR: "red",
    DiagnosticSeverity.WARNING: "yellow",
    DiagnosticSeverity.INFO: "blue",
}


def _configure_logging(verbose: bool) -> None:
    level = logging.INFO if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
    )


def _describe(ir_type: IRType) -> tuple[str, str]:
    """Get the kind label and a short summary for a type node."""
    if isinstance(ir_type, RecordType):
        fields = ", ".join(f"{f.name}: {f.type.value} ({f.shape.value})" for f in ir_type.fields)
        return "record", fields
    if isinstance(ir_type, EnumType):
        return "enum", ", ".join(ir_type.identifiers)
    if isinstance(ir_type, ConstrainedScalarType):
        constraints = ", ".join(type(c).__name__.removesuffix("Constraint") for c in ir_type.constraints)
        return "scalar", f"{ir_type.underlying.value} [{constraints}]"
    return "unknown", ""


@click.command()
@click.argument("schemas", nargs=-1, required=True)
@click.option(
    "--root",
    "-r",
    type=click.Path(path_type=Path),
    default=None,
    help="Directory schema paths are resolved against (required).",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write one generated module per type into this directory.",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Report format.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Treat schemas with warnings as failed.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log every diagnostic while processing.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only report schemas with errors.",
)
def main(
    schemas: tuple[str, ...],
    root: Path | None,
    output_dir: Path | None,
    output_format: str,
    strict: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Generate typed declarations from XML Schema files.

    SCHEMAS are schema paths relative to --root.
    """
    _configure_logging(verbose)

    options = {"strict": "true" if strict else "false"}
    if root is not None:
        options["path"] = str(root)
    if output_dir is not None:
        options["output"] = str(output_dir)

    try:
        config = GeneratorConfig.from_options(options)
        processor = SchemaProcessor(config)
    except ConfigurationError as exc:
        error_console.print(f"[red]Error:[/red] {exc}")
        sys.exit(2)

    results = processor.process(schemas)

    if output_format == "json":
        _output_json(results)
    else:
        _output_text(results, quiet)

    sys.exit(1 if any(processor.is_failed(r) for r in results) else 0)


def _output_text(results: list[SchemaResult], quiet: bool) -> None:
    """Output results as formatted text."""
    for result in results:
        if result.is_successful:
            if not quiet:
                console.print(
                    f"[green]✓[/green] {result.schema_path} - {len(result.types)} type(s)"
                )
                if result.types:
                    table = Table(show_header=True, header_style="bold")
                    table.add_column("Type", width=24)
                    table.add_column("Kind", style="dim", width=8)
                    table.add_column("Details")
                    for ir_type in result.types:
                        kind, details = _describe(ir_type)
                        table.add_row(ir_type.name, kind, details)
                    console.print(table)
        else:
            console.print(f"[red]✗[/red] {result.schema_path} - Failed")

        problems = [d for d in result.diagnostics if d.severity != DiagnosticSeverity.INFO]
        if problems:
            table = Table(show_header=True, header_style="bold")
            table.add_column("Kind", style="dim", width=12)
            table.add_column("Severity", width=8)
            table.add_column("Location", width=30)
            table.add_column("Message")
            for diagnostic in problems:
                style = SEVERITY_STYLES.get(diagnostic.severity, "white")
                table.add_row(
                    diagnostic.kind.value,
                    f"[{style}]{diagnostic.severity.value}[/{style}]",
                    diagnostic.path or diagnostic.schema,
                    diagnostic.message,
                )
            console.print(table)
            console.print()

    total = len(results)
    succeeded = sum(1 for r in results if r.is_successful)
    if total > 1:
        console.print(f"\n[bold]Summary:[/bold] {succeeded}/{total} schemas processed", end="")
        if succeeded < total:
            console.print(f", [red]{total - succeeded} failed[/red]")
        else:
            console.print()


def _output_json(results: list[SchemaResult]) -> None:
    """Output results as JSON."""
    output = []
    for result in results:
        output.append({
            "schema": result.schema_path,
            "successful": result.is_successful,
            "error_count": result.error_count,
            "warning_count": result.warning_count,
            "types": [
                {"name": ir_type.name, "kind": _describe(ir_type)[0]}
                for ir_type in result.types
            ],
            "written": [str(path) for path in result.written],
            "diagnostics": [
                {
                    "kind": d.kind.value,
                    "severity": d.severity.value,
                    "message": d.message,
                    "path": d.path,
                    "node": d.node,
                }
                for d in result.diagnostics
            ],
        })

    console.print_json(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
