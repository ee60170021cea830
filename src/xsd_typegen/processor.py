"""Schema processor - entry point for generating types from schema files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from xsd_typegen.builder import GenerationResult, generate
from xsd_typegen.config import GeneratorConfig
from xsd_typegen.context import GenerationContext
from xsd_typegen.emit.writer import write_package_init, write_types
from xsd_typegen.errors import Diagnostic, DiagnosticKind, DiagnosticSeverity
from xsd_typegen.ir import IRType


@dataclass
class SchemaResult:
    """Outcome of processing one schema file."""

    schema_path: str
    generation: GenerationResult = field(default_factory=GenerationResult)
    written: list[Path] = field(default_factory=list)

    @property
    def types(self) -> list[IRType]:
        return self.generation.types

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return self.generation.diagnostics

    @property
    def error_count(self) -> int:
        return self.generation.error_count

    @property
    def warning_count(self) -> int:
        return self.generation.warning_count

    @property
    def is_successful(self) -> bool:
        return self.generation.is_successful


class SchemaProcessor:
    """Generates types for a batch of schema files.

    Every schema is processed on its own: a missing or malformed schema is
    reported in its result and the remaining schemas still run.

    Example:
        processor = SchemaProcessor(GeneratorConfig(root=Path("schemas")))
        for result in processor.process(["note.xsd"]):
            print(result.schema_path, [t.name for t in result.types])
    """

    def __init__(self, config: GeneratorConfig):
        """Initialize the processor.

        Args:
            config: The generation options; validated before any schema is read.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        config.validate()
        self._config = config

    @property
    def config(self) -> GeneratorConfig:
        return self._config

    def process(self, schema_paths: Iterable[str | Path]) -> list[SchemaResult]:
        """Process schema files, resolving relative paths against the root.

        Args:
            schema_paths: Schema paths, relative to the configured root or absolute.

        Returns:
            One SchemaResult per schema path, in input order.
        """
        results = [self.process_schema(path) for path in schema_paths]

        if self._config.output_dir is not None:
            all_types = [ir_type for result in results for ir_type in result.types]
            if all_types:
                write_package_init(all_types, self._config.output_dir)

        return results

    def process_schema(self, schema_path: str | Path) -> SchemaResult:
        """Process a single schema file."""
        label = str(schema_path)
        context = GenerationContext(schema=label)
        context.info(DiagnosticKind.RESOURCE, f"Processing schema: {label}")

        path = self._config.root / schema_path
        if not path.is_file():
            context.error(DiagnosticKind.RESOURCE, f"Schema file not found: {path.resolve()}")
            return SchemaResult(
                schema_path=label,
                generation=GenerationResult(diagnostics=context.diagnostics, schema=label),
            )

        content = path.read_bytes()
        context.info(DiagnosticKind.RESOURCE, f"Schema loaded successfully, size: {len(content)} bytes")

        generation = generate(content, schema=label)
        generation.diagnostics[:0] = context.diagnostics
        result = SchemaResult(schema_path=label, generation=generation)

        if self._config.output_dir is not None and generation.is_successful:
            write_context = GenerationContext(schema=label, diagnostics=generation.diagnostics)
            result.written = write_types(generation.types, self._config.output_dir, write_context)

        return result

    def is_failed(self, result: SchemaResult) -> bool:
        """Check whether a result counts as failed under the configured policy."""
        if not result.is_successful:
            return True
        return self._config.strict and any(
            d.severity == DiagnosticSeverity.WARNING for d in result.diagnostics
        )
