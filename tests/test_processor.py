"""Tests for batch schema processing."""

from __future__ import annotations

import ast
import logging
from pathlib import Path

import pytest

from xsd_typegen import (
    ConfigurationError,
    DiagnosticKind,
    DiagnosticSeverity,
    GenerationContext,
    GeneratorConfig,
    SchemaProcessor,
)


class TestProcessSchema:
    """Tests for processing single schema files."""

    def test_note_schema(self, processor: SchemaProcessor) -> None:
        result = processor.process_schema("note.xsd")

        assert result.is_successful
        assert result.schema_path == "note.xsd"
        assert [t.name for t in result.types] == ["Note"]
        assert result.written == []

    def test_resource_diagnostics_come_first(self, processor: SchemaProcessor) -> None:
        result = processor.process_schema("note.xsd")
        messages = [d.message for d in result.diagnostics]

        assert messages[0] == "Processing schema: note.xsd"
        assert messages[1].startswith("Schema loaded successfully, size: ")
        assert messages[1].endswith(" bytes")

    def test_missing_schema(self, processor: SchemaProcessor, schemas_root: Path) -> None:
        result = processor.process_schema("missing.xsd")

        assert not result.is_successful
        assert result.types == []
        error = result.diagnostics[-1]
        assert error.kind == DiagnosticKind.RESOURCE
        assert error.severity == DiagnosticSeverity.ERROR
        assert error.message == f"Schema file not found: {(schemas_root / 'missing.xsd').resolve()}"

    def test_malformed_schema(self, processor: SchemaProcessor) -> None:
        result = processor.process_schema("malformed.xsd")

        assert not result.is_successful
        assert result.error_count == 1
        assert result.diagnostics[-1].kind == DiagnosticKind.SCHEMA

    def test_absolute_path(self, processor: SchemaProcessor, schemas_root: Path) -> None:
        result = processor.process_schema(schemas_root / "enum-test.xsd")
        assert [t.name for t in result.types] == ["StatusType", "PriorityLevel", "TaskState"]


class TestProcess:
    """Tests for batch processing."""

    def test_failure_does_not_stop_batch(self, processor: SchemaProcessor) -> None:
        results = processor.process(["missing.xsd", "note.xsd", "malformed.xsd", "enum-test.xsd"])

        assert [r.is_successful for r in results] == [False, True, False, True]
        assert [r.schema_path for r in results] == [
            "missing.xsd",
            "note.xsd",
            "malformed.xsd",
            "enum-test.xsd",
        ]

    def test_writes_modules(self, writing_processor: SchemaProcessor, output_dir: Path) -> None:
        results = writing_processor.process(["note.xsd", "enum-test.xsd"])

        assert [p.name for p in results[0].written] == ["note.py"]
        assert (output_dir / "note.py").is_file()
        assert (output_dir / "status_type.py").is_file()
        init = (output_dir / "__init__.py").read_text(encoding="utf-8")
        ast.parse(init)
        assert "from .note import Note" in init
        assert "from .status_type import StatusType" in init

    def test_failed_schema_writes_nothing(
        self, writing_processor: SchemaProcessor, output_dir: Path
    ) -> None:
        results = writing_processor.process(["malformed.xsd"])

        assert results[0].written == []
        assert not (output_dir / "__init__.py").exists()

    def test_logs_diagnostics(
        self, processor: SchemaProcessor, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.INFO, logger="xsd_typegen"):
            processor.process(["types-test.xsd"])

        assert any("Processing schema: types-test.xsd" in r.getMessage() for r in caplog.records)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "Unsupported type 'StatusType'" in warnings[0].getMessage()


class TestStrictMode:
    """Tests for the failure policy."""

    def test_warnings_pass_by_default(self, processor: SchemaProcessor) -> None:
        result = processor.process_schema("types-test.xsd")

        assert result.warning_count == 1
        assert not processor.is_failed(result)

    def test_warnings_fail_in_strict_mode(self, schemas_root: Path) -> None:
        processor = SchemaProcessor(GeneratorConfig(root=schemas_root, strict=True))
        result = processor.process_schema("types-test.xsd")

        assert result.is_successful
        assert processor.is_failed(result)

    def test_errors_always_fail(self, processor: SchemaProcessor) -> None:
        assert processor.is_failed(processor.process_schema("missing.xsd"))


class TestProcessorConfig:
    """Tests for configuration checks at construction."""

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            SchemaProcessor(GeneratorConfig(root=tmp_path / "nope"))

    def test_config_exposed(self, schemas_root: Path) -> None:
        config = GeneratorConfig(root=schemas_root)
        assert SchemaProcessor(config).config is config


class TestGenerationContext:
    """Tests for diagnostic collection."""

    def test_counts(self) -> None:
        context = GenerationContext(schema="a.xsd")
        context.info(DiagnosticKind.MODEL, "one")
        context.warn(DiagnosticKind.TYPE, "two")
        context.error(DiagnosticKind.SCHEMA, "three")

        assert context.error_count == 1
        assert context.warning_count == 1
        assert context.has_errors

    def test_declaration_path(self) -> None:
        context = GenerationContext(schema="a.xsd")
        context.push_declaration("Note")
        context.push_declaration("to")
        diagnostic = context.warn(DiagnosticKind.TYPE, "message")
        context.pop_declaration()

        assert diagnostic.path == "/Note/to"
        assert context.current_path == "/Note"
        assert str(diagnostic) == "[type] a.xsd:/Note/to: message"
