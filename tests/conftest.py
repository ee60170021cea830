"""pytest configuration and fixtures for xsd_typegen tests."""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from xsd_typegen import GenerationContext, GeneratorConfig, SchemaProcessor
from tests.fixture_loader import SCHEMAS_DIR


@pytest.fixture
def context() -> GenerationContext:
    """Provide an empty generation context."""
    return GenerationContext(schema="test.xsd")


@pytest.fixture
def schemas_root(tmp_path: Path) -> Path:
    """Copy the schema fixtures into a temporary root directory."""
    root = tmp_path / "schemas"
    shutil.copytree(SCHEMAS_DIR, root)
    return root


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for generated modules."""
    return tmp_path / "generated"


@pytest.fixture
def processor(schemas_root: Path) -> SchemaProcessor:
    """Provide a processor that reports without writing files."""
    return SchemaProcessor(GeneratorConfig(root=schemas_root))


@pytest.fixture
def writing_processor(schemas_root: Path, output_dir: Path) -> SchemaProcessor:
    """Provide a processor that writes generated modules."""
    return SchemaProcessor(GeneratorConfig(root=schemas_root, output_dir=output_dir))
