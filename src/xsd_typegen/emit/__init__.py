"""Source emission for generated types."""

from xsd_typegen.emit.python import PYTHON_TYPES, PythonType, PythonTypeWriter, python_identifier
from xsd_typegen.emit.writer import write_package_init, write_types

__all__ = [
    "PYTHON_TYPES",
    "PythonType",
    "PythonTypeWriter",
    "python_identifier",
    "write_package_init",
    "write_types",
]
