"""Identifier helpers for generated names."""

from __future__ import annotations

import re

_SEPARATORS = str.maketrans({"-": "_", ".": "_", " ": "_"})
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def normalize_identifier(literal: str) -> str:
    """Turn an enumeration literal into an upper-case identifier.

    "-", "." and " " become "_", and a leading digit gets a "_" prefix.
    Distinct literals may normalize to the same identifier.

    Example:
        >>> normalize_identifier("value-1")
        'VALUE_1'
        >>> normalize_identifier("123value")
        '_123VALUE'
    """
    identifier = literal.translate(_SEPARATORS).upper()
    if identifier[:1].isdigit():
        identifier = f"_{identifier}"
    return identifier


def module_name(type_name: str) -> str:
    """Get the snake_case module name for a generated type."""
    name = _CAMEL_BOUNDARY.sub("_", type_name.translate(_SEPARATORS))
    name = name.lower()
    if name[:1].isdigit():
        name = f"_{name}"
    return name
