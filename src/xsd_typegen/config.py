"""Processor configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from xsd_typegen.errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class GeneratorConfig:
    """Options for a generation run.

    Attributes:
        root: Directory schema paths are resolved against.
        output_dir: Where generated modules are written; None to skip writing.
        strict: Treat schemas that produced warnings as failed.
    """

    root: Path
    output_dir: Path | None = None
    strict: bool = False

    @classmethod
    def from_options(cls, options: Mapping[str, str]) -> GeneratorConfig:
        """Build a configuration from string options, as passed by a build plugin.

        Recognized keys: ``path`` (required), ``output``, ``strict``.

        Raises:
            ConfigurationError: If ``path`` is missing or an option is invalid.
        """
        root = options.get("path")
        if not root:
            raise ConfigurationError("path option is required")

        output = options.get("output")
        return cls(
            root=Path(root),
            output_dir=Path(output) if output else None,
            strict=_parse_bool("strict", options.get("strict", "false")),
        )

    def validate(self) -> None:
        """Check the configuration before any schema is read.

        Raises:
            ConfigurationError: If the root directory does not exist.
        """
        if not self.root.is_dir():
            raise ConfigurationError(f"Root path is not a directory: {self.root}")
        if self.output_dir is not None and self.output_dir.exists() and not self.output_dir.is_dir():
            raise ConfigurationError(f"Output path is not a directory: {self.output_dir}")


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid value for option '{name}': '{value}'")
