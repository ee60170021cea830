"""Generation context for collecting diagnostics while building types."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from xsd_typegen.errors import Diagnostic, DiagnosticKind, DiagnosticSeverity

logger = logging.getLogger("xsd_typegen")

_LOG_LEVELS = {
    DiagnosticSeverity.ERROR: logging.ERROR,
    DiagnosticSeverity.WARNING: logging.WARNING,
    DiagnosticSeverity.INFO: logging.INFO,
}


@dataclass
class GenerationContext:
    """Diagnostics sink threaded through every generation step.

    Tracks:
    - The schema being processed (a label used in every diagnostic)
    - The names of the declarations being visited, outermost first
    - Collected diagnostics

    Every diagnostic is also forwarded to the ``xsd_typegen`` logger.
    """

    schema: str = ""
    diagnostics: list[Diagnostic] = field(default_factory=list)
    _declarations: list[str] = field(default_factory=list)

    @property
    def current_path(self) -> str:
        """Get the slash-separated path of the current declaration, e.g. "/Note/to"."""
        if not self._declarations:
            return ""
        return "/" + "/".join(self._declarations)

    def push_declaration(self, name: str) -> None:
        self._declarations.append(name)

    def pop_declaration(self) -> None:
        if self._declarations:
            self._declarations.pop()

    def add_diagnostic(
        self,
        kind: DiagnosticKind,
        message: str,
        severity: DiagnosticSeverity = DiagnosticSeverity.INFO,
        node: str | None = None,
    ) -> Diagnostic:
        """Record a diagnostic at the current declaration path."""
        diagnostic = Diagnostic(
            kind=kind,
            message=message,
            severity=severity,
            schema=self.schema,
            path=self.current_path,
            node=node,
        )
        self.diagnostics.append(diagnostic)
        logger.log(_LOG_LEVELS[severity], "%s", diagnostic)
        return diagnostic

    def info(self, kind: DiagnosticKind, message: str, node: str | None = None) -> Diagnostic:
        return self.add_diagnostic(kind, message, DiagnosticSeverity.INFO, node)

    def warn(self, kind: DiagnosticKind, message: str, node: str | None = None) -> Diagnostic:
        return self.add_diagnostic(kind, message, DiagnosticSeverity.WARNING, node)

    def error(self, kind: DiagnosticKind, message: str, node: str | None = None) -> Diagnostic:
        return self.add_diagnostic(kind, message, DiagnosticSeverity.ERROR, node)

    def extend(self, diagnostics: list[Diagnostic]) -> None:
        """Adopt diagnostics produced outside this context."""
        for diagnostic in diagnostics:
            if not diagnostic.schema:
                diagnostic.schema = self.schema
            self.diagnostics.append(diagnostic)
            logger.log(_LOG_LEVELS[diagnostic.severity], "%s", diagnostic)

    @property
    def error_count(self) -> int:
        """Get the number of error diagnostics collected."""
        return sum(1 for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING)

    @property
    def has_errors(self) -> bool:
        return self.error_count > 0


class DeclarationContext:
    """Context manager for declaration traversal."""

    def __init__(self, context: GenerationContext, name: str):
        self._context = context
        self._name = name

    def __enter__(self) -> DeclarationContext:
        self._context.push_declaration(self._name)
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self._context.pop_declaration()
