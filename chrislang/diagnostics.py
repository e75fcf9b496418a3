"""Source locations and the collection of errors and warnings found while checking."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator


@dataclass(frozen=True)
class SourceLocation:
    """A position in a source file."""

    file: str = "<unknown>"
    line: int = 0
    column: int = 0

    def __str__(self) -> str:
        return f"{self.file}:{self.line}:{self.column}"


class Severity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """One reported problem, identified by a code such as ``E3001``."""

    severity: Severity
    code: str
    message: str
    location: SourceLocation

    def __str__(self) -> str:
        return f"{self.location}: {self.severity.value}[{self.code}]: {self.message}"


@dataclass
class DiagnosticEngine:
    """Collects diagnostics in the order they are reported."""

    diagnostics: list[Diagnostic] = field(default_factory=list)

    def _report(
        self, severity: Severity, code: str, message: str, location: SourceLocation
    ) -> Diagnostic:
        diagnostic = Diagnostic(severity, code, message, location)
        self.diagnostics.append(diagnostic)
        return diagnostic

    def error(self, code: str, message: str, location: SourceLocation) -> Diagnostic:
        """Record an error."""
        return self._report(Severity.ERROR, code, message, location)

    def warning(self, code: str, message: str, location: SourceLocation) -> Diagnostic:
        """Record a warning."""
        return self._report(Severity.WARNING, code, message, location)

    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.diagnostics)

    def codes(self) -> list[str]:
        """Codes of all diagnostics, in report order."""
        return [d.code for d in self.diagnostics]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)