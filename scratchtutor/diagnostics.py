"""Diagnostic messages for project ingestion and asset delivery.

Library code never prints. Problems that are recovered from locally, such as
an unknown opcode in a script or an asset that cannot be packaged, are
recorded here so the caller decides how to surface them.
"""

import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TextIO


class DiagnosticLevel(Enum):
    """Severity level for diagnostic messages."""
    WARNING = "Warning"
    INFO = "Info"


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic message."""
    level: DiagnosticLevel
    message: str
    scope: str
    detail: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.level.value}: {self.message}: {self.scope}"
        if self.detail:
            result += f"\n  -> {self.detail}"
        return result


@dataclass
class DiagnosticContext:
    """Collects diagnostics for one pipeline invocation."""
    scope: str = "Project"
    diagnostics: List[Diagnostic] = field(default_factory=list)

    def child(self, scope: str) -> "DiagnosticContext":
        """Return a context that records into this one under another scope."""
        return DiagnosticContext(scope=scope, diagnostics=self.diagnostics)

    def add(self, level: DiagnosticLevel, message: str, detail: Optional[str] = None) -> None:
        self.diagnostics.append(Diagnostic(level=level, message=message, scope=self.scope, detail=detail))

    def warning(self, message: str, detail: Optional[str] = None) -> None:
        self.add(DiagnosticLevel.WARNING, message, detail)

    def info(self, message: str, detail: Optional[str] = None) -> None:
        self.add(DiagnosticLevel.INFO, message, detail)

    def has_warnings(self) -> bool:
        return any(d.level == DiagnosticLevel.WARNING for d in self.diagnostics)

    def get_warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.level == DiagnosticLevel.WARNING]

    def print_all(self, stream: Optional[TextIO] = None) -> None:
        """Print all diagnostics, to stderr unless another stream is given."""
        out = stream or sys.stderr
        for diag in self.diagnostics:
            print(diag, file=out)

    def summary(self) -> str:
        """Return a summary of diagnostics."""
        warnings = len(self.get_warnings())
        if warnings:
            return f"{warnings} warning{'s' if warnings != 1 else ''}"
        return "No issues"
