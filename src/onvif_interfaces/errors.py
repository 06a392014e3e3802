"""Generation error types and diagnostics."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from onvif_interfaces.compiler import ModuleCompiler


class DiagnosticKind(Enum):
    """Kinds of non-fatal events reported during generation."""

    UNRESOLVED_TYPE = "unresolved_type"  # Used type missing from the registry
    DUPLICATE_DECLARATION = "duplicate_declaration"  # Name already declared
    SELF_EXTENSION = "self_extension"  # complexType extends itself


class DiagnosticSeverity(Enum):
    """Severity levels for diagnostics."""

    WARNING = "warning"
    INFO = "info"


@dataclass
class Diagnostic:
    """A non-fatal event found while compiling a module."""

    kind: DiagnosticKind
    message: str
    module: str = ""
    type_name: str = ""
    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING

    def __str__(self) -> str:
        return f"[{self.kind.value}] {self.module}: {self.message}"


@dataclass
class GenerationResult:
    """Result of a generation run."""

    basics: ModuleCompiler
    modules: list[ModuleCompiler] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        found = list(self.basics.diagnostics)
        for module in self.modules:
            found.extend(module.diagnostics)
        return found

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING)


class SchemaContractError(Exception):
    """Raised when a schema breaks a structural assumption of the compiler.

    The corpus is assumed to be well formed, so these abort the whole run.
    """

    def __init__(self, message: str, type_name: str = "", source: str = ""):
        super().__init__(message)
        self.type_name = type_name
        self.source = source
