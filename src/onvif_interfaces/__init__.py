"""onvif-interfaces - TypeScript interfaces from ONVIF XSD and WSDL files.

Compiles a directory of interdependent XML Schema and WSDL documents into
one TypeScript module per document, plus a shared ``basics`` module, with
the imports between modules worked out automatically.

Example:
    from onvif_interfaces import InterfaceGenerator

    result = InterfaceGenerator().run("specs/wsdl", "src/interfaces")
    for diagnostic in result.diagnostics:
        print(diagnostic)
"""

from onvif_interfaces.compiler import ModuleCompiler, is_optional
from onvif_interfaces.errors import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    GenerationResult,
    SchemaContractError,
)
from onvif_interfaces.generator import InterfaceGenerator
from onvif_interfaces.registry import TypeRegistry
from onvif_interfaces.renderer import render_module
from onvif_interfaces.schema import SchemaDocument

__version__ = "0.1.0"

__all__ = [
    # Main API
    "InterfaceGenerator",
    "ModuleCompiler",
    "SchemaDocument",
    "TypeRegistry",
    "render_module",
    "is_optional",
    # Results and errors
    "GenerationResult",
    "Diagnostic",
    "DiagnosticKind",
    "DiagnosticSeverity",
    "SchemaContractError",
]
