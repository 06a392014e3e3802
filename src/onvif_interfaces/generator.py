"""Main entry point for generating interfaces from a specification tree.

Generation runs in two passes. The first compiles every document, XSD files
before WSDL files, registering each declaration in a shared TypeRegistry.
The second resolves each module's imports against the now complete
registry. Modules are only rendered after both passes.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path

from onvif_interfaces.compiler import ModuleCompiler
from onvif_interfaces.declarations import PrimitiveAlias
from onvif_interfaces.errors import GenerationResult
from onvif_interfaces.primitives import BASIC_TYPES
from onvif_interfaces.registry import TypeRegistry
from onvif_interfaces.renderer import render_module
from onvif_interfaces.schema import DocumentKind, SchemaDocument

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = ".ts"


def discover_documents(source_dir: Path) -> list[Path]:
    """Find all documents under a directory, schemas before service descriptions."""
    found: list[Path] = []
    for kind in DocumentKind:
        found.extend(sorted(source_dir.rglob(f"*.{kind.value}")))
    return found


class InterfaceGenerator:
    """Generates one TypeScript module per XSD/WSDL document.

    Example:
        generator = InterfaceGenerator()
        result = generator.run("specs/wsdl", "interfaces")
        for diagnostic in result.diagnostics:
            print(diagnostic)
    """

    def __init__(
        self,
        basics_module: str = "basics",
        version_marker: str = "ver2",
        on_document: Callable[[Path], None] | None = None,
    ):
        """Initialize the generator.

        Args:
            basics_module: Name of the shared primitives module.
            version_marker: Path fragment that marks second-generation
                documents, whose module names get a "2" suffix.
            on_document: Called with each document path before it is compiled.
        """
        self.basics_module = basics_module
        self.version_marker = version_marker
        self.on_document = on_document

    def build_basics(self, registry: TypeRegistry) -> ModuleCompiler:
        """Build the shared primitives module and seed the registry with it."""
        basics = ModuleCompiler(self.basics_module, registry)
        for name, target in BASIC_TYPES.items():
            basics.add_declaration(PrimitiveAlias(name=name, target=target))
        return basics

    def compile_documents(
        self,
        documents: list[SchemaDocument],
        registry: TypeRegistry | None = None,
    ) -> GenerationResult:
        """Compile already loaded documents and resolve their imports.

        Documents are compiled in the given order; earlier documents own the
        names they declare.
        """
        registry = registry if registry is not None else TypeRegistry()
        result = GenerationResult(basics=self.build_basics(registry))

        for document in documents:
            if self.on_document is not None:
                self.on_document(document.path)
            compiler = ModuleCompiler.for_document(document, registry)
            compiler.compile(document)
            result.modules.append(compiler)

        for compiler in result.modules:
            compiler.resolve_imports()
        return result

    def generate(self, source_dir: str | Path) -> GenerationResult:
        """Load and compile every document under a directory.

        Raises:
            SchemaContractError: If a schema breaks a structural assumption.
        """
        source_dir = Path(source_dir)
        documents = []
        for path in discover_documents(source_dir):
            logger.debug("Loading %s", path)
            documents.append(SchemaDocument.from_path(path, self.version_marker))
        return self.compile_documents(documents)

    def write(self, result: GenerationResult, output_dir: str | Path) -> list[Path]:
        """Render every module of a result into the output directory."""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for compiler in [*result.modules, result.basics]:
            path = output_dir / f"{compiler.module_name}{OUTPUT_SUFFIX}"
            path.write_text(render_module(compiler.nodes), encoding="utf-8")
            logger.debug("Saved %s", path)
            written.append(path)
        result.written = written
        return written

    def run(self, source_dir: str | Path, output_dir: str | Path) -> GenerationResult:
        """Generate and write all modules."""
        result = self.generate(source_dir)
        self.write(result, output_dir)
        return result
