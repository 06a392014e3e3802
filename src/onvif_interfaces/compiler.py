"""Compile one schema document into a list of declarations.

A ``ModuleCompiler`` walks the simple types, complex types and elements of a
document, in that order, and builds the declaration nodes of one output
module. While doing so it records which type names the module declares and
which named types it uses; both sets are read once all modules are compiled
to work out the module's imports.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from onvif_interfaces.annotations import clean_documentation
from onvif_interfaces.declarations import (
    ArrayAlias,
    Declaration,
    ImportDeclaration,
    IndexSignature,
    InterfaceDeclaration,
    LiteralUnion,
    Member,
    Node,
    PrimitiveAlias,
    PropertyDef,
)
from onvif_interfaces.errors import (
    Diagnostic,
    DiagnosticKind,
    DiagnosticSeverity,
    SchemaContractError,
)
from onvif_interfaces.naming import camel_case, clean_name, local_name, ref_field_name
from onvif_interfaces.primitives import is_named_type, map_data_type
from onvif_interfaces.registry import TypeRegistry, plan_imports
from onvif_interfaces.schema import (
    ComplexTypeDef,
    ContentModel,
    ElementDef,
    FieldDef,
    SchemaDocument,
    SimpleTypeDef,
    SimpleTypeKind,
)

logger = logging.getLogger(__name__)

UNBOUNDED = "unbounded"


def is_optional(use: str | None, min_occurs: str | None, max_occurs: str | None) -> bool:
    """Decide whether a sequence element is optional.

    ``use="optional"`` always wins. Otherwise ``use="required"``,
    ``minOccurs="1"`` or the absence of both occurrence attributes make the
    member required; anything else is optional.
    """
    if use == "optional":
        return True
    if use == "required" or min_occurs == "1" or (min_occurs is None and max_occurs is None):
        return False
    return True


def is_attribute_optional(use: str | None) -> bool:
    """Attributes are optional unless marked ``use="required"``."""
    return use != "required"


def is_array(max_occurs: str | None) -> bool:
    return max_occurs == UNBOUNDED


class ModuleCompiler:
    """Builds the declarations of one output module."""

    def __init__(self, module_name: str, registry: TypeRegistry, source: str = ""):
        self.module_name = module_name
        self.registry = registry
        self.source = source
        self.nodes: list[Node] = []
        self.imports: list[ImportDeclaration] = []
        self.declared_types: set[str] = set()
        # Insertion-ordered set: import clauses follow discovery order
        self.used_types: dict[str, None] = {}
        self.diagnostics: list[Diagnostic] = []
        self._resolved = False

    @classmethod
    def for_document(cls, document: SchemaDocument, registry: TypeRegistry) -> ModuleCompiler:
        return cls(document.module_name, registry, source=str(document.path))

    @property
    def declarations(self) -> list[Declaration]:
        """Declared nodes, without import clauses."""
        return [n for n in self.nodes if not isinstance(n, ImportDeclaration)]

    def get_declaration(self, name: str) -> Declaration | None:
        for declaration in self.declarations:
            if declaration.name == name:
                return declaration
        return None

    def compile(self, document: SchemaDocument) -> list[Node]:
        """Generate declarations for every definition of a document."""
        logger.debug("Compiling %s into module %s", document.path, self.module_name)
        for simple_type in document.simple_types:
            self.generate_simple_type(simple_type)
        for complex_type in document.complex_types:
            self.generate_complex_type(complex_type)
        for element in document.elements:
            self.generate_element(element)
        return self.nodes

    def use_type(self, type_name: str) -> None:
        """Record a reference to a type, if it is a named type."""
        if is_named_type(type_name):
            self.used_types.setdefault(type_name, None)

    def add_declaration(self, declaration: Declaration) -> bool:
        """Add a declaration, registering its name.

        A name that another module registered first, or that this module
        already declares, is dropped with a warning.
        """
        name = declaration.name
        if not self.registry.register(name, self.module_name):
            owner = self.registry.owner(name)
            self._warn(
                DiagnosticKind.DUPLICATE_DECLARATION,
                f"{name} is already declared in {owner}",
                name,
            )
            return False
        if name in self.declared_types:
            self._warn(
                DiagnosticKind.DUPLICATE_DECLARATION,
                f"{name} is already declared in {self.module_name}",
                name,
            )
            return False
        self.declared_types.add(name)
        self.nodes.append(declaration)
        return True

    def generate_simple_type(self, simple_type: SimpleTypeDef) -> Declaration | None:
        name = clean_name(simple_type.name)
        documentation = clean_documentation(simple_type.documentation)

        declaration: Declaration
        if simple_type.kind == SimpleTypeKind.ENUMERATION:
            declaration = LiteralUnion(
                name=name,
                documentation=documentation,
                values=list(simple_type.values),
            )
        elif simple_type.kind == SimpleTypeKind.RESTRICTION:
            target = map_data_type(simple_type.base)
            self.use_type(target)
            declaration = PrimitiveAlias(name=name, documentation=documentation, target=target)
        elif simple_type.kind == SimpleTypeKind.LIST:
            item_type = map_data_type(simple_type.item_type)
            self.use_type(item_type)
            declaration = ArrayAlias(name=name, documentation=documentation, item_type=item_type)
        else:
            logger.debug("Skipping simple type %s without restriction or list", name)
            return None

        return declaration if self.add_declaration(declaration) else None

    def generate_complex_type(self, complex_type: ComplexTypeDef) -> InterfaceDeclaration | None:
        """Generate an interface for a complex type.

        Content of a complexContent extension is flattened into the type,
        which then extends the base instead of repeating its members.

        Raises:
            SchemaContractError: If the type has both an extension and its
                own sequence.
        """
        name = clean_name(complex_type.name)
        content = complex_type.content
        heritage = None

        if complex_type.base is not None:
            base_name = local_name(complex_type.base)
            if base_name == complex_type.name:
                self._warn(
                    DiagnosticKind.SELF_EXTENSION,
                    f"{name} extends itself and was skipped",
                    name,
                )
                return None
            if content.has_sequence:
                raise SchemaContractError(
                    f"complexType {complex_type.name} has both an extension and its own sequence",
                    type_name=complex_type.name,
                    source=self.source,
                )
            heritage = clean_name(base_name)
            self.use_type(heritage)
            content = self._flatten(content, complex_type.extension)

        interface = InterfaceDeclaration(
            name=name,
            documentation=clean_documentation(complex_type.documentation),
            members=self.build_members(content),
            heritage=heritage,
        )
        return interface if self.add_declaration(interface) else None

    @staticmethod
    def _flatten(own: ContentModel, extension: ContentModel | None) -> ContentModel:
        if extension is None:
            return own
        return ContentModel(
            attributes=own.attributes + extension.attributes,
            elements=list(extension.elements),
            wildcards=list(extension.wildcards),
            has_sequence=extension.has_sequence,
        )

    def build_members(self, content: ContentModel) -> list[Member]:
        """Build members: attributes, then sequence elements, then the wildcard."""
        members: list[Member] = []
        for attribute in content.attributes:
            prop = self.build_property(attribute, attribute=True)
            if prop is not None:
                members.append(prop)

        for element in content.elements:
            if element.inline_type is not None:
                # Promote the anonymous type and point the element at it
                self.generate_complex_type(element.inline_type)
                element = replace(element, type=element.inline_type.name)
            prop = self.build_property(element)
            if prop is not None:
                members.append(prop)

        for wildcard in content.wildcards:
            if wildcard.unrestricted:
                members.append(
                    IndexSignature(documentation=clean_documentation(wildcard.documentation))
                )
                break
        return members

    def build_property(self, field: FieldDef, attribute: bool = False) -> PropertyDef | None:
        name = field.name
        if not name and field.ref:
            name = ref_field_name(field.ref)
        if not name:
            logger.warning("Skipping unnamed member in %s", self.module_name)
            return None

        type_name = clean_name(map_data_type(field.type))
        self.use_type(type_name)
        if attribute:
            optional = is_attribute_optional(field.use)
        else:
            optional = is_optional(field.use, field.min_occurs, field.max_occurs)
        return PropertyDef(
            name=camel_case(name),
            type_name=type_name,
            is_array=is_array(field.max_occurs),
            optional=optional,
            documentation=clean_documentation(field.documentation),
        )

    def generate_element(self, element: ElementDef) -> Declaration | None:
        """Generate a declaration for a top-level element.

        An inline anonymous type is promoted under the element's name; a
        reference to a named type becomes an empty interface extending it;
        a reference to a primitive becomes an alias. Elements with neither
        produce nothing.
        """
        if element.inline_type is not None:
            inline_type = element.inline_type
            if inline_type.documentation is None:
                inline_type = replace(inline_type, documentation=element.documentation)
            return self.generate_complex_type(inline_type)

        if not element.type:
            return None

        name = clean_name(element.name)
        type_name = clean_name(map_data_type(element.type))
        if name == type_name:
            logger.debug("Element %s has the same name as its type", name)
            return None

        documentation = clean_documentation(element.documentation)
        declaration: Declaration
        if is_named_type(type_name):
            self.use_type(type_name)
            declaration = InterfaceDeclaration(
                name=name,
                documentation=documentation,
                heritage=type_name,
            )
        else:
            declaration = PrimitiveAlias(name=name, documentation=documentation, target=type_name)
        return declaration if self.add_declaration(declaration) else None

    def resolve_imports(self) -> list[ImportDeclaration]:
        """Prepend imports for used types declared in other modules.

        Names missing from the registry are reported and left out.
        """
        if self._resolved:
            return self.imports
        plan = plan_imports(self.used_types, self.declared_types, self.registry)
        for name in plan.unresolved:
            self._warn(
                DiagnosticKind.UNRESOLVED_TYPE,
                f"Type {name} not found in registry",
                name,
            )
        self.imports = plan.imports
        self.nodes[:0] = plan.imports
        self._resolved = True
        return self.imports

    def _warn(self, kind: DiagnosticKind, message: str, type_name: str = "") -> None:
        logger.warning("%s: %s", self.module_name, message)
        self.diagnostics.append(
            Diagnostic(
                kind=kind,
                message=message,
                module=self.module_name,
                type_name=type_name,
                severity=DiagnosticSeverity.WARNING,
            )
        )
