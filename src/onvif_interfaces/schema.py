"""Schema model read from XSD and WSDL documents.

The model mirrors the parts of XML Schema the generator understands:
named simple types, complex types (with complexContent extension,
attributes, sequences and wildcards) and top-level elements.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from onvif_interfaces.namespaces import ANY_NAMESPACE
from onvif_interfaces.tree import SchemaNode, parse_file


class DocumentKind(Enum):
    """Kinds of source documents, in processing order."""

    SCHEMA = "xsd"
    SERVICE = "wsdl"


class SimpleTypeKind(Enum):
    """How a simple type is defined."""

    ENUMERATION = "enumeration"
    RESTRICTION = "restriction"
    LIST = "list"


def get_documentation(node: SchemaNode) -> str | None:
    """Get the raw text of the first xs:annotation/xs:documentation."""
    annotation = node.first("xs:annotation")
    if annotation is None:
        return None
    documentation = annotation.first("xs:documentation")
    if documentation is None:
        return None
    return documentation.text


def module_name_for(path: str | Path, version_marker: str = "ver2") -> str:
    """Derive the output module name from a document path.

    Documents of the second protocol generation (``ver20/...``) often reuse
    file names of the first one, so they get a ``2`` suffix.
    """
    path = Path(path)
    name = path.stem
    if version_marker and any(part.startswith(version_marker) for part in path.parent.parts):
        name += "2"
    return name


@dataclass
class WildcardDef:
    """An xs:any wildcard inside a sequence."""

    namespace: str | None = None
    documentation: str | None = None

    @property
    def unrestricted(self) -> bool:
        """Whether elements from any namespace are accepted."""
        return self.namespace is None or self.namespace == ANY_NAMESPACE

    @classmethod
    def from_node(cls, node: SchemaNode) -> WildcardDef:
        return cls(
            namespace=node.meta.get("namespace"),
            documentation=get_documentation(node),
        )


@dataclass
class FieldDef:
    """An attribute or sequence element of a complex type."""

    name: str | None = None
    type: str | None = None
    ref: str | None = None
    use: str | None = None
    min_occurs: str | None = None
    max_occurs: str | None = None
    documentation: str | None = None
    inline_type: ComplexTypeDef | None = None

    @classmethod
    def from_node(cls, node: SchemaNode) -> FieldDef:
        meta = node.meta
        inline_type = None
        complex_node = node.first("xs:complexType")
        if complex_node is not None:
            inline_type = ComplexTypeDef.from_node(complex_node, name=meta.get("name"))
        return cls(
            name=meta.get("name"),
            type=meta.get("type"),
            ref=meta.get("ref"),
            use=meta.get("use"),
            min_occurs=meta.get("minOccurs"),
            max_occurs=meta.get("maxOccurs"),
            documentation=get_documentation(node),
            inline_type=inline_type,
        )


@dataclass
class ContentModel:
    """Attributes and sequence content of a complex type or extension."""

    attributes: list[FieldDef] = field(default_factory=list)
    elements: list[FieldDef] = field(default_factory=list)
    wildcards: list[WildcardDef] = field(default_factory=list)
    has_sequence: bool = False

    @classmethod
    def from_node(cls, node: SchemaNode) -> ContentModel:
        content = cls(
            attributes=[FieldDef.from_node(a) for a in node.get("xs:attribute")],
        )
        sequence = node.first("xs:sequence")
        if sequence is not None:
            content.has_sequence = True
            content.elements = [FieldDef.from_node(e) for e in sequence.get("xs:element")]
            content.wildcards = [WildcardDef.from_node(a) for a in sequence.get("xs:any")]
        return content


@dataclass
class ComplexTypeDef:
    """A named (or promoted anonymous) complex type."""

    name: str
    content: ContentModel = field(default_factory=ContentModel)
    base: str | None = None  # e.g., "tt:DeviceEntity"
    extension: ContentModel | None = None
    documentation: str | None = None

    @classmethod
    def from_node(cls, node: SchemaNode, name: str | None = None) -> ComplexTypeDef:
        """Parse a complex type.

        Args:
            node: The xs:complexType node.
            name: Name for anonymous types, taken from the enclosing element.
        """
        base = None
        extension = None
        complex_content = node.first("xs:complexContent")
        if complex_content is not None:
            extension_node = complex_content.first("xs:extension")
            if extension_node is not None:
                base = extension_node.meta.get("base")
                extension = ContentModel.from_node(extension_node)

        return cls(
            name=name or node.meta.get("name", ""),
            content=ContentModel.from_node(node),
            base=base,
            extension=extension,
            documentation=get_documentation(node),
        )


@dataclass
class SimpleTypeDef:
    """A named simple type."""

    name: str
    kind: SimpleTypeKind | None = None
    values: list[str] = field(default_factory=list)  # For enumerations
    base: str | None = None  # For restrictions
    item_type: str | None = None  # For lists
    documentation: str | None = None

    @classmethod
    def from_node(cls, node: SchemaNode) -> SimpleTypeDef:
        simple_type = cls(
            name=node.meta.get("name", ""),
            documentation=get_documentation(node),
        )
        restriction = node.first("xs:restriction")
        list_node = node.first("xs:list")
        if restriction is not None:
            values = [e.meta.get("value", "") for e in restriction.get("xs:enumeration")]
            if values:
                simple_type.kind = SimpleTypeKind.ENUMERATION
                simple_type.values = values
            else:
                simple_type.kind = SimpleTypeKind.RESTRICTION
                simple_type.base = restriction.meta.get("base")
        elif list_node is not None:
            simple_type.kind = SimpleTypeKind.LIST
            simple_type.item_type = list_node.meta.get("itemType")
        return simple_type


@dataclass
class ElementDef:
    """A top-level element."""

    name: str
    type: str | None = None
    inline_type: ComplexTypeDef | None = None
    documentation: str | None = None

    @classmethod
    def from_node(cls, node: SchemaNode) -> ElementDef:
        name = node.meta.get("name", "")
        inline_type = None
        complex_node = node.first("xs:complexType")
        if complex_node is not None:
            inline_type = ComplexTypeDef.from_node(complex_node, name=name)
        return cls(
            name=name,
            type=node.meta.get("type"),
            inline_type=inline_type,
            documentation=get_documentation(node),
        )


@dataclass
class SchemaDocument:
    """One source document and the definitions it contains."""

    path: Path
    module_name: str
    kind: DocumentKind = DocumentKind.SCHEMA
    simple_types: list[SimpleTypeDef] = field(default_factory=list)
    complex_types: list[ComplexTypeDef] = field(default_factory=list)
    elements: list[ElementDef] = field(default_factory=list)

    @classmethod
    def from_schema_node(
        cls,
        schema: SchemaNode | None,
        path: str | Path,
        kind: DocumentKind = DocumentKind.SCHEMA,
        version_marker: str = "ver2",
    ) -> SchemaDocument:
        """Build a document from an xs:schema node (None for no schema)."""
        document = cls(
            path=Path(path),
            module_name=module_name_for(path, version_marker),
            kind=kind,
        )
        if schema is None:
            return document
        document.simple_types = [SimpleTypeDef.from_node(n) for n in schema.get("xs:simpleType")]
        document.complex_types = [ComplexTypeDef.from_node(n) for n in schema.get("xs:complexType")]
        document.elements = [ElementDef.from_node(n) for n in schema.get("xs:element")]
        return document

    @classmethod
    def from_root(
        cls,
        root: SchemaNode,
        path: str | Path,
        version_marker: str = "ver2",
    ) -> SchemaDocument:
        """Build a document from the root node of an XSD or WSDL file."""
        if root.tag == "wsdl:definitions":
            schema = None
            types = root.first("wsdl:types")
            if types is not None:
                schema = types.first("xs:schema")
            return cls.from_schema_node(schema, path, DocumentKind.SERVICE, version_marker)
        return cls.from_schema_node(root, path, DocumentKind.SCHEMA, version_marker)

    @classmethod
    def from_path(cls, path: str | Path, version_marker: str = "ver2") -> SchemaDocument:
        """Read and parse an .xsd or .wsdl file."""
        return cls.from_root(parse_file(path), path, version_marker)
