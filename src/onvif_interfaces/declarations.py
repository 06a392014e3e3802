"""Declaration nodes handed to the renderer.

Each generated module is a list of these nodes. Every declaration kind is
a separate dataclass tagged with a ``DeclarationKind``, so consumers can
dispatch on ``node.kind`` instead of probing fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from onvif_interfaces.annotations import Documentation
from onvif_interfaces.primitives import UNKNOWN_TYPE


class DeclarationKind(Enum):
    """Kinds of nodes in a generated module."""

    IMPORT = "import"
    PRIMITIVE_ALIAS = "primitive_alias"  # type A = string
    LITERAL_UNION = "literal_union"  # type A = 'x' | 'y'
    ARRAY_ALIAS = "array_alias"  # type A = B[]
    INTERFACE = "interface"  # interface A extends B { ... }


@dataclass
class PropertyDef:
    """A named member of an interface."""

    name: str  # Already normalized, possibly quoted
    type_name: str
    is_array: bool = False
    optional: bool = False
    documentation: Documentation | None = None


@dataclass
class IndexSignature:
    """An open member accepting any string key."""

    key_name: str = "key"
    value_type: str = UNKNOWN_TYPE
    documentation: Documentation | None = None


Member = Union[PropertyDef, IndexSignature]


@dataclass
class Declaration:
    """Base for named declarations."""

    kind: ClassVar[DeclarationKind]

    name: str
    documentation: Documentation | None = None


@dataclass
class PrimitiveAlias(Declaration):
    """Alias of a primitive or named type."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.PRIMITIVE_ALIAS

    target: str = UNKNOWN_TYPE


@dataclass
class LiteralUnion(Declaration):
    """Alias of a union of string literals."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.LITERAL_UNION

    values: list[str] = field(default_factory=list)


@dataclass
class ArrayAlias(Declaration):
    """Alias of a homogeneous array."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.ARRAY_ALIAS

    item_type: str = UNKNOWN_TYPE


@dataclass
class InterfaceDeclaration(Declaration):
    """Interface with members and an optional base interface."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.INTERFACE

    members: list[Member] = field(default_factory=list)
    heritage: str | None = None

    @property
    def properties(self) -> list[PropertyDef]:
        return [m for m in self.members if isinstance(m, PropertyDef)]

    @property
    def index_signatures(self) -> list[IndexSignature]:
        return [m for m in self.members if isinstance(m, IndexSignature)]

    def get_property(self, name: str) -> PropertyDef | None:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None


@dataclass
class ImportDeclaration:
    """Bring named types in from another generated module."""

    kind: ClassVar[DeclarationKind] = DeclarationKind.IMPORT

    module: str
    names: list[str] = field(default_factory=list)


Node = Union[ImportDeclaration, PrimitiveAlias, LiteralUnion, ArrayAlias, InterfaceDeclaration]
