"""Attribute-tagged document tree.

Schema documents are read into a uniform tree where every node keeps its
attributes in ``meta`` and its child elements in ``children``, keyed by
``prefix:local`` tag. A child that occurs once is still stored as a
one-element list, so callers can always index ``[0]`` or iterate.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from lxml import etree

from onvif_interfaces.namespaces import CANONICAL_PREFIXES, XSD_PREFIX

DOCUMENTATION_TAG = f"{XSD_PREFIX}:documentation"


@dataclass
class SchemaNode:
    """A single element of a parsed schema document."""

    tag: str
    meta: dict[str, str] = field(default_factory=dict)
    children: dict[str, list[SchemaNode]] = field(default_factory=dict)
    text: str = ""

    def get(self, tag: str) -> list[SchemaNode]:
        """Get all children with the given tag (empty list if none)."""
        return self.children.get(tag, [])

    def first(self, tag: str) -> SchemaNode | None:
        """Get the first child with the given tag."""
        nodes = self.children.get(tag)
        return nodes[0] if nodes else None

    def append(self, child: SchemaNode) -> None:
        self.children.setdefault(child.tag, []).append(child)


def node_tag(element: etree._Element) -> str:
    """Build the ``prefix:local`` key for an element.

    XML Schema and WSDL elements get a canonical prefix so documents that
    bind ``xsd:`` or no prefix at all index the same way as ``xs:``.
    """
    qname = etree.QName(element)
    prefix = CANONICAL_PREFIXES.get(qname.namespace or "")
    if prefix is None:
        prefix = element.prefix
    if prefix:
        return f"{prefix}:{qname.localname}"
    return qname.localname


def _inner_markup(element: etree._Element) -> str:
    """Serialize the content of an element, keeping nested markup as text."""
    parts = [element.text or ""]
    for child in element:
        parts.append(etree.tostring(child, encoding="unicode", with_tail=True))
    return "".join(parts)


def build_node(element: etree._Element) -> SchemaNode:
    """Convert an lxml element (and its subtree) to a SchemaNode."""
    tag = node_tag(element)
    # Attribute keys are kept as local names, like schema attribute names
    meta = {etree.QName(key).localname: value for key, value in element.attrib.items()}
    node = SchemaNode(tag=tag, meta=meta)

    if tag == DOCUMENTATION_TAG:
        node.text = _inner_markup(element)
        return node

    node.text = (element.text or "").strip()
    for child in element:
        # Skip comments and processing instructions
        if not isinstance(child.tag, str):
            continue
        node.append(build_node(child))
    return node


def parse_xml(content: bytes) -> SchemaNode:
    """Parse document bytes into a SchemaNode tree.

    Raises:
        etree.XMLSyntaxError: If the document is not well formed.
    """
    parser = etree.XMLParser(remove_blank_text=True, resolve_entities=False)
    root = etree.fromstring(content, parser)
    return build_node(root)


def parse_file(path: str | Path) -> SchemaNode:
    """Parse a document from disk."""
    return parse_xml(Path(path).read_bytes())
