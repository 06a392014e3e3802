"""Render declaration nodes as TypeScript source."""

from __future__ import annotations

from collections.abc import Iterable

from onvif_interfaces.declarations import (
    DeclarationKind,
    ImportDeclaration,
    IndexSignature,
    InterfaceDeclaration,
    Member,
    Node,
    PropertyDef,
)

INDENT = "  "


def quote(value: str) -> str:
    """Quote a string literal with single quotes."""
    escaped = value.replace("\\", "\\\\").replace("'", "\\'").replace("\n", "\\n")
    return f"'{escaped}'"


def render_import(node: ImportDeclaration) -> str:
    names = ", ".join(node.names)
    return f"import {{ {names} }} from {quote('./' + node.module)};"


def render_member(member: Member) -> str:
    lines = []
    if member.documentation is not None:
        lines.append(member.documentation.as_comment(INDENT))
    if isinstance(member, IndexSignature):
        lines.append(f"{INDENT}[{member.key_name}: string]: {member.value_type};")
    else:
        lines.append(f"{INDENT}{render_property(member)}")
    return "\n".join(lines)


def render_property(prop: PropertyDef) -> str:
    type_text = f"{prop.type_name}[]" if prop.is_array else prop.type_name
    marker = "?" if prop.optional else ""
    return f"{prop.name}{marker}: {type_text};"


def render_interface(node: InterfaceDeclaration) -> str:
    header = f"export interface {node.name}"
    if node.heritage:
        header += f" extends {node.heritage}"
    if not node.members:
        return header + " {}"
    body = "\n".join(render_member(m) for m in node.members)
    return f"{header} {{\n{body}\n}}"


def render_node(node: Node) -> str:
    """Render a single node, including its documentation comment."""
    kind = getattr(node, "kind", None)
    if kind == DeclarationKind.IMPORT:
        return render_import(node)

    if kind == DeclarationKind.INTERFACE:
        text = render_interface(node)
    elif kind == DeclarationKind.LITERAL_UNION:
        union = " | ".join(quote(v) for v in node.values) or "never"
        text = f"export type {node.name} = {union};"
    elif kind == DeclarationKind.ARRAY_ALIAS:
        text = f"export type {node.name} = {node.item_type}[];"
    elif kind == DeclarationKind.PRIMITIVE_ALIAS:
        text = f"export type {node.name} = {node.target};"
    else:
        raise TypeError(f"Cannot render {type(node).__name__}")

    if node.documentation is not None:
        text = f"{node.documentation.as_comment()}\n{text}"
    return text


def render_module(nodes: Iterable[Node]) -> str:
    """Render a module: import clauses, a blank line, then declarations."""
    nodes = list(nodes)
    imports = [render_node(n) for n in nodes if isinstance(n, ImportDeclaration)]
    declarations = [render_node(n) for n in nodes if not isinstance(n, ImportDeclaration)]

    sections = []
    if imports:
        sections.append("\n".join(imports))
    sections.extend(declarations)
    return "\n\n".join(sections) + "\n"
