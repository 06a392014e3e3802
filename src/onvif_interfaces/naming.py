"""Identifier normalization for generated declarations."""

from __future__ import annotations

import re

# Alias for the schema type "Object", which would shadow the global Object
OBJECT_ALIAS = "OnvifObject"

# Length of the namespace segment stripped from ref attributes ("xmime:")
REF_PREFIX_LENGTH = 6

_SEPARATORS = re.compile(r"[-.]")


def clean_name(name: str) -> str:
    """Make a schema name usable as a declaration name."""
    if name == "Object":
        return OBJECT_ALIAS
    return _SEPARATORS.sub("", name)


def camel_case(name: str) -> str:
    """Make a schema name usable as a property name.

    The first character is lower-cased only when the second one is a
    lower-case letter, so acronyms like ``IPv4Address`` are kept intact.
    Names that still contain separators are quoted.
    """
    second = name[1:2]
    if second and second.upper() != second:
        name = name[0].lower() + name[1:]
    if _SEPARATORS.search(name):
        name = f"'{name}'"
    return name


def local_name(qname: str) -> str:
    """Strip the namespace prefix from a qualified name."""
    return qname.split(":", 1)[-1]


def ref_field_name(ref: str) -> str:
    """Derive a property name from a ref attribute (e.g. ``xmime:contentType``)."""
    return ref[REF_PREFIX_LENGTH:]
