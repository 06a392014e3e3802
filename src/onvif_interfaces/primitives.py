"""Mapping from XML Schema primitives to TypeScript types.

Also defines the shared ``basics`` module: named aliases that the mapping
refers to but that no schema in the corpus declares.
"""

from __future__ import annotations

# Universal unknown type of the target language
UNKNOWN_TYPE = "any"

# Global target types that are capitalized but never imported
GLOBAL_TYPES = frozenset({"Date"})

# Qualified schema name -> TypeScript name
PRIMITIVE_TYPE_MAP: dict[str, str] = {
    # Numbers
    "xs:double": "number",
    "xs:float": "number",
    "xs:int": "number",
    "xs:integer": "number",
    "xs:short": "number",
    "xs:signedInt": "number",
    "xs:unsignedInt": "number",
    "xs:unsignedShort": "number",
    "xs:nonNegativeInteger": "number",
    "xs:positiveInteger": "PositiveInteger",
    # Strings
    "xs:string": "string",
    "xs:normalizedString": "string",
    "xs:token": "string",
    "xs:anyURI": "AnyURI",
    "xs:boolean": "boolean",
    # Dates and times
    "xs:date": "Date",
    "xs:dateTime": "Date",
    "xs:time": "string",
    # Opaque or out-of-scope types
    "xs:duration": UNKNOWN_TYPE,
    "xs:hexBinary": UNKNOWN_TYPE,
    "xs:base64Binary": UNKNOWN_TYPE,
    "xs:anyType": UNKNOWN_TYPE,
    "xs:anySimpleType": UNKNOWN_TYPE,
    "xs:QName": UNKNOWN_TYPE,
    "wsnt:FilterType": UNKNOWN_TYPE,
    "wsnt:NotificationMessageHolderType": UNKNOWN_TYPE,
    "wsnt:TopicExpressionType": UNKNOWN_TYPE,
    "wsnt:QueryExpressionType": UNKNOWN_TYPE,
    "wsnt:AbsoluteOrRelativeTimeType": UNKNOWN_TYPE,
    "wsa:EndpointReferenceType": UNKNOWN_TYPE,
    "soapenv:Envelope": UNKNOWN_TYPE,
    "soapenv:Fault": UNKNOWN_TYPE,
    "mpqf:MpegQueryType": UNKNOWN_TYPE,
    # Renamed to avoid the global Object
    "tt:Object": "OnvifObject",
}

# Declarations of the shared basics module: name -> aliased type
BASIC_TYPES: dict[str, str] = {
    "AnyURI": "string",
    "FilterType": UNKNOWN_TYPE,
    "NCName": "string",
    "PositiveInteger": "number",
}


def map_data_type(xsd_type: str | None) -> str:
    """Map a qualified schema type name to a TypeScript type name.

    Unknown names fall back to their local name, a forward reference to a
    type declared somewhere in the corpus. A missing name maps to ``any``.
    """
    if not xsd_type:
        return UNKNOWN_TYPE
    mapped = PRIMITIVE_TYPE_MAP.get(xsd_type)
    if mapped is not None:
        return mapped
    return xsd_type.split(":", 1)[-1]


def is_named_type(type_name: str) -> bool:
    """Check if a mapped type name refers to a declaration that needs importing."""
    if not type_name or type_name in GLOBAL_TYPES:
        return False
    return type_name[0].isupper()
