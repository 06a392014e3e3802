"""Namespace definitions for the XSD and WSDL documents we read.

Based on the W3C XML Schema and WSDL 1.1 recommendations.
"""

# XML Schema
XSD = "http://www.w3.org/2001/XMLSchema"

# WSDL 1.1
WSDL = "http://schemas.xmlsoap.org/wsdl/"

# Prefixes used for tree keys, independent of the prefix a document binds
XSD_PREFIX = "xs"
WSDL_PREFIX = "wsdl"

CANONICAL_PREFIXES = {
    XSD: XSD_PREFIX,
    WSDL: WSDL_PREFIX,
}

# Wildcard namespace values that accept any element
ANY_NAMESPACE = "##any"
