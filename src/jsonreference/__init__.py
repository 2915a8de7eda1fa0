"""jsonreference -- parse, classify and resolve JSON References.

A JSON Reference is a URI whose fragment is a JSON Pointer, as used by
``$ref`` values in JSON Schema and OpenAPI documents.  This package parses
such strings into immutable :class:`~jsonreference.reference.Reference`
values, reports their shape (full URL, path only, fragment only, file
scheme, absolute file path) and resolves child references against a parent
following RFC 3986.

Typical usage::

    from jsonreference import parse

    ref = parse("http://example.com/schema.json#/definitions/Pet")
    ref.is_canonical()         # True
    ref.pointer.path           # '/definitions/Pet'
    str(ref.inherits(parse("other.json#/x")))
    # 'http://example.com/other.json#/x'

Modules:
    reference: The Reference value type, parse and must_parse.
    uri: URI parsing, serialization and RFC 3986 resolution.
    normalize: URL normalization applied on every parse.
    exceptions: Exception hierarchy with exit-code mapping.
    app: Typer application behind the ``jsonref`` command.
"""

from jsonreference.exceptions import (
    JsonReferenceError,
    MalformedReferenceError,
    MissingChildURLError,
    ReferenceFault,
)
from jsonreference.reference import Reference, must_parse, parse

__version__ = "0.1.0"

__all__ = [
    "JsonReferenceError",
    "MalformedReferenceError",
    "MissingChildURLError",
    "Reference",
    "ReferenceFault",
    "must_parse",
    "parse",
]
