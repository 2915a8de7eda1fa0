"""JSON Reference values: parsing, classification and parent/child resolution.

A JSON Reference is a URI whose fragment, when present, is a JSON Pointer
(RFC 6901) into the referenced document, e.g. the ``$ref`` values found in
JSON Schema and OpenAPI documents::

    {"$ref": "#/components/schemas/Pet"}
    {"$ref": "common.yaml#/definitions/Error"}
    {"$ref": "https://example.com/schemas/pet.json"}

:func:`parse` turns such a string into an immutable :class:`Reference` that
records the shape of the reference as a set of flags:

* ``has_full_url`` -- scheme and host are both present;
* ``has_url_path_only`` -- otherwise, a path is present;
* ``has_fragment_only`` -- otherwise, no query and a non-empty fragment;
* ``has_file_scheme`` -- the scheme is ``file``;
* ``has_full_file_path`` -- the path starts with ``/``.

The first three form an else-if chain and are mutually exclusive; the last
two are independent of them.

Typical usage::

    parent = parse("http://example.com/a/b.json")
    child = parse("c.json#/x")
    str(parent.inherits(child))   # 'http://example.com/a/c.json#/x'
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from jsonpointer import JsonPointer, JsonPointerException

from jsonreference.exceptions import (
    MalformedReferenceError,
    MissingChildURLError,
    ReferenceFault,
)
from jsonreference.normalize import normalize_url
from jsonreference.uri import URL, InvalidURLError, parse_url, resolve_reference

logger = logging.getLogger(__name__)

FRAGMENT_MARK = "#"


def _empty_pointer() -> JsonPointer:
    return JsonPointer("")


@dataclass(frozen=True, repr=False)
class Reference:
    """A parsed JSON Reference.

    Instances are built by :func:`parse` (or :func:`must_parse`).  Calling
    ``Reference()`` directly yields the zero value: no URL, the empty
    pointer and every flag false.

    Attributes:
        url: The normalized URL, or ``None`` for the zero value.
        pointer: The JSON Pointer taken from the URL fragment.  A missing
            fragment, or one that is not a valid pointer, gives the empty
            pointer (the whole document).
    """

    url: Optional[URL] = None
    pointer: JsonPointer = field(default_factory=_empty_pointer)
    has_full_url: bool = False
    has_url_path_only: bool = False
    has_fragment_only: bool = False
    has_file_scheme: bool = False
    has_full_file_path: bool = False

    def has_only_fragment(self) -> bool:
        """Return ``True`` if the URL has neither a host nor a path."""
        if self.url is None:
            return False
        return not self.url.host and not self.url.path

    def is_canonical(self) -> bool:
        """Return ``True`` if the reference needs no base to be resolved.

        That is an absolute path under the ``file`` scheme, or a URL with
        both a scheme and a host for any other scheme.
        """
        if self.has_file_scheme:
            return self.has_full_file_path
        return self.has_full_url

    def is_root(self) -> bool:
        """Return ``True`` if the reference denotes a whole document.

        Canonical references and path-only references are never roots, and
        neither is anything with a fragment.
        """
        return (
            self.url is not None
            and not self.is_canonical()
            and not self.has_url_path_only
            and not self.url.fragment
        )

    def inherits(self, child: Reference) -> Reference:
        """Resolve *child* against this reference.

        Args:
            child: The reference to resolve, typically a ``$ref`` found
                inside the document this reference points to.

        Returns:
            A new :class:`Reference`.  When this reference has no URL the
            child is returned unchanged.

        Raises:
            MissingChildURLError: If *child* has no URL.
            MalformedReferenceError: If the resolved URL cannot be parsed
                back (not expected for two valid references).
        """
        if child.url is None:
            raise MissingChildURLError("Cannot resolve a child reference without a URL")
        if self.url is None:
            return child

        resolved = resolve_reference(self.url, child.url)
        logger.debug("Resolved %r against %r -> %r", str(child), str(self), resolved)
        return parse(resolved)

    def __str__(self) -> str:
        if self.url is not None:
            return str(self.url)
        if self.has_only_fragment():
            return FRAGMENT_MARK + self.pointer.path
        return self.pointer.path

    def __repr__(self) -> str:
        return f"Reference({str(self)!r})"


def parse(reference: str) -> Reference:
    """Parse a JSON Reference string.

    Args:
        reference: Any URI reference, e.g. ``"#/definitions/Pet"``,
            ``"schema.json"`` or ``"file:///abs/schema.json"``.

    Returns:
        The parsed :class:`Reference`.

    Raises:
        MalformedReferenceError: If *reference* is not a valid URI
            reference.
    """
    try:
        url = normalize_url(parse_url(reference))
    except InvalidURLError as exc:
        raise MalformedReferenceError(reference, exc.reason) from exc

    has_full_url = has_url_path_only = has_fragment_only = False
    if url.scheme and url.host:
        has_full_url = True
    elif url.path:
        has_url_path_only = True
    elif not url.raw_query and url.fragment:
        has_fragment_only = True

    try:
        pointer = JsonPointer(url.fragment)
    except JsonPointerException:
        # A fragment that is not a pointer just means "no sub-location".
        logger.debug("Fragment %r of %r is not a JSON pointer", url.fragment, reference)
        pointer = _empty_pointer()

    return Reference(
        url=url,
        pointer=pointer,
        has_full_url=has_full_url,
        has_url_path_only=has_url_path_only,
        has_fragment_only=has_fragment_only,
        has_file_scheme=url.scheme == "file",
        has_full_file_path=url.path.startswith("/"),
    )


def must_parse(reference: str) -> Reference:
    """Parse *reference*, raising :class:`ReferenceFault` if it is malformed.

    Meant for references hard-coded by the caller, where a parse failure is
    a bug rather than bad input.
    """
    try:
        return parse(reference)
    except MalformedReferenceError as exc:
        raise ReferenceFault(str(exc)) from exc
