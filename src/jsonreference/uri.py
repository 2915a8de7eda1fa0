"""URI parsing, serialization and reference resolution.

:func:`parse_url` splits a reference into scheme, authority, path, query
and fragment and applies the grammar checks a JSON Reference needs.  The
input is taken exactly as given: unlike :func:`urllib.parse.urlsplit`,
leading spaces are not stripped, so ``" http://x/"`` is rejected rather than
read as an absolute URL.  The path and fragment are kept in decoded form so
they can be classified and handed to a JSON Pointer parser.

:func:`resolve_reference` delegates RFC 3986 resolution to
:func:`urllib.parse.urljoin` on the serialized forms.

Opaque URIs (a scheme followed by something other than ``/``, such as
``urn:example:pet`` or ``mailto:a@example.com``) keep everything after the
scheme in :attr:`URL.opaque` and have an empty path.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote, unquote, urljoin

_SCHEME = re.compile(r"([A-Za-z][A-Za-z0-9+.\-]*):")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# Percent escapes in a host may only encode non-ASCII bytes (or "%" itself).
_ASCII_HOST_ESCAPE = re.compile(r"%(?!25)[0-7][0-9A-Fa-f]")
_OPTIONAL_PORT = re.compile(r"(:[0-9]*)?")

_UNRESERVED = string.ascii_letters + string.digits + "-._~"
_HOST_CHARS = frozenset(_UNRESERVED + "!$&'()*+,;=:[]<>\"%")
_USERINFO_CHARS = frozenset(_UNRESERVED + ":!$&'()*+,;=%@")

_PATH_SAFE = "$&+,/:;=@"
_FRAGMENT_SAFE = "$&+,/:;=?@!()*"
_HOST_SAFE = "!$&'()*+,;=:[]<>\""
_USERINFO_SAFE = "$&+,;="


class InvalidURLError(ValueError):
    """Raised when a string does not follow the URI grammar.

    Args:
        url: The rejected input string.
        reason: What the parser objected to.
    """

    def __init__(self, url: str, reason: str):
        super().__init__(f"parse {url!r}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(frozen=True)
class URL:
    """A parsed URI reference.

    ``path`` and ``fragment`` are percent-decoded; ``raw_query``, ``opaque``
    and ``userinfo`` are kept exactly as written.  ``host`` is decoded and
    includes the port, if any.
    """

    scheme: str = ""
    opaque: str = ""
    userinfo: Optional[str] = None
    host: str = ""
    path: str = ""
    raw_query: str = ""
    force_query: bool = False
    fragment: str = ""
    omit_host: bool = False

    @property
    def has_authority(self) -> bool:
        return bool(self.host) or self.userinfo is not None

    def escaped_path(self) -> str:
        if self.path == "*":
            return "*"
        return quote(self.path, safe=_PATH_SAFE, errors="surrogateescape")

    def escaped_fragment(self) -> str:
        return quote(self.fragment, safe=_FRAGMENT_SAFE, errors="surrogateescape")

    def escaped_userinfo(self) -> str:
        """Re-escape the user name and password, keeping the separating colon."""
        if self.userinfo is None:
            return ""
        username, colon, password = self.userinfo.partition(":")
        out = _escape_userinfo_part(username)
        if colon:
            out += ":" + _escape_userinfo_part(password)
        return out

    def __str__(self) -> str:
        out: list[str] = []
        if self.scheme:
            out.append(self.scheme + ":")

        if self.opaque:
            out.append(self.opaque)
        else:
            if self.scheme or self.has_authority:
                if not (self.omit_host and not self.has_authority):
                    if self.has_authority or self.path.startswith("/"):
                        out.append("//")
                    if self.userinfo is not None:
                        out.append(self.escaped_userinfo() + "@")
                    if self.host:
                        out.append(quote(self.host, safe=_HOST_SAFE, errors="surrogateescape"))
            path = self.escaped_path()
            if path and not path.startswith("/") and self.host:
                out.append("/")
            if not out and ":" in path.partition("/")[0]:
                # Keep "a:b" from being read back as scheme "a".
                out.append("./")
            out.append(path)

        if self.force_query or self.raw_query:
            out.append("?" + self.raw_query)
        if self.fragment:
            out.append("#" + self.escaped_fragment())
        return "".join(out)


def _escape_userinfo_part(part: str) -> str:
    return quote(unquote(part, errors="surrogateescape"), safe=_USERINFO_SAFE, errors="surrogateescape")


def parse_url(raw: str) -> URL:
    """Parse *raw* as an absolute URI or a relative reference.

    Args:
        raw: The string to parse. The empty string is a valid (empty)
            relative reference.

    Returns:
        The parsed :class:`URL`.

    Raises:
        InvalidURLError: If *raw* contains control characters, starts with a
            colon, has a colon in the first segment of a scheme-less path,
            holds malformed percent escapes, or has an invalid host, port or
            userinfo.
    """
    if _CONTROL_CHARS.search(raw):
        raise InvalidURLError(raw, "invalid control character in URL")
    if raw.startswith(":"):
        raise InvalidURLError(raw, "missing protocol scheme")

    match = _SCHEME.match(raw)
    scheme = match.group(1).lower() if match else ""
    rest = raw[match.end():] if match else raw

    rest, hash_mark, raw_fragment = rest.partition("#")
    hier, question_mark, query = rest.partition("?")
    force_query = bool(question_mark) and query == ""

    fragment = _unescape(raw, raw_fragment) if hash_mark else ""

    if scheme and not hier.startswith("/"):
        return URL(
            scheme=scheme,
            opaque=hier,
            raw_query=query,
            force_query=force_query,
            fragment=fragment,
        )

    if not scheme and ":" in hier.partition("/")[0]:
        raise InvalidURLError(raw, "first path segment in URL cannot contain colon")

    userinfo: Optional[str] = None
    host = ""
    omit_host = False
    if hier.startswith("//") and (scheme or not hier.startswith("///")):
        authority = hier[2:].partition("/")[0]
        path = hier[2 + len(authority):]
        userinfo, host = _parse_authority(raw, authority)
    else:
        path = hier
        omit_host = bool(scheme) and hier.startswith("/")

    return URL(
        scheme=scheme,
        userinfo=userinfo,
        host=host,
        path=_unescape(raw, path),
        raw_query=query,
        force_query=force_query,
        fragment=fragment,
        omit_host=omit_host,
    )


def _unescape(raw: str, value: str) -> str:
    """Decode percent escapes in *value*, rejecting malformed ones."""
    match = _BAD_ESCAPE.search(value)
    if match:
        raise InvalidURLError(raw, f"invalid URL escape {value[match.start():match.start() + 3]!r}")
    return unquote(value, errors="surrogateescape")


def _parse_authority(raw: str, authority: str) -> tuple[Optional[str], str]:
    userinfo: Optional[str] = None
    host = authority
    if "@" in authority:
        userinfo, _, host = authority.rpartition("@")
        if any(ch not in _USERINFO_CHARS for ch in userinfo):
            raise InvalidURLError(raw, "invalid userinfo")
        _unescape(raw, userinfo)
    return userinfo, _parse_host(raw, host)


def _parse_host(raw: str, host: str) -> str:
    if host.startswith("["):
        end = host.find("]")
        if end < 0:
            raise InvalidURLError(raw, "missing ']' in host")
        port = host[end + 1:]
    else:
        colon = host.rfind(":")
        port = host[colon:] if colon >= 0 else ""
    if not _OPTIONAL_PORT.fullmatch(port):
        raise InvalidURLError(raw, f"invalid port {port!r} after host")

    for ch in host:
        if ch.isascii() and ch not in _HOST_CHARS:
            raise InvalidURLError(raw, f"invalid character {ch!r} in host name")
    match = _ASCII_HOST_ESCAPE.search(host)
    if match:
        raise InvalidURLError(raw, f"invalid URL escape {match.group(0)!r}")
    return _unescape(raw, host)


def resolve_reference(base: URL, ref: URL) -> str:
    """Resolve *ref* against *base* and return the resolved URI string.

    Both values are serialized and joined with :func:`urllib.parse.urljoin`,
    so the usual RFC 3986 rules apply: a child with no path, query or
    fragment keeps the whole base (fragment included), a child fragment
    replaces the base fragment, and dot segments are removed.  An empty
    base returns *ref* unchanged.

    ``urljoin`` only merges paths for the hierarchical schemes listed in
    :data:`urllib.parse.uses_relative` (``http``, ``https``, ``file``,
    ``ftp`` and friends).  Under any other scheme, opaque ones such as
    ``urn:`` included, a relative *ref* is returned as it is:
    ``urn:a:b`` joined with ``c`` gives ``c``.  Unconsumed ``..`` segments
    of a relative result are dropped (``a/b`` joined with ``../../c`` gives
    ``c``).
    """
    return urljoin(str(base), str(ref))
