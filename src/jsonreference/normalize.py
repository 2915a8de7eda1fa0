"""Safe URL normalization applied to every parsed reference.

Only transformations that never change what a URL points to are applied:

* lowercase the scheme and the host;
* drop the default port (``:80`` for ``http``, ``:443`` for ``https``);
* collapse runs of ``/`` in the path into a single ``/``.

Percent-encoding is normalized as a side effect of :class:`~jsonreference.uri.URL`
keeping its path and fragment decoded and re-escaping them on output.
"""

from __future__ import annotations

import re
from dataclasses import replace

from jsonreference.uri import URL

_PORT = re.compile(r"(:\d+)/?$")
_DUPLICATE_SLASHES = re.compile(r"/{2,}")

DEFAULT_PORTS = {
    "http": ":80",
    "https": ":443",
}


def normalize_url(url: URL) -> URL:
    """Return a normalized copy of *url*.

    Example::

        >>> str(normalize_url(parse_url("HTTP://Example.COM:80//a//b.json")))
        'http://example.com/a/b.json'
    """
    scheme = url.scheme.lower()
    host = url.host.lower()
    if host:
        default_port = DEFAULT_PORTS.get(scheme)
        host = _PORT.sub(lambda m: "" if m.group(0) == default_port else m.group(0), host)
    path = _DUPLICATE_SLASHES.sub("/", url.path)
    return replace(url, scheme=scheme, host=host, path=path)
