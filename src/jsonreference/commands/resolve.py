"""Resolve command -- resolve a child reference against a parent.

``jsonref resolve CHILD --base PARENT`` prints the reference obtained by
resolving CHILD against PARENT.  Without ``--base`` the parent comes from
``JSONREF_BASE`` or the ``base`` key of ``./jsonref.json``; with none of
those the child is resolved against the empty reference.
"""

from __future__ import annotations

from typing import Optional

import typer

from jsonreference.config import resolve_config
from jsonreference.exceptions import JsonReferenceError
from jsonreference.output import OutputFormat, debug, error, get_output, info
from jsonreference.reference import parse


def resolve_command(
    child: str = typer.Argument(..., help="Reference to resolve (e.g. a $ref value)."),
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Parent reference to resolve against."
    ),
) -> None:
    """Resolve CHILD against a parent reference.

    Example::

        jsonref resolve 'c.json#/x' --base http://example.com/a/b.json
        # http://example.com/a/c.json#/x
    """
    try:
        settings = resolve_config(cli_base=base)
        if settings.base is None:
            info("No base reference configured; resolving against the empty reference")
        parent = parse(settings.base or "")
        debug(f"Resolving against base {str(parent)!r}")
        resolved = parent.inherits(parse(child))
    except JsonReferenceError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    output = get_output()
    if output.format == OutputFormat.JSON:
        output.format_response(
            {"base": str(parent), "child": child, "resolved": str(resolved)}
        )
    else:
        output.print_data(str(resolved))
